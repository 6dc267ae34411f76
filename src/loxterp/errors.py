from __future__ import annotations

from typing import Optional

from .tokens import Token


class LoxError(Exception):
    """Base for every failure reported by the resolver or the interpreter."""

    default_message = "Error."

    def __init__(self, token: Optional[Token] = None, message: str | None = None, *, name: str | None = None):
        self.token = token
        self.name = name if name is not None else (token.lexeme if token is not None else None)
        self.line = token.line if token is not None else None
        self.message = message if message is not None else self.default_message
        super().__init__(self._format())

    def _format(self) -> str:
        where = ""
        if self.name is not None:
            where = f" at '{self.name}'"
        if self.line is None:
            return f"Error{where}: {self.message}"
        return f"[line {self.line}] Error{where}: {self.message}"


# ----- static (resolution-time) -----


class ResolveError(LoxError):
    pass


class CannotReadLocalVariableInInitializer(ResolveError):
    default_message = "Can't read local variable in its own initializer."


class ReturnOutsideFunction(ResolveError):
    default_message = "Can't return from top-level code."


class InvalidThisUsage(ResolveError):
    default_message = "Can't use 'this' outside of a class."


class InvalidSuperUsage(ResolveError):
    default_message = "Can't use 'super' outside of a class with a superclass."


class ClassInheritsFromItself(ResolveError):
    default_message = "A class can't inherit from itself."


# ----- dynamic (evaluation-time) -----


class LoxRuntimeError(LoxError):
    pass


class UndefinedVariable(LoxRuntimeError):
    default_message = "Undefined variable."


class UndefinedProperty(LoxRuntimeError):
    default_message = "Undefined property."


class OperandMustBeANumber(LoxRuntimeError):
    default_message = "Operand must be a number."


class OperandMustBeANumberOrString(LoxRuntimeError):
    default_message = "Operands must be two numbers or two strings, or a number and a string."


class FunctionCallIsNotSupportedHere(LoxRuntimeError):
    default_message = "Can only call functions and classes."


class UnmatchedFunctionArguments(LoxRuntimeError):
    def __init__(self, token: Optional[Token], expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(token, f"Expected {expected} arguments but got {actual}.")


class OnlyInstancesCanHaveProperty(LoxRuntimeError):
    default_message = "Only instances have properties."


class OnlyInstancesCanHaveFields(LoxRuntimeError):
    default_message = "Only instances have fields."


class SuperClassMustBeAClass(LoxRuntimeError):
    default_message = "Superclass must be a class."


# Raised by the resolver for locals and by Environment.define for globals.
class DuplicateVariableName(ResolveError, LoxRuntimeError):
    default_message = "Already a variable with this name in this scope."


class StackOverflow(LoxRuntimeError):
    default_message = "Stack overflow."
