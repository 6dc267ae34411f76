from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, List

from . import syntax
from .environment import Environment

if TYPE_CHECKING:
    from .classes import LoxInstance
    from .main import Interpreter


class LoxCallable:
    """Anything a call expression can invoke: functions, natives, classes."""

    def arity(self) -> int:
        raise NotImplementedError

    def call(self, interpreter: "Interpreter", arguments: List[Any]) -> Any:
        raise NotImplementedError


class LoxFunction(LoxCallable):
    """
    A user-defined function closed over the environment it was declared in.

    Methods are stored unbound on their class; ``bind`` wraps the closure in
    a fresh scope that defines ``this`` so the receiver is visible to the
    body without mutating the shared closure.
    """

    __slots__ = ("declaration", "closure", "is_initializer")

    def __init__(self, declaration: syntax.Function, closure: Environment, is_initializer: bool = False):
        self.declaration = declaration
        self.closure = closure
        self.is_initializer = is_initializer

    @property
    def name(self) -> str:
        return self.declaration.name.lexeme

    def __repr__(self) -> str:
        return f"<fn {self.name}>"

    def bind(self, instance: "LoxInstance") -> LoxFunction:
        environment = Environment(self.closure)
        environment.define("this", instance)
        return LoxFunction(self.declaration, environment, self.is_initializer)

    def arity(self) -> int:
        return len(self.declaration.params)

    def call(self, interpreter: "Interpreter", arguments: List[Any]) -> Any:
        environment = Environment(self.closure)
        for param, argument in zip(self.declaration.params, arguments):
            environment.define(param.lexeme, argument, param)

        outcome = interpreter.execute_block(self.declaration.body, environment)

        if self.is_initializer:
            return self.closure.get_at(0, "this")
        if outcome is not None:
            return outcome.value
        return None


class NativeFunction(LoxCallable):
    """A host-implemented function exposed to programs as a global."""

    __slots__ = ("name", "_arity", "_fn")

    def __init__(self, name: str, arity: int, fn: Callable[..., Any]):
        self.name = name
        self._arity = arity
        self._fn = fn

    def __repr__(self) -> str:
        return "<native fn>"

    def arity(self) -> int:
        return self._arity

    def call(self, interpreter: "Interpreter", arguments: List[Any]) -> Any:
        return self._fn(*arguments)
