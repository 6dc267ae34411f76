from .classes import LoxClass, LoxInstance
from .core import RunResult
from .environment import Environment
from .errors import (
    CannotReadLocalVariableInInitializer,
    ClassInheritsFromItself,
    DuplicateVariableName,
    FunctionCallIsNotSupportedHere,
    InvalidSuperUsage,
    InvalidThisUsage,
    LoxError,
    LoxRuntimeError,
    OnlyInstancesCanHaveFields,
    OnlyInstancesCanHaveProperty,
    OperandMustBeANumber,
    OperandMustBeANumberOrString,
    ResolveError,
    ReturnOutsideFunction,
    StackOverflow,
    SuperClassMustBeAClass,
    UndefinedProperty,
    UndefinedVariable,
    UnmatchedFunctionArguments,
)
from .functions import LoxCallable, LoxFunction, NativeFunction
from .main import Interpreter
from .resolver import Resolver
from .tokens import Token, TokenType

__all__ = [
    "CannotReadLocalVariableInInitializer",
    "ClassInheritsFromItself",
    "DuplicateVariableName",
    "Environment",
    "FunctionCallIsNotSupportedHere",
    "Interpreter",
    "InvalidSuperUsage",
    "InvalidThisUsage",
    "LoxCallable",
    "LoxClass",
    "LoxError",
    "LoxFunction",
    "LoxInstance",
    "LoxRuntimeError",
    "NativeFunction",
    "OnlyInstancesCanHaveFields",
    "OnlyInstancesCanHaveProperty",
    "OperandMustBeANumber",
    "OperandMustBeANumberOrString",
    "ResolveError",
    "Resolver",
    "ReturnOutsideFunction",
    "RunResult",
    "StackOverflow",
    "SuperClassMustBeAClass",
    "Token",
    "TokenType",
    "UndefinedProperty",
    "UndefinedVariable",
    "UnmatchedFunctionArguments",
]
