from __future__ import annotations

import math
from typing import Any

from . import syntax
from .classes import LoxClass, LoxInstance
from .errors import (
    FunctionCallIsNotSupportedHere,
    OperandMustBeANumber,
    StackOverflow,
    UnmatchedFunctionArguments,
)
from .functions import LoxCallable, LoxFunction, NativeFunction
from .tokens import Token


def format_number(value: float) -> str:
    if math.isnan(value):
        return "nan"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if value.is_integer():
        return str(int(value))
    return repr(value)


class HelperMixin:
    # ----------------------------
    # Values
    # ----------------------------

    def is_truthy(self, value: Any) -> bool:
        # Only `false` is falsy.
        return value is not False

    def is_equal(self, left: Any, right: Any) -> bool:
        if type(left) is not type(right):
            return False
        if left is None:
            return True
        if type(left) is float and math.isnan(left) and math.isnan(right):
            return True
        return left == right

    def stringify(self, value: Any) -> str:
        if value is None:
            return "nil"
        if value is True:
            return "true"
        if value is False:
            return "false"
        if type(value) is float:
            return format_number(value)
        if isinstance(value, str):
            return value
        if isinstance(value, (LoxFunction, NativeFunction, LoxClass, LoxInstance)):
            return repr(value)
        raise TypeError(f"not a Lox value: {type(value).__name__}")

    def check_number_operand(self, operator: Token, operand: Any) -> float:
        if type(operand) is float:
            return operand
        raise OperandMustBeANumber(operator)

    def check_number_operands(self, operator: Token, left: Any, right: Any) -> tuple[float, float]:
        if type(left) is float and type(right) is float:
            return left, right
        raise OperandMustBeANumber(operator)

    # ----------------------------
    # Variables
    # ----------------------------

    def look_up_variable(self, name: Token, node: syntax.Expr) -> Any:
        distance = self.locals.get(node)
        if distance is None:
            return self.globals.get(name)
        return self.environment.get_at(distance, name.lexeme)

    # ----------------------------
    # Calls
    # ----------------------------

    def call_value(self, callee: Any, arguments: list[Any], paren: Token) -> Any:
        if not isinstance(callee, LoxCallable):
            raise FunctionCallIsNotSupportedHere(paren)
        expected = callee.arity()
        if len(arguments) != expected:
            raise UnmatchedFunctionArguments(paren, expected, len(arguments))
        try:
            return callee.call(self, arguments)
        except RecursionError:
            raise StackOverflow(paren) from None
