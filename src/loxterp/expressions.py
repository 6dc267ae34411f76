from __future__ import annotations

import math
from typing import Any

from . import syntax
from .classes import LoxInstance
from .errors import (
    OnlyInstancesCanHaveFields,
    OnlyInstancesCanHaveProperty,
    OperandMustBeANumberOrString,
    UndefinedProperty,
)
from .helpers import format_number
from .tokens import Token, TokenType


class ExpressionMixin:
    def _divide(self, left: float, right: float) -> float:
        try:
            return left / right
        except ZeroDivisionError:
            if left == 0.0 or math.isnan(left):
                return math.nan
            return math.copysign(math.inf, left) * math.copysign(1.0, right)

    def _add(self, operator: Token, left: Any, right: Any) -> Any:
        left_num = type(left) is float
        right_num = type(right) is float
        if left_num and right_num:
            return left + right
        left_str = isinstance(left, str)
        right_str = isinstance(right, str)
        if left_str and right_str:
            return left + right
        if left_num and right_str:
            return format_number(left) + right
        if left_str and right_num:
            return left + format_number(right)
        raise OperandMustBeANumberOrString(operator)

    def eval_Literal(self, node: syntax.Literal) -> Any:
        return node.value

    def eval_Grouping(self, node: syntax.Grouping) -> Any:
        return self.eval_expr(node.expression)

    def eval_Unary(self, node: syntax.Unary) -> Any:
        right = self.eval_expr(node.right)
        op = node.operator.type
        if op is TokenType.BANG:
            return not self.is_truthy(right)
        if op is TokenType.MINUS:
            return -self.check_number_operand(node.operator, right)
        raise NotImplementedError(f"Unary operator not supported: {node.operator.lexeme}")

    def eval_Binary(self, node: syntax.Binary) -> Any:
        left = self.eval_expr(node.left)
        right = self.eval_expr(node.right)
        operator = node.operator
        op = operator.type

        if op is TokenType.EQUAL_EQUAL:
            return self.is_equal(left, right)
        if op is TokenType.BANG_EQUAL:
            return not self.is_equal(left, right)
        if op is TokenType.PLUS:
            return self._add(operator, left, right)

        a, b = self.check_number_operands(operator, left, right)
        if op is TokenType.MINUS:
            return a - b
        if op is TokenType.STAR:
            return a * b
        if op is TokenType.SLASH:
            return self._divide(a, b)
        if op is TokenType.GREATER:
            return a > b
        if op is TokenType.GREATER_EQUAL:
            return a >= b
        if op is TokenType.LESS:
            return a < b
        if op is TokenType.LESS_EQUAL:
            return a <= b
        raise NotImplementedError(f"Binary operator not supported: {operator.lexeme}")

    def eval_Logical(self, node: syntax.Logical) -> Any:
        left = self.eval_expr(node.left)
        if node.operator.type is TokenType.OR:
            if self.is_truthy(left):
                return left
        elif not self.is_truthy(left):
            return left
        return self.eval_expr(node.right)

    def eval_Variable(self, node: syntax.Variable) -> Any:
        return self.look_up_variable(node.name, node)

    def eval_Assign(self, node: syntax.Assign) -> Any:
        value = self.eval_expr(node.value)
        distance = self.locals.get(node)
        if distance is None:
            self.globals.assign(node.name, value)
        else:
            self.environment.assign_at(distance, node.name, value)
        return value

    def eval_Call(self, node: syntax.Call) -> Any:
        callee = self.eval_expr(node.callee)
        arguments = [self.eval_expr(argument) for argument in node.arguments]
        return self.call_value(callee, arguments, node.paren)

    def eval_Get(self, node: syntax.Get) -> Any:
        obj = self.eval_expr(node.object)
        if isinstance(obj, LoxInstance):
            return obj.get(node.name)
        raise OnlyInstancesCanHaveProperty(node.name)

    def eval_Set(self, node: syntax.Set) -> Any:
        obj = self.eval_expr(node.object)
        if not isinstance(obj, LoxInstance):
            raise OnlyInstancesCanHaveFields(node.name)
        value = self.eval_expr(node.value)
        obj.set(node.name, value)
        return value

    def eval_This(self, node: syntax.This) -> Any:
        return self.look_up_variable(node.keyword, node)

    def eval_Super(self, node: syntax.Super) -> Any:
        distance = self.locals.get(node)
        if distance is None:
            # unresolved trees fall back to a dynamic chain search
            superclass = self.environment.get(node.keyword)
            instance = self.environment.get(Token(TokenType.THIS, "this", None, node.keyword.line))
        else:
            superclass = self.environment.get_at(distance, "super")
            # `this` lives in the scope just inside the one binding `super`
            instance = self.environment.get_at(distance - 1, "this")
        method = superclass.find_method(node.method.lexeme)
        if method is None:
            raise UndefinedProperty(node.method)
        return method.bind(instance)
