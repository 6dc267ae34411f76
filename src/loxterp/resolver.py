"""
Static scope analysis run once over a program before it is interpreted.

For every variable reference and assignment inside a local scope, the
resolver records how many environments separate the use from the
declaration. References it cannot find in any open scope are left
unrecorded and looked up as globals at runtime.
"""

from __future__ import annotations

import enum
import logging
from typing import TYPE_CHECKING, Dict, List

from . import syntax
from .errors import (
    CannotReadLocalVariableInInitializer,
    ClassInheritsFromItself,
    DuplicateVariableName,
    InvalidSuperUsage,
    InvalidThisUsage,
    ReturnOutsideFunction,
)
from .tokens import Token

if TYPE_CHECKING:
    from .main import Interpreter

logger = logging.getLogger(__name__)


class FunctionType(enum.Enum):
    NONE = "none"
    FUNCTION = "function"


class ClassType(enum.Enum):
    NONE = "none"
    CLASS = "class"
    SUBCLASS = "subclass"


class Resolver:
    def __init__(self, interpreter: "Interpreter"):
        self.interpreter = interpreter
        # name -> "fully initialized"
        self.scopes: List[Dict[str, bool]] = []
        self.current_function = FunctionType.NONE
        self.current_class = ClassType.NONE
        # expression node -> hop count, handed to the interpreter once the pass succeeds
        self.depths: Dict[syntax.Expr, int] = {}

    # ----- dispatch -----

    def resolve(self, statements: list[syntax.Stmt]) -> None:
        self.depths = {}
        self._resolve_all(statements)
        for node, depth in self.depths.items():
            self.interpreter.resolve_local(node, depth)

    def _resolve_all(self, statements: list[syntax.Stmt]) -> None:
        for stmt in statements:
            self.resolve_stmt(stmt)

    def resolve_stmt(self, node: syntax.Stmt) -> None:
        m = getattr(self, f"stmt_{node.__class__.__name__}", None)
        if m is None:
            raise NotImplementedError(f"Statement not supported: {node.__class__.__name__}")
        m(node)

    def resolve_expr(self, node: syntax.Expr) -> None:
        m = getattr(self, f"expr_{node.__class__.__name__}", None)
        if m is None:
            raise NotImplementedError(f"Expression not supported: {node.__class__.__name__}")
        m(node)

    # ----- scope bookkeeping -----

    def _begin_scope(self) -> None:
        self.scopes.append({})

    def _end_scope(self) -> None:
        self.scopes.pop()

    def _declare(self, name: Token) -> None:
        if not self.scopes:
            return
        scope = self.scopes[-1]
        if name.lexeme in scope:
            raise DuplicateVariableName(name)
        scope[name.lexeme] = False

    def _define(self, name: Token) -> None:
        if not self.scopes:
            return
        self.scopes[-1][name.lexeme] = True

    def _resolve_local(self, node: syntax.Expr, name: Token) -> None:
        for index in range(len(self.scopes) - 1, -1, -1):
            if name.lexeme in self.scopes[index]:
                depth = len(self.scopes) - 1 - index
                logger.debug("resolved %r (line %s) at depth %d", name.lexeme, name.line, depth)
                self.depths[node] = depth
                return

    def _resolve_function(self, node: syntax.Function, kind: FunctionType) -> None:
        enclosing_function = self.current_function
        self.current_function = kind
        self._begin_scope()
        try:
            for param in node.params:
                self._declare(param)
                self._define(param)
            self._resolve_all(node.body)
        finally:
            self._end_scope()
            self.current_function = enclosing_function

    # ----- statements -----

    def stmt_Block(self, node: syntax.Block) -> None:
        self._begin_scope()
        try:
            self._resolve_all(node.statements)
        finally:
            self._end_scope()

    def stmt_Class(self, node: syntax.Class) -> None:
        enclosing_class = self.current_class
        self.current_class = ClassType.CLASS
        self._declare(node.name)
        self._define(node.name)

        superclass = node.superclass
        if superclass is not None and superclass.name.lexeme == node.name.lexeme:
            raise ClassInheritsFromItself(superclass.name)

        opened = 0
        try:
            if superclass is not None:
                self.current_class = ClassType.SUBCLASS
                self.resolve_expr(superclass)
                self._begin_scope()
                opened += 1
                self.scopes[-1]["super"] = True

            self._begin_scope()
            opened += 1
            self.scopes[-1]["this"] = True

            for method in node.methods:
                self._resolve_function(method, FunctionType.FUNCTION)
        finally:
            for _ in range(opened):
                self._end_scope()
            self.current_class = enclosing_class

    def stmt_Expression(self, node: syntax.Expression) -> None:
        self.resolve_expr(node.expression)

    def stmt_Function(self, node: syntax.Function) -> None:
        self._declare(node.name)
        self._define(node.name)
        self._resolve_function(node, FunctionType.FUNCTION)

    def stmt_If(self, node: syntax.If) -> None:
        self.resolve_expr(node.condition)
        self.resolve_stmt(node.then_branch)
        if node.else_branch is not None:
            self.resolve_stmt(node.else_branch)

    def stmt_Print(self, node: syntax.Print) -> None:
        self.resolve_expr(node.expression)

    def stmt_Return(self, node: syntax.Return) -> None:
        if self.current_function is FunctionType.NONE:
            raise ReturnOutsideFunction(node.keyword)
        if node.value is not None:
            self.resolve_expr(node.value)

    def stmt_Var(self, node: syntax.Var) -> None:
        self._declare(node.name)
        if node.initializer is not None:
            self.resolve_expr(node.initializer)
        self._define(node.name)

    def stmt_While(self, node: syntax.While) -> None:
        self.resolve_expr(node.condition)
        self.resolve_stmt(node.body)

    # ----- expressions -----

    def expr_Assign(self, node: syntax.Assign) -> None:
        self.resolve_expr(node.value)
        self._resolve_local(node, node.name)

    def expr_Binary(self, node: syntax.Binary) -> None:
        self.resolve_expr(node.left)
        self.resolve_expr(node.right)

    def expr_Call(self, node: syntax.Call) -> None:
        self.resolve_expr(node.callee)
        for argument in node.arguments:
            self.resolve_expr(argument)

    def expr_Get(self, node: syntax.Get) -> None:
        self.resolve_expr(node.object)

    def expr_Grouping(self, node: syntax.Grouping) -> None:
        self.resolve_expr(node.expression)

    def expr_Literal(self, node: syntax.Literal) -> None:
        return

    def expr_Logical(self, node: syntax.Logical) -> None:
        self.resolve_expr(node.left)
        self.resolve_expr(node.right)

    def expr_Set(self, node: syntax.Set) -> None:
        self.resolve_expr(node.value)
        self.resolve_expr(node.object)

    def expr_Super(self, node: syntax.Super) -> None:
        if self.current_class is not ClassType.SUBCLASS:
            raise InvalidSuperUsage(node.keyword)
        self._resolve_local(node, node.keyword)

    def expr_This(self, node: syntax.This) -> None:
        if self.current_class is ClassType.NONE:
            raise InvalidThisUsage(node.keyword)
        self._resolve_local(node, node.keyword)

    def expr_Unary(self, node: syntax.Unary) -> None:
        self.resolve_expr(node.right)

    def expr_Variable(self, node: syntax.Variable) -> None:
        if self.scopes and self.scopes[-1].get(node.name.lexeme) is False:
            raise CannotReadLocalVariableInInitializer(node.name)
        self._resolve_local(node, node.name)
