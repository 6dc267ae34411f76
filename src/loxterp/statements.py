from __future__ import annotations

from typing import Dict, Optional

from . import syntax
from .classes import LoxClass
from .common import Returned
from .environment import Environment
from .errors import SuperClassMustBeAClass
from .functions import LoxFunction


class StatementMixin:
    def exec_Expression(self, node: syntax.Expression) -> None:
        self.eval_expr(node.expression)

    def exec_Print(self, node: syntax.Print) -> None:
        value = self.eval_expr(node.expression)
        self.write_line(self.stringify(value))

    def exec_Var(self, node: syntax.Var) -> None:
        value = None
        if node.initializer is not None:
            value = self.eval_expr(node.initializer)
        self.environment.define(node.name.lexeme, value, node.name)

    def exec_Block(self, node: syntax.Block) -> Optional[Returned]:
        return self.execute_block(node.statements, Environment(self.environment))

    def exec_If(self, node: syntax.If) -> Optional[Returned]:
        if self.is_truthy(self.eval_expr(node.condition)):
            return self.exec_stmt(node.then_branch)
        if node.else_branch is not None:
            return self.exec_stmt(node.else_branch)
        return None

    def exec_While(self, node: syntax.While) -> Optional[Returned]:
        while self.is_truthy(self.eval_expr(node.condition)):
            outcome = self.exec_stmt(node.body)
            if outcome is not None:
                return outcome
        return None

    def exec_Function(self, node: syntax.Function) -> None:
        function = LoxFunction(node, self.environment, is_initializer=False)
        self.environment.define(node.name.lexeme, function, node.name)

    def exec_Return(self, node: syntax.Return) -> Returned:
        value = self.eval_expr(node.value) if node.value is not None else None
        return Returned(value, node.keyword)

    def exec_Class(self, node: syntax.Class) -> None:
        superclass: Optional[LoxClass] = None
        if node.superclass is not None:
            value = self.eval_expr(node.superclass)
            if not isinstance(value, LoxClass):
                raise SuperClassMustBeAClass(node.superclass.name)
            superclass = value

        self.environment.define(node.name.lexeme, None, node.name)

        previous = self.environment
        try:
            if superclass is not None:
                self.environment = Environment(self.environment)
                self.environment.define("super", superclass)

            methods: Dict[str, LoxFunction] = {}
            for method in node.methods:
                name = method.name.lexeme
                methods[name] = LoxFunction(method, self.environment, is_initializer=name == "init")
        finally:
            self.environment = previous

        klass = LoxClass(node.name.lexeme, superclass, methods)
        self.environment.assign(node.name, klass)
