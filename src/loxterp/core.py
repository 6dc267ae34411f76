from __future__ import annotations

import logging
import sys
from typing import Any, Dict, Optional, TextIO

from . import syntax
from .common import Returned
from .environment import Environment
from .errors import LoxError, ReturnOutsideFunction
from .lib import make_default_globals
from .resolver import Resolver

logger = logging.getLogger(__name__)


class RunResult:
    """Outcome of ``Interpreter.run``: the global environment and any captured error."""

    __slots__ = ("globals", "exception")

    def __init__(self, globals_env: Environment, exception: Optional[LoxError] = None):
        self.globals = globals_env
        self.exception = exception

    @property
    def ok(self) -> bool:
        return self.exception is None

    def raise_for_exception(self) -> None:
        if self.exception is not None:
            raise self.exception

    def __repr__(self) -> str:
        state = "ok" if self.ok else f"error={self.exception!r}"
        return f"<RunResult {state}>"


class InterpreterCore:
    def __init__(
        self,
        output: Optional[TextIO] = None,
        *,
        natives: bool = True,
        env: Optional[Dict[str, Any]] = None,
        recursion_limit: int = 10000,
    ):
        """
        output:
          - None -> write `print` lines to sys.stdout (looked up per write)
          - any text stream -> write there instead
        natives:
          - install native functions such as `clock` into the globals
        env:
          - extra host values to define as globals
        recursion_limit:
          - host recursion limit in effect while interpreting; deeper Lox
            recursion fails with StackOverflow
        """
        self.output = output
        self.recursion_limit = recursion_limit
        self.globals = make_default_globals(natives=natives, env=env)
        self.environment = self.globals
        # expression node -> number of scopes between use and declaration
        self.locals: Dict[syntax.Expr, int] = {}

    def write_line(self, text: str) -> None:
        stream = self.output if self.output is not None else sys.stdout
        print(text, file=stream)

    # ----- resolution -----

    def resolve_local(self, node: syntax.Expr, depth: int) -> None:
        self.locals[node] = depth

    def resolve(self, statements: list[syntax.Stmt]) -> None:
        Resolver(self).resolve(statements)

    # ----- run -----

    def interpret(self, statements: list[syntax.Stmt]) -> None:
        """Execute top-level statements in the global environment."""
        previous_limit = sys.getrecursionlimit()
        sys.setrecursionlimit(self.recursion_limit)
        try:
            for stmt in statements:
                outcome = self.exec_stmt(stmt)
                if outcome is not None:
                    raise ReturnOutsideFunction(outcome.keyword)
        finally:
            sys.setrecursionlimit(previous_limit)

    def run(self, statements: list[syntax.Stmt]) -> RunResult:
        """
        Resolve and then interpret `statements`.

        Failures raised by either phase are captured on the result; a program
        that fails resolution never starts executing.
        """
        logger.debug("run: %d top-level statements", len(statements))
        try:
            self.resolve(statements)
            self.interpret(statements)
        except LoxError as exc:
            logger.debug("run failed: %s", exc)
            return RunResult(self.globals, exc)
        logger.debug("run finished")
        return RunResult(self.globals)

    # ----- dispatch -----

    def execute_block(self, statements: list[syntax.Stmt], environment: Environment) -> Optional[Returned]:
        previous = self.environment
        try:
            self.environment = environment
            for stmt in statements:
                outcome = self.exec_stmt(stmt)
                if outcome is not None:
                    return outcome
            return None
        finally:
            self.environment = previous

    def exec_stmt(self, node: syntax.Stmt) -> Optional[Returned]:
        m = getattr(self, f"exec_{node.__class__.__name__}", None)
        if m is None:
            raise NotImplementedError(f"Statement not supported: {node.__class__.__name__}")
        return m(node)

    def eval_expr(self, node: syntax.Expr) -> Any:
        m = getattr(self, f"eval_{node.__class__.__name__}", None)
        if m is None:
            raise NotImplementedError(f"Expression not supported: {node.__class__.__name__}")
        return m(node)
