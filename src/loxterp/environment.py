from __future__ import annotations

from typing import Any, Dict, Optional

from .errors import DuplicateVariableName, UndefinedVariable
from .tokens import Token


class Environment:
    """
    One lexical scope: a name -> value map plus a link to the enclosing scope.

    Closures hold a reference to the environment they were declared in, so a
    scope lives as long as the longest-lived function that captured it.
    """

    __slots__ = ("values", "enclosing")

    def __init__(self, enclosing: Optional[Environment] = None):
        self.values: Dict[str, Any] = {}
        self.enclosing = enclosing

    def __repr__(self) -> str:
        return f"<Environment {sorted(self.values)!r} depth={self.depth()}>"

    def __contains__(self, name: str) -> bool:
        return name in self.values

    def depth(self) -> int:
        count = 0
        env = self.enclosing
        while env is not None:
            count += 1
            env = env.enclosing
        return count

    def define(self, name: str, value: Any, token: Token | None = None) -> None:
        if name in self.values:
            raise DuplicateVariableName(token, name=name)
        self.values[name] = value

    def get(self, name: Token) -> Any:
        env: Optional[Environment] = self
        while env is not None:
            if name.lexeme in env.values:
                return env.values[name.lexeme]
            env = env.enclosing
        raise UndefinedVariable(name)

    def assign(self, name: Token, value: Any) -> None:
        env: Optional[Environment] = self
        while env is not None:
            if name.lexeme in env.values:
                env.values[name.lexeme] = value
                return
            env = env.enclosing
        raise UndefinedVariable(name)

    # ----- resolved (depth-indexed) access -----

    def ancestor(self, distance: int) -> Environment:
        env = self
        for _ in range(distance):
            if env.enclosing is None:
                raise RuntimeError(f"environment chain is shorter than resolved depth {distance}")
            env = env.enclosing
        return env

    def get_at(self, distance: int, name: str) -> Any:
        values = self.ancestor(distance).values
        if name not in values:
            raise RuntimeError(f"resolved variable {name!r} missing at depth {distance}")
        return values[name]

    def assign_at(self, distance: int, name: Token, value: Any) -> None:
        self.ancestor(distance).values[name.lexeme] = value
