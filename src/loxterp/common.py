from __future__ import annotations

from typing import Any, Optional

from .tokens import Token


class Returned:
    """
    Outcome of a statement that executed ``return``.

    Statement execution yields ``None`` on normal completion and an instance
    of this class once a ``return`` runs; enclosing blocks and loops stop and
    hand it upward until the function call that owns the frame consumes it.
    """

    __slots__ = ("value", "keyword")

    def __init__(self, value: Any, keyword: Optional[Token] = None):
        self.value = value
        self.keyword = keyword

    def __repr__(self) -> str:
        return f"<Returned {self.value!r}>"
