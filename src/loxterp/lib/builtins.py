import time
from typing import Any

from ..environment import Environment
from ..functions import NativeFunction


def _clock() -> float:
    return float(time.time())


_NATIVE_FUNCTIONS = (
    NativeFunction("clock", 0, _clock),
)


def make_native_functions() -> dict[str, Any]:
    """Build the name -> native function mapping installed as globals."""
    return {native.name: native for native in _NATIVE_FUNCTIONS}


def make_default_globals(*, natives: bool = True, env: dict[str, Any] | None = None) -> Environment:
    """Create the outermost environment, optionally seeded with natives and extra values."""
    out = Environment()
    if natives:
        for name, value in make_native_functions().items():
            out.define(name, value)
    for name, value in (env or {}).items():
        out.define(name, value)
    return out
