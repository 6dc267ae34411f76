from .builtins import make_default_globals, make_native_functions

__all__ = [
    "make_default_globals",
    "make_native_functions",
]
