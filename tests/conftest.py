from __future__ import annotations

import io
import sys
from pathlib import Path

# Allow importing the package when running plain `pytest` without an editable install.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if SRC.exists():
    sys.path.insert(0, str(SRC))

import pytest

from loxterp import Interpreter


@pytest.fixture
def run_lox():
    def _run(*statements, natives: bool = True):
        out = io.StringIO()
        interpreter = Interpreter(output=out, natives=natives)
        result = interpreter.run(list(statements))
        result.raise_for_exception()
        return out.getvalue().splitlines()

    return _run
