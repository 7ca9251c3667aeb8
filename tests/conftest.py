"""
Pytest configuration for sfbench tests.
Adds src/ and tests/ to sys.path so that test imports work without installing.
"""
import sys
from pathlib import Path

_TESTS_PATH = Path(__file__).parent
_SRC_PATH = _TESTS_PATH.parent / "src"

for path in (_SRC_PATH, _TESTS_PATH):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))
