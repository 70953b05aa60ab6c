"""
Test configuration and fixtures for the rngquery test suite.
"""
import random
import sys
from pathlib import Path
from typing import Iterable

import pytest

# Add project root to Python path
sys.path.insert(0, str(Path(__file__).parent.parent))

from rngquery import Interpreter, Separators


class ScriptedRandom(random.Random):
    """Random source whose ``randint`` answers come from a fixed script."""

    def __init__(self, values: Iterable[int]):
        super().__init__(0)
        self._values = list(values)

    def randint(self, a: int, b: int) -> int:
        value = self._values.pop(0)
        assert a <= value <= b, f"scripted value {value} outside [{a}, {b}]"
        return value


@pytest.fixture
def scripted_rng():
    """Return a factory for scripted random sources."""
    return ScriptedRandom


@pytest.fixture
def interp() -> Interpreter:
    """Return a seeded interpreter with default separators."""
    return Interpreter(seed=1234)


@pytest.fixture
def default_sep() -> Separators:
    return Separators()
