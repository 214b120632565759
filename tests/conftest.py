"""Shared fixtures; keeps well_rng importable for local pytest runs."""

import os
import sys
from pathlib import Path

import pytest

os.environ.setdefault("MPLBACKEND", "Agg")

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


class FixedEntropy:
    """Deterministic entropy stub handing out a fixed word list."""

    def __init__(self, words):
        self._words = list(words)
        self.calls = []

    def words(self, count):
        self.calls.append(count)
        return self._words[:count]


class FailingEntropy:
    def words(self, count):
        raise OSError("entropy source unavailable")


@pytest.fixture
def fixed_entropy():
    return FixedEntropy(range(100, 132))


@pytest.fixture
def failing_entropy():
    return FailingEntropy()


@pytest.fixture
def all_ones():
    return [1] * 32
