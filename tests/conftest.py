"""
Pytest configuration and shared fixtures.
"""

import random
import tempfile
from pathlib import Path

import pytest

from chuk_chord_trainer.models import ChordGenerationSettings


class ScriptedRandom:
    """
    Random source that replays a fixed list of draws, cycling when exhausted.

    Counts draws so tests can assert how many random decisions were made.
    """

    def __init__(self, values):
        self.values = list(values)
        self.calls = 0

    def random(self) -> float:
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        return value


@pytest.fixture
def temp_dir() -> Path:
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for reproducible runs."""
    return random.Random(1234)


@pytest.fixture
def zeros() -> ScriptedRandom:
    """Random source that always draws 0.0 (first choice everywhere)."""
    return ScriptedRandom([0.0])


@pytest.fixture
def c_major_settings() -> ChordGenerationSettings:
    """Settings that can only produce C major in root position around C4."""
    return ChordGenerationSettings(
        roots=["C"], chord_types=["major"], inversions=["root"], octave_range=[4]
    )
