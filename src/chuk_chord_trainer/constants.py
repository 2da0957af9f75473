"""
Constants and enums for the chord trainer engine.

No magic strings - use enums and Literal types for constrained values.
"""

from enum import Enum, IntEnum
from typing import Literal


class Inversion(IntEnum):
    """Inversion levels, 0 = root position."""

    ROOT = 0
    FIRST = 1
    SECOND = 2
    THIRD = 3
    FOURTH = 4

    @property
    def label(self) -> str:
        """Lowercase name as used in level files ('root', 'first', ...)."""
        return self.name.lower()

    @property
    def ordinal(self) -> str:
        """Short ordinal ('1st', '2nd', ...). Empty for root position."""
        return {1: "1st", 2: "2nd", 3: "3rd", 4: "4th"}.get(self.value, "")


class Voicing(str, Enum):
    """How a chord instance was voiced."""

    CLOSE = "close"
    OPEN = "open"


class LevelKind(str, Enum):
    """The two families of training level."""

    CHORD_RECOGNITION = "chord_recognition"
    PROGRESSION_TRANSCRIPTION = "progression_transcription"


class OpenVoicingStrategy(str, Enum):
    """The three open-voicing layouts."""

    WIDE_SPREAD = "wide_spread"  # Low root, middle tones, optional high root
    OCTAVE_DOUBLING = "octave_doubling"  # Close voicing plus one doubled tone
    MIXED = "mixed"  # Low root, middle tones, one random high doubling


# Explicit weights for the open-voicing choice (sum to 1.0)
OPEN_VOICING_WEIGHTS: dict[OpenVoicingStrategy, float] = {
    OpenVoicingStrategy.WIDE_SPREAD: 0.30,
    OpenVoicingStrategy.OCTAVE_DOUBLING: 0.28,
    OpenVoicingStrategy.MIXED: 0.42,
}

# Probability of the optional high root in the wide-spread layout
WIDE_SPREAD_HIGH_ROOT_CHANCE = 0.5
# Probability that octave doubling doubles the root (else the third chord entry)
DOUBLE_ROOT_CHANCE = 0.7

# Default single-chord window (C1-C6)
DEFAULT_MIN_PITCH = 24
DEFAULT_MAX_PITCH = 84

# Progression window (C3-C6)
PROGRESSION_MIN_PITCH = 48
PROGRESSION_MAX_PITCH = 84

DEFAULT_OCTAVE_BASE = 60  # C4
MAX_DUPLICATE_ATTEMPTS = 20
MAX_RANGE_ITERATIONS = 50

# Weight multiplier for chord types a level wants to emphasize
EMPHASIZED_CHORD_WEIGHT = 2.0

# Transcription scoring
WRONG_NOTE_PENALTY = 10
TRANSCRIPTION_PASS_RATIO = 0.8

KeyModeName = Literal["major", "minor"]


class ErrorMessages:
    """Standardized error messages."""

    UNKNOWN_CHORD_TYPE = "Unknown chord type: '{key}'."
    UNKNOWN_PITCH_CLASS = "Unknown pitch class: '{name}'."
    UNKNOWN_KEY = "Unknown key signature: '{key}'."
    UNKNOWN_NUMERAL = "Unknown Roman numeral: '{numeral}' in a {mode} key."
    UNKNOWN_INVERSION = "Unknown inversion: '{inversion}'."
    UNKNOWN_LEVEL = "Level '{level_id}' not found."
    INVALID_LEVEL_FILE = "Invalid level file {path}: {reason}"
    EMPTY_CHOICES = "No {what} to choose from."
