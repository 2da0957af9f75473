"""
Chord and progression ear-training engine.

Layers, bottom up:
- core: pitch classes, chord types, key signatures, Roman numerals
- generation: chord and progression instances from level settings
- validation: chord names, Roman numeral answers and note transcriptions
- levels: bundled YAML level library and its loader
"""

from chuk_chord_trainer.core import (
    CHORD_TYPES,
    KEY_SIGNATURES,
    ChordType,
    KeySignature,
    PitchClass,
    RomanNumeralResolver,
    get_chord_type,
    get_key_signature,
)
from chuk_chord_trainer.errors import ChordTrainerError, ConfigurationError
from chuk_chord_trainer.generation import ChordGenerator, ProgressionGenerator, normalize_range
from chuk_chord_trainer.levels import LevelLoader
from chuk_chord_trainer.validation import (
    validate_chord_answer,
    validate_construction,
    validate_progression_answer,
    validate_transcription,
)

__version__ = "0.1.0"

__all__ = [
    # Errors
    "ChordTrainerError",
    "ConfigurationError",
    # Tables
    "PitchClass",
    "ChordType",
    "CHORD_TYPES",
    "get_chord_type",
    "KeySignature",
    "KEY_SIGNATURES",
    "get_key_signature",
    "RomanNumeralResolver",
    # Generation
    "ChordGenerator",
    "ProgressionGenerator",
    "normalize_range",
    # Validation
    "validate_chord_answer",
    "validate_construction",
    "validate_progression_answer",
    "validate_transcription",
    # Levels
    "LevelLoader",
]
