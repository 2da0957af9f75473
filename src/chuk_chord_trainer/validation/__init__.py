"""
Answer validation.

- canonicalize: the one ordered normalization every comparison uses
- validate_chord_answer / acceptable_answers: free-text chord names
- validate_construction: placed notes building a named chord
- validate_transcription: placed notes against a progression
- validate_progression_answer: Roman numeral progression answers
"""

from chuk_chord_trainer.validation.chord_answer import (
    ParsedChord,
    acceptable_answers,
    find_chord_type,
    parse_chord_answer,
    validate_chord_answer,
)
from chuk_chord_trainer.validation.construction import validate_construction
from chuk_chord_trainer.validation.normalize import canonicalize, enharmonic_swaps
from chuk_chord_trainer.validation.progression_answer import (
    normalize_numeral,
    validate_progression_answer,
)
from chuk_chord_trainer.validation.transcription import round_half_up, validate_transcription

__all__ = [
    "ParsedChord",
    "acceptable_answers",
    "canonicalize",
    "enharmonic_swaps",
    "find_chord_type",
    "normalize_numeral",
    "parse_chord_answer",
    "round_half_up",
    "validate_chord_answer",
    "validate_construction",
    "validate_progression_answer",
    "validate_transcription",
]
