"""
Core music-theory tables - the stateless layer everything else builds on.

- PitchClass: The 12 chromatic pitch classes (0-11) and note-name lookups
- ChordType: Interval stacks keyed by quality, plus the chord catalog
- KeySignature: Tonic + mode with spelled scale notes
- RomanNumeralResolver: Key-relative progression tokens to concrete chords
"""

from chuk_chord_trainer.core.chord_types import (
    CHORD_TYPES,
    SEVENTH_TYPES,
    TRIAD_TYPES,
    ChordType,
    get_chord_type,
)
from chuk_chord_trainer.core.keys import KEY_SIGNATURES, KeyMode, KeySignature, get_key_signature
from chuk_chord_trainer.core.pitch import (
    ENHARMONIC_PAIRS,
    FLAT_NOTE_NAMES,
    NOTE_NAMES,
    PitchClass,
    enharmonic_equivalent,
    midi_note_name,
    note_name,
    octave_base,
)
from chuk_chord_trainer.core.roman import NumeralEntry, ResolvedNumeral, RomanNumeralResolver

__all__ = [
    # Pitch
    "PitchClass",
    "NOTE_NAMES",
    "FLAT_NOTE_NAMES",
    "ENHARMONIC_PAIRS",
    "enharmonic_equivalent",
    "note_name",
    "midi_note_name",
    "octave_base",
    # Chord types
    "ChordType",
    "CHORD_TYPES",
    "TRIAD_TYPES",
    "SEVENTH_TYPES",
    "get_chord_type",
    # Keys
    "KeyMode",
    "KeySignature",
    "KEY_SIGNATURES",
    "get_key_signature",
    # Roman numerals
    "NumeralEntry",
    "ResolvedNumeral",
    "RomanNumeralResolver",
]
