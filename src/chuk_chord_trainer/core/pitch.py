"""
Pitch primitives - PitchClass and the note-name tables.

PitchClass represents the 12 chromatic pitches (octave-independent).
Pitches themselves are plain MIDI note numbers (ints).
"""

from __future__ import annotations

from enum import IntEnum

from chuk_chord_trainer.constants import ErrorMessages
from chuk_chord_trainer.errors import ConfigurationError

# Display name mappings (module level to avoid IntEnum member issues)
NOTE_NAMES: tuple[str, ...] = (
    "C",
    "C#",
    "D",
    "D#",
    "E",
    "F",
    "F#",
    "G",
    "G#",
    "A",
    "A#",
    "B",
)
FLAT_NOTE_NAMES: tuple[str, ...] = (
    "C",
    "Db",
    "D",
    "Eb",
    "E",
    "F",
    "Gb",
    "G",
    "Ab",
    "A",
    "Bb",
    "B",
)

# Sharp/flat spellings of the five black keys
ENHARMONIC_PAIRS: tuple[tuple[str, str], ...] = (
    ("C#", "Db"),
    ("D#", "Eb"),
    ("F#", "Gb"),
    ("G#", "Ab"),
    ("A#", "Bb"),
)

_ENHARMONIC_LOOKUP: dict[str, str] = {
    **{sharp: flat for sharp, flat in ENHARMONIC_PAIRS},
    **{flat: sharp for sharp, flat in ENHARMONIC_PAIRS},
}

_LETTER_VALUES = {"C": 0, "D": 2, "E": 4, "F": 5, "G": 7, "A": 9, "B": 11}

_BLACK_KEYS = frozenset({1, 3, 6, 8, 10})


class PitchClass(IntEnum):
    """
    The 12 chromatic pitch classes (0-11).

    Octave-independent - C4 and C5 are both PitchClass.C.
    Enharmonic equivalents share the same value (C# == Db == 1).

    Spelling is a display concern. Internally, we use sharp names (Cs, Ds, etc.).
    """

    C = 0
    Cs = 1  # C# / Db
    D = 2
    Ds = 3  # D# / Eb
    E = 4
    F = 5
    Fs = 6  # F# / Gb
    G = 7
    Gs = 8  # G# / Ab
    A = 9
    As = 10  # A# / Bb
    B = 11

    def transpose(self, semitones: int) -> PitchClass:
        """Transpose by a number of semitones (positive or negative)."""
        return PitchClass((self.value + semitones) % 12)

    def to_midi(self, octave: int = 4) -> int:
        """Convert to MIDI note number. C4 = 60."""
        return self.value + (octave + 1) * 12

    def spell(self, prefer_flats: bool = False) -> str:
        """Get human-readable name."""
        names = FLAT_NOTE_NAMES if prefer_flats else NOTE_NAMES
        return names[self.value]

    @property
    def is_black_key(self) -> bool:
        """True for the five accidentals."""
        return self.value in _BLACK_KEYS

    @classmethod
    def from_midi(cls, midi_note: int) -> PitchClass:
        """Extract pitch class from MIDI note number."""
        return cls(midi_note % 12)

    @classmethod
    def parse(cls, name: str | int) -> PitchClass:
        """
        Parse a pitch class.

        Accepts ints (0-11), note names ('C', 'C#', 'Db', 'c#', 'D♭'), enum-style
        names ('Cs') and double accidentals ('Cb', 'E#', 'B#', 'Fb' wrap around).
        """
        if isinstance(name, PitchClass):
            return name
        if isinstance(name, int):
            if 0 <= name <= 11:
                return cls(name)
            raise ConfigurationError(ErrorMessages.UNKNOWN_PITCH_CLASS.format(name=name))

        text = name.strip().replace("♯", "#").replace("♭", "b")
        if not text or text[0].upper() not in _LETTER_VALUES:
            raise ConfigurationError(ErrorMessages.UNKNOWN_PITCH_CLASS.format(name=name))

        value = _LETTER_VALUES[text[0].upper()]
        for accidental in text[1:]:
            if accidental in ("#", "s"):
                value += 1
            elif accidental == "b":
                value -= 1
            else:
                raise ConfigurationError(ErrorMessages.UNKNOWN_PITCH_CLASS.format(name=name))
        return cls(value % 12)


def enharmonic_equivalent(name: str) -> str | None:
    """
    Get the other spelling of a black-key note name.

    'C#' -> 'Db', 'Bb' -> 'A#'. Natural notes have no equivalent here.
    """
    return _ENHARMONIC_LOOKUP.get(name)


def note_name(midi_note: int) -> str:
    """Convert MIDI note number to a sharp note name without octave."""
    return NOTE_NAMES[midi_note % 12]


def midi_note_name(midi_note: int) -> str | None:
    """MIDI note to name with octave ('C4', 'A#3'). None outside 0-127."""
    if not 0 <= midi_note <= 127:
        return None
    octave = midi_note // 12 - 1
    return f"{NOTE_NAMES[midi_note % 12]}{octave}"


def octave_base(octave: int) -> int:
    """MIDI number of C in the given octave (C4 = 60)."""
    return PitchClass.C.to_midi(octave)
