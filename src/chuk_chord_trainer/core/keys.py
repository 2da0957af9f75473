"""
Key signature primitives - KeyMode, KeySignature and the key table.

A key is a tonic plus a mode. Scale degrees (0-6) resolve to pitch classes
through the mode's semitone steps, while `scale_notes` keeps the conventional
spelling for display (F# major has E#, not F).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

from chuk_chord_trainer.constants import ErrorMessages
from chuk_chord_trainer.core.pitch import PitchClass
from chuk_chord_trainer.errors import ConfigurationError


class KeyMode(str, Enum):
    """Major or (natural) minor."""

    MAJOR = "major"
    MINOR = "minor"

    @property
    def steps(self) -> tuple[int, ...]:
        """Semitones from the tonic to each scale degree."""
        return MAJOR_SCALE_STEPS if self is KeyMode.MAJOR else MINOR_SCALE_STEPS


MAJOR_SCALE_STEPS: tuple[int, ...] = (0, 2, 4, 5, 7, 9, 11)  # W-W-H-W-W-W-H
MINOR_SCALE_STEPS: tuple[int, ...] = (0, 2, 3, 5, 7, 8, 10)  # W-H-W-W-H-W-W


@dataclass(frozen=True)
class KeySignature:
    """
    A named key with its spelled diatonic scale.

    Examples:
        KEY_SIGNATURES["G"].scale_notes == ("G", "A", "B", "C", "D", "E", "F#")
        KEY_SIGNATURES["Am"].mode == KeyMode.MINOR
    """

    name: str
    tonic: PitchClass
    mode: KeyMode
    scale_notes: tuple[str, ...]

    def __post_init__(self) -> None:
        if len(self.scale_notes) != 7 or len(set(self.scale_notes)) != 7:
            raise ValueError(f"Key {self.name} needs 7 distinct scale notes")

    @property
    def is_minor(self) -> bool:
        return self.mode is KeyMode.MINOR

    @property
    def prefers_flats(self) -> bool:
        """True for flat keys (F, Bb, Dm, ...), whose chords read better with flats."""
        return any(note.endswith("b") and len(note) > 1 for note in self.scale_notes)

    def degree_to_pitch_class(self, degree: int, accidental: int = 0) -> PitchClass:
        """
        Resolve a 0-based scale degree to a pitch class.

        Args:
            degree: Scale degree, 0 (tonic) to 6
            accidental: Semitone offset (-1 = flat, +1 = sharp)

        Returns:
            The resolved pitch class
        """
        if not 0 <= degree <= 6:
            raise ValueError(f"Degree must be 0-6, got {degree}")
        return self.tonic.transpose(self.mode.steps[degree] + accidental)

    def get_pitch_classes(self) -> list[PitchClass]:
        """All seven diatonic pitch classes."""
        return [self.degree_to_pitch_class(degree) for degree in range(7)]

    def __str__(self) -> str:
        return f"{self.scale_notes[0]} {self.mode.value}"


def _key(name: str, mode: KeyMode, notes: str) -> KeySignature:
    scale_notes = tuple(notes.split())
    return KeySignature(name, PitchClass.parse(scale_notes[0]), mode, scale_notes)


_MAJOR, _MINOR = KeyMode.MAJOR, KeyMode.MINOR

KEY_SIGNATURES: MappingProxyType[str, KeySignature] = MappingProxyType(
    {
        key.name: key
        for key in (
            # Major keys
            _key("C", _MAJOR, "C D E F G A B"),
            _key("G", _MAJOR, "G A B C D E F#"),
            _key("D", _MAJOR, "D E F# G A B C#"),
            _key("A", _MAJOR, "A B C# D E F# G#"),
            _key("E", _MAJOR, "E F# G# A B C# D#"),
            _key("B", _MAJOR, "B C# D# E F# G# A#"),
            _key("F#", _MAJOR, "F# G# A# B C# D# E#"),
            _key("C#", _MAJOR, "C# D# E# F# G# A# B#"),
            _key("F", _MAJOR, "F G A Bb C D E"),
            _key("Bb", _MAJOR, "Bb C D Eb F G A"),
            _key("Eb", _MAJOR, "Eb F G Ab Bb C D"),
            _key("Ab", _MAJOR, "Ab Bb C Db Eb F G"),
            _key("Db", _MAJOR, "Db Eb F Gb Ab Bb C"),
            _key("Gb", _MAJOR, "Gb Ab Bb Cb Db Eb F"),
            # Minor keys
            _key("Am", _MINOR, "A B C D E F G"),
            _key("Em", _MINOR, "E F# G A B C D"),
            _key("Bm", _MINOR, "B C# D E F# G A"),
            _key("F#m", _MINOR, "F# G# A B C# D E"),
            _key("C#m", _MINOR, "C# D# E F# G# A B"),
            _key("G#m", _MINOR, "G# A# B C# D# E F#"),
            _key("D#m", _MINOR, "D# E# F# G# A# B C#"),
            _key("A#m", _MINOR, "A# B# C# D# E# F# G#"),
            _key("Dm", _MINOR, "D E F G A Bb C"),
            _key("Gm", _MINOR, "G A Bb C D Eb F"),
            _key("Cm", _MINOR, "C D Eb F G Ab Bb"),
            _key("Fm", _MINOR, "F G Ab Bb C Db Eb"),
            _key("Bbm", _MINOR, "Bb C Db Eb F Gb Ab"),
            _key("Ebm", _MINOR, "Eb F Gb Ab Bb Cb Db"),
        )
    }
)


def get_key_signature(name: str) -> KeySignature:
    """
    Look up a key signature.

    Accepts table names ('C', 'F#m', 'Bb') as well as spelled-out forms
    ('A minor', 'D_major', 'eb minor'). Spelled-out forms resolve to the
    entry with the same spelling, else the one with the same tonic pitch
    class and mode ('Cb major' -> B).

    Raises:
        ConfigurationError: If no such key is in the table
    """
    text = name.strip()
    if text in KEY_SIGNATURES:
        return KEY_SIGNATURES[text]

    parts = text.replace("_", " ").split()
    if len(parts) == 2 and parts[1].lower() in ("major", "minor"):
        mode = KeyMode(parts[1].lower())
        tonic_name = parts[0][:1].upper() + parts[0][1:].replace("♯", "#").replace("♭", "b")
        spelled = tonic_name + ("m" if mode is KeyMode.MINOR else "")
        if spelled in KEY_SIGNATURES:
            return KEY_SIGNATURES[spelled]
        try:
            tonic = PitchClass.parse(parts[0])
        except ConfigurationError:
            raise ConfigurationError(ErrorMessages.UNKNOWN_KEY.format(key=name)) from None
        for key in KEY_SIGNATURES.values():
            if key.tonic == tonic and key.mode is mode:
                return key

    raise ConfigurationError(ErrorMessages.UNKNOWN_KEY.format(key=name))
