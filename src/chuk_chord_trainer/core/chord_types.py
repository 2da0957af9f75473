"""
Chord type catalog - interval stacks keyed by quality.

Intervals are measured from the root, not stacked: a major triad is (0, 4, 7).
The catalog is module-level immutable data, loaded once at import.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType

from chuk_chord_trainer.constants import ErrorMessages
from chuk_chord_trainer.core.pitch import PitchClass
from chuk_chord_trainer.errors import ConfigurationError


@dataclass(frozen=True)
class ChordType:
    """
    A chord quality defined by its intervals from the root.

    `symbol` is the canonical suffix written after the root ('', 'm', 'maj7').
    `abbreviations` are the other accepted spellings of that suffix.
    `symmetric` marks qualities whose inversions are the same quality on
    another root (the augmented triad).

    Immutable and hashable.
    """

    key: str
    intervals: tuple[int, ...]
    symbol: str
    display_name: str
    abbreviations: tuple[str, ...] = ()
    symmetric: bool = False

    def __post_init__(self) -> None:
        if not self.intervals or self.intervals[0] != 0:
            raise ValueError(f"Chord intervals must start at 0, got {self.intervals}")
        if list(self.intervals) != sorted(set(self.intervals)):
            raise ValueError(f"Chord intervals must be strictly ascending, got {self.intervals}")
        if not 3 <= len(self.intervals) <= 7:
            raise ValueError(f"Chord must have 3-7 tones, got {len(self.intervals)}")

    @property
    def size(self) -> int:
        """Number of chord tones."""
        return len(self.intervals)

    @property
    def max_inversion(self) -> int:
        """Highest inversion level (every non-root tone can be the bass)."""
        return len(self.intervals) - 1

    @property
    def spellings(self) -> tuple[str, ...]:
        """Canonical symbol followed by the abbreviations, without repeats."""
        return tuple(dict.fromkeys((self.symbol, *self.abbreviations)))

    def get_pitch_classes(self, root: PitchClass) -> list[PitchClass]:
        """Pitch classes of this chord on a root, in interval order."""
        return [root.transpose(interval) for interval in self.intervals]

    def bass_pitch_class(self, root: PitchClass, inversion: int) -> PitchClass:
        """The chord tone that sounds lowest in the given inversion."""
        return root.transpose(self.intervals[inversion % len(self.intervals)])

    def __str__(self) -> str:
        return self.display_name


def _chord(
    key: str,
    display_name: str,
    intervals: tuple[int, ...],
    symbol: str,
    *abbreviations: str,
    symmetric: bool = False,
) -> ChordType:
    return ChordType(key, intervals, symbol, display_name, abbreviations, symmetric)


_CATALOG: list[ChordType] = [
    # Triads
    _chord("major", "Major", (0, 4, 7), "", "maj", "major", "M"),
    _chord("minor", "Minor", (0, 3, 7), "m", "min", "minor", "-"),
    _chord("diminished", "Diminished", (0, 3, 6), "dim", "diminished", "°", "º", "o"),
    _chord("augmented", "Augmented", (0, 4, 8), "aug", "augmented", "+", "#5", symmetric=True),
    # Seventh chords
    _chord("major7", "Major 7th", (0, 4, 7, 11), "maj7", "M7", "Δ7", "major7"),
    _chord("minor7", "Minor 7th", (0, 3, 7, 10), "m7", "min7", "-7", "minor7"),
    _chord("dominant7", "Dominant 7th", (0, 4, 7, 10), "7", "dom7"),
    _chord("diminished7", "Diminished 7th", (0, 3, 6, 9), "dim7", "°7", "o7"),
    _chord("halfDiminished7", "Half Diminished 7th", (0, 3, 6, 10), "m7b5", "ø7", "min7b5", "ø"),
    _chord("minor7b5", "Minor 7th b5", (0, 3, 6, 10), "m7b5", "ø7", "min7b5"),
    # Ninth chords
    _chord("maj9", "Major 9th", (0, 4, 7, 11, 14), "maj9", "M9", "Δ9"),
    _chord("min9", "Minor 9th", (0, 3, 7, 10, 14), "m9", "min9", "-9"),
    _chord("dom9", "Dominant 9th", (0, 4, 7, 10, 14), "9", "dom9"),
    _chord("dom7b9", "Dominant 7♭9", (0, 4, 7, 10, 13), "7♭9", "7b9", "dom7b9"),
    _chord("dom7sharp9", "Dominant 7♯9", (0, 4, 7, 10, 15), "7♯9", "7#9", "dom7#9", "7sharp9"),
    _chord("min7b9", "Minor 7♭9", (0, 3, 7, 10, 13), "m7♭9", "m7b9", "min7b9"),
    _chord("add9", "Add 9", (0, 4, 7, 14), "add9", "(add9)"),
    _chord("madd9", "Minor Add 9", (0, 3, 7, 14), "madd9", "m(add9)"),
    _chord("dim7add9", "Diminished 7 Add 9", (0, 3, 6, 9, 14), "dim7add9", "°7add9"),
    _chord("dim7b9", "Diminished 7♭9", (0, 3, 6, 9, 13), "dim7♭9", "dim7b9", "°7♭9", "dimb9"),
    _chord(
        "halfDim9",
        "Half Diminished 9",
        (0, 3, 6, 10, 14),
        "ø9",
        "m7♭5add9",
        "m7b5add9",
        "m7-5add9",
        "min7b5add9",
    ),
    _chord(
        "halfDimb9",
        "Half Diminished ♭9",
        (0, 3, 6, 10, 13),
        "ø7♭9",
        "ø7b9",
        "m7b5b9",
        "m7♭5♭9",
        "m7-5-9",
    ),
    # Eleventh chords
    _chord("maj11", "Major 11th", (0, 4, 7, 11, 14, 17), "maj11", "M11", "Δ11"),
    _chord("min11", "Minor 11th", (0, 3, 7, 10, 14, 17), "m11", "min11", "-11"),
    _chord("dom11", "Dominant 11th", (0, 4, 7, 10, 14, 17), "11", "dom11"),
    _chord("maj7sharp11", "Major 7♯11", (0, 4, 7, 11, 18), "maj7♯11", "maj7#11", "M7#11"),
    _chord("dom7sharp11", "Dominant 7♯11", (0, 4, 7, 10, 18), "7♯11", "7#11", "dom7#11"),
    _chord("min7sharp11", "Minor 7♯11", (0, 3, 7, 10, 18), "m7♯11", "m7#11", "min7#11"),
    _chord("add11", "Add 11", (0, 4, 7, 17), "add11", "(add11)"),
    _chord("madd11", "Minor Add 11", (0, 3, 7, 17), "madd11", "m(add11)"),
    _chord("sus11", "Suspended 11", (0, 7, 17), "sus11", "sus(11)"),
    _chord("dom11b9", "Dominant 11♭9", (0, 4, 7, 10, 13, 17), "11♭9", "11b9", "dom11b9"),
    _chord("dom11sharp9", "Dominant 11♯9", (0, 4, 7, 10, 15, 17), "11♯9", "11#9", "dom11#9"),
    _chord("min11b9", "Minor 11♭9", (0, 3, 7, 10, 13, 17), "m11♭9", "m11b9", "min11b9"),
    # Thirteenth chords
    _chord("maj13", "Major 13th", (0, 4, 7, 11, 14, 21), "maj13", "M13", "Δ13"),
    _chord("min13", "Minor 13th", (0, 3, 7, 10, 14, 21), "m13", "min13", "-13"),
    _chord("dom13", "Dominant 13th", (0, 4, 7, 10, 14, 21), "13", "dom13"),
    _chord("maj13sharp11", "Major 13♯11", (0, 4, 7, 11, 18, 21), "maj13♯11", "maj13#11"),
    _chord("dom13sharp11", "Dominant 13♯11", (0, 4, 7, 10, 18, 21), "13♯11", "13#11", "dom13#11"),
    _chord("dom13b9", "Dominant 13♭9", (0, 4, 7, 10, 13, 21), "13♭9", "13b9", "dom13b9"),
    _chord("dom13sharp9", "Dominant 13♯9", (0, 4, 7, 10, 15, 21), "13♯9", "13#9", "dom13#9"),
    _chord("add13", "Add 13", (0, 4, 7, 21), "add13", "(add13)"),
    _chord("madd13", "Minor Add 13", (0, 3, 7, 21), "madd13", "m(add13)"),
    _chord("dom13sharp11b9", "Dominant 13♯11♭9", (0, 4, 7, 10, 13, 18, 21), "13♯11♭9", "13#11b9"),
    _chord(
        "dom13sharp11sharp9", "Dominant 13♯11♯9", (0, 4, 7, 10, 15, 18, 21), "13♯11♯9", "13#11#9"
    ),
    _chord("min13sharp11", "Minor 13♯11", (0, 3, 7, 10, 14, 18, 21), "m13♯11", "m13#11"),
    _chord("min13b9", "Minor 13♭9", (0, 3, 7, 10, 13, 21), "m13♭9", "m13b9", "min13b9"),
    # Suspended and quartal
    _chord("sus2", "Suspended 2nd", (0, 2, 7), "sus2", "sus(add2)"),
    _chord("sus4", "Suspended 4th", (0, 5, 7), "sus4", "sus"),
    _chord("quartal", "Quartal", (0, 5, 10), "quartal", "4ths"),
]

CHORD_TYPES: MappingProxyType[str, ChordType] = MappingProxyType(
    {chord_type.key: chord_type for chord_type in _CATALOG}
)

TRIAD_TYPES: tuple[str, ...] = ("major", "minor", "diminished", "augmented")
SEVENTH_TYPES: tuple[str, ...] = (
    "major7",
    "minor7",
    "dominant7",
    "diminished7",
    "halfDiminished7",
)


def get_chord_type(key: str) -> ChordType:
    """
    Look up a chord type by its catalog key.

    Raises:
        ConfigurationError: If the key is not in the catalog
    """
    try:
        return CHORD_TYPES[key]
    except KeyError:
        raise ConfigurationError(ErrorMessages.UNKNOWN_CHORD_TYPE.format(key=key)) from None
