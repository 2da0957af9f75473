"""
Roman numeral resolution - key-relative chord tokens to concrete chords.

Tokens are looked up in a per-mode table rather than parsed symbolically:
the set of numerals a level may use is closed, and an unknown token is a
content bug worth surfacing.

Token forms:
    'IV'      diatonic chord
    'V/3'     bass-interval suffix: /3 = first inversion, /5 = second
    'V/vi'    secondary dominant (whole token is a table entry)
    'bVII'    chromatic root (accidental applied to the scale step)
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from types import MappingProxyType

from chuk_chord_trainer.constants import ErrorMessages
from chuk_chord_trainer.core.chord_types import ChordType, get_chord_type
from chuk_chord_trainer.core.keys import KeyMode, KeySignature, get_key_signature
from chuk_chord_trainer.core.pitch import PitchClass
from chuk_chord_trainer.errors import ConfigurationError

_INVERSION_SUFFIX = re.compile(r"^(?P<numeral>.+)/(?P<bass>\d+)$")

# Bass interval number -> inversion
_BASS_INTERVAL_INVERSIONS = {3: 1, 5: 2}

PERFECT_FIFTH = 7


@dataclass(frozen=True)
class NumeralEntry:
    """One row of a Roman numeral table."""

    degree: int  # 0-based scale degree
    chord_type: str
    accidental: int = 0
    secondary: bool = False


_MAJOR_NUMERALS: dict[str, NumeralEntry] = {
    # Diatonic triads
    "I": NumeralEntry(0, "major"),
    "ii": NumeralEntry(1, "minor"),
    "iii": NumeralEntry(2, "minor"),
    "IV": NumeralEntry(3, "major"),
    "V": NumeralEntry(4, "major"),
    "vi": NumeralEntry(5, "minor"),
    "vii°": NumeralEntry(6, "diminished"),
    # Sevenths
    "I7": NumeralEntry(0, "major7"),
    "ii7": NumeralEntry(1, "minor7"),
    "iii7": NumeralEntry(2, "minor7"),
    "IV7": NumeralEntry(3, "major7"),
    "V7": NumeralEntry(4, "dominant7"),
    "vi7": NumeralEntry(5, "minor7"),
    "vii7": NumeralEntry(6, "halfDiminished7"),
    # Blues-style dominant sevenths on every degree
    "I7dom": NumeralEntry(0, "dominant7"),
    "II7dom": NumeralEntry(1, "dominant7"),
    "III7dom": NumeralEntry(2, "dominant7"),
    "IV7dom": NumeralEntry(3, "dominant7"),
    "V7dom": NumeralEntry(4, "dominant7"),
    "VI7dom": NumeralEntry(5, "dominant7"),
    "VII7dom": NumeralEntry(6, "dominant7"),
    # Suspended
    "Isus2": NumeralEntry(0, "sus2"),
    "Isus4": NumeralEntry(0, "sus4"),
    "V7sus4": NumeralEntry(4, "sus4"),
    "IVsus2": NumeralEntry(3, "sus2"),
    "IVsus4": NumeralEntry(3, "sus4"),
    # Diminished
    "ii°": NumeralEntry(1, "diminished"),
    "#iv°": NumeralEntry(3, "diminished", accidental=1),
    "#ii°": NumeralEntry(1, "diminished", accidental=1),
    # Augmented
    "I+": NumeralEntry(0, "augmented"),
    "V+": NumeralEntry(4, "augmented"),
    "#IV+": NumeralEntry(3, "augmented", accidental=1),
    # Borrowed from the parallel minor
    "biii": NumeralEntry(2, "minor", accidental=-1),
    "bII": NumeralEntry(1, "major", accidental=-1),
    "bIII": NumeralEntry(2, "major", accidental=-1),
    "bVI": NumeralEntry(5, "major", accidental=-1),
    "bVII": NumeralEntry(6, "major", accidental=-1),
    # Tritone substitute
    "bII7": NumeralEntry(1, "dominant7", accidental=-1),
    # Secondary dominants (degree is the target)
    "V/ii": NumeralEntry(1, "major", secondary=True),
    "V/iii": NumeralEntry(2, "major", secondary=True),
    "V/IV": NumeralEntry(3, "major", secondary=True),
    "V/V": NumeralEntry(4, "major", secondary=True),
    "V/vi": NumeralEntry(5, "major", secondary=True),
    "V7/ii": NumeralEntry(1, "dominant7", secondary=True),
    "V7/iii": NumeralEntry(2, "dominant7", secondary=True),
    "V7/IV": NumeralEntry(3, "dominant7", secondary=True),
    "V7/V": NumeralEntry(4, "dominant7", secondary=True),
    "V7/vi": NumeralEntry(5, "dominant7", secondary=True),
}

_MINOR_NUMERALS: dict[str, NumeralEntry] = {
    "i": NumeralEntry(0, "minor"),
    "ii°": NumeralEntry(1, "diminished"),
    "III": NumeralEntry(2, "major"),
    "iv": NumeralEntry(3, "minor"),
    "V": NumeralEntry(4, "major"),  # harmonic minor dominant
    "VI": NumeralEntry(5, "major"),
    "VII": NumeralEntry(6, "major"),
    "v": NumeralEntry(4, "minor"),
    "vii°": NumeralEntry(6, "diminished"),
    # Sevenths
    "i7": NumeralEntry(0, "minor7"),
    "ii7": NumeralEntry(1, "halfDiminished7"),
    "III7": NumeralEntry(2, "major7"),
    "iv7": NumeralEntry(3, "minor7"),
    "V7": NumeralEntry(4, "dominant7"),
    "VI7": NumeralEntry(5, "major7"),
    "VII7": NumeralEntry(6, "dominant7"),
    # Neapolitan and tritone substitute
    "bII": NumeralEntry(1, "major", accidental=-1),
    "bII7": NumeralEntry(1, "dominant7", accidental=-1),
    # Secondary dominants
    "V/III": NumeralEntry(2, "major", secondary=True),
    "V/iv": NumeralEntry(3, "major", secondary=True),
    "V/V": NumeralEntry(4, "major", secondary=True),
    "V/VI": NumeralEntry(5, "major", secondary=True),
    "V7/iv": NumeralEntry(3, "dominant7", secondary=True),
    "V7/V": NumeralEntry(4, "dominant7", secondary=True),
}

NUMERAL_TABLES: MappingProxyType[KeyMode, MappingProxyType[str, NumeralEntry]] = (
    MappingProxyType(
        {
            KeyMode.MAJOR: MappingProxyType(_MAJOR_NUMERALS),
            KeyMode.MINOR: MappingProxyType(_MINOR_NUMERALS),
        }
    )
)


@dataclass(frozen=True)
class ResolvedNumeral:
    """A Roman numeral token resolved in a key."""

    token: str
    numeral: str
    root: PitchClass
    chord_type: ChordType
    inversion: int
    scale_degree: int
    accidental: int = 0
    secondary: bool = False

    @property
    def root_name(self) -> str:
        return self.root.spell()

    def __str__(self) -> str:
        name = f"{self.root.spell()}{self.chord_type.symbol}"
        if self.inversion:
            name += f"/{self.chord_type.bass_pitch_class(self.root, self.inversion).spell()}"
        return name


class RomanNumeralResolver:
    """
    Resolves progression tokens in a key.

    Stateless; one instance can serve any number of progressions.

    Examples:
        resolver = RomanNumeralResolver()
        resolver.resolve("V/3", "C")    # G major, first inversion
        resolver.resolve("V/V", "C")    # D major (secondary dominant)
        resolver.resolve("bVII", "D")   # C major
    """

    def split_token(self, token: str) -> tuple[str, int]:
        """
        Split a token into (numeral, inversion).

        Whole-token table entries win, so 'V/V' stays a secondary dominant
        while 'V/3' becomes ('V', 1). Unrecognized bass numbers mean root
        position.
        """
        text = token.strip()
        if any(text in table for table in NUMERAL_TABLES.values()):
            return text, 0

        match = _INVERSION_SUFFIX.match(text)
        if match is None:
            return text, 0
        bass = int(match.group("bass"))
        return match.group("numeral"), _BASS_INTERVAL_INVERSIONS.get(bass, 0)

    def lookup(self, numeral: str, mode: KeyMode) -> NumeralEntry:
        """
        Find a numeral in the mode's table.

        Raises:
            ConfigurationError: If the numeral is unknown in that mode
        """
        try:
            return NUMERAL_TABLES[mode][numeral]
        except KeyError:
            raise ConfigurationError(
                ErrorMessages.UNKNOWN_NUMERAL.format(numeral=numeral, mode=mode.value)
            ) from None

    def resolve(self, token: str, key: KeySignature | str) -> ResolvedNumeral:
        """
        Resolve a token in a key.

        Args:
            token: Roman numeral token, e.g. 'I', 'vi/5', 'V7/V'
            key: KeySignature or key name ('C', 'Am', 'Bb major')

        Returns:
            ResolvedNumeral with root pitch class, chord type and inversion

        Raises:
            ConfigurationError: Unknown key, numeral or chord type
        """
        signature = key if isinstance(key, KeySignature) else get_key_signature(key)
        numeral, inversion = self.split_token(token)
        entry = self.lookup(numeral, signature.mode)
        chord_type = get_chord_type(entry.chord_type)

        if entry.secondary:
            target = signature.degree_to_pitch_class(entry.degree)
            root = target.transpose(PERFECT_FIFTH)
        else:
            root = signature.degree_to_pitch_class(entry.degree, entry.accidental)

        # A bass suffix the chord can't carry falls back to root position
        if inversion > chord_type.max_inversion:
            inversion = 0

        return ResolvedNumeral(
            token=token,
            numeral=numeral,
            root=root,
            chord_type=chord_type,
            inversion=inversion,
            scale_degree=entry.degree,
            accidental=entry.accidental,
            secondary=entry.secondary,
        )

    def resolve_pattern(
        self, pattern: list[str] | tuple[str, ...], key: KeySignature | str
    ) -> list[ResolvedNumeral]:
        """Resolve every token of a progression pattern, in order."""
        return [self.resolve(token, key) for token in pattern]

    def available_numerals(self, mode: KeyMode | str) -> list[str]:
        """Numerals known in a mode, in table order."""
        return list(NUMERAL_TABLES[KeyMode(mode)])
