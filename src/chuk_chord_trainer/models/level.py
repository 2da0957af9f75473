"""
Level models - declarative configuration for one training level.

Two families of level exist:
- Chord recognition levels: roots x chord types x inversions, one chord per problem
- Progression transcription levels: Roman numeral patterns played in a key

Level files use camelCase keys (chordTypes, octaveRange); snake_case is
accepted as well.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from chuk_chord_trainer.constants import (
    DEFAULT_OCTAVE_BASE,
    TRANSCRIPTION_PASS_RATIO,
    WRONG_NOTE_PENALTY,
    ErrorMessages,
    Inversion,
)
from chuk_chord_trainer.core.chord_types import CHORD_TYPES
from chuk_chord_trainer.core.keys import KeyMode, get_key_signature
from chuk_chord_trainer.core.pitch import PitchClass
from chuk_chord_trainer.core.roman import RomanNumeralResolver

_CAMEL = {"alias_generator": to_camel, "populate_by_name": True, "frozen": True}


def _check_chord_types(keys: list[str]) -> list[str]:
    for key in keys:
        if key not in CHORD_TYPES:
            raise ValueError(ErrorMessages.UNKNOWN_CHORD_TYPE.format(key=key))
    return keys


class VoicingSettings(BaseModel):
    """
    Open-voicing preferences carried by a level.

    Only `double_root` changes generation. The spread and spacing fields are
    kept so level files round-trip; layouts come from the voicing strategy.
    """

    min_spread: int = Field(12, ge=0, description="Minimum spread in semitones (informational)")
    max_spread: int = Field(36, ge=0, description="Maximum spread in semitones (informational)")
    double_root: bool = Field(True, description="Allow the high root doubling")
    allow_wide_spacing: bool = Field(
        True, description="Allow gaps wider than an octave (informational)"
    )

    model_config = _CAMEL


class ChordGenerationSettings(BaseModel):
    """
    What a chord recognition level may generate.

    Roots accept letter names ('C', 'F#', 'Bb'), enum-style names ('Cs')
    and pitch-class integers (0-11). Inversions accept names ('root',
    'first', ...) or integers.
    """

    roots: list[PitchClass] = Field(..., min_length=1, description="Allowed chord roots")
    chord_types: list[str] = Field(..., min_length=1, description="Allowed chord type keys")
    inversions: list[Inversion] = Field(
        default_factory=lambda: [Inversion.ROOT], min_length=1, description="Allowed inversions"
    )
    octave_range: list[int] = Field(
        default_factory=lambda: [3, 4],
        min_length=1,
        description="Octave numbers to place the chord in (C4 = 60)",
    )
    is_open_voicing: bool = Field(False, description="Generate open voicings")
    voicing_settings: VoicingSettings = Field(
        default_factory=VoicingSettings, description="Open-voicing preferences"
    )
    emphasized_chord_types: list[str] = Field(
        default_factory=list, description="Chord types drawn at double weight"
    )

    model_config = _CAMEL

    @field_validator("roots", mode="before")
    @classmethod
    def parse_roots(cls, v: list[str | int]) -> list[PitchClass]:
        """Parse every root spelling into a pitch class."""
        return [PitchClass.parse(root) for root in v]

    @field_validator("chord_types", "emphasized_chord_types")
    @classmethod
    def validate_chord_types(cls, v: list[str]) -> list[str]:
        """Reject chord types the catalog doesn't know."""
        return _check_chord_types(v)

    @field_validator("inversions", mode="before")
    @classmethod
    def parse_inversions(cls, v: list[str | int]) -> list[Inversion]:
        """Accept 'root' / 'first' / ... or plain integers."""
        parsed = []
        for inversion in v:
            if isinstance(inversion, str) and not inversion.isdigit():
                try:
                    parsed.append(Inversion[inversion.strip().upper()])
                except KeyError:
                    raise ValueError(
                        ErrorMessages.UNKNOWN_INVERSION.format(inversion=inversion)
                    ) from None
            else:
                try:
                    parsed.append(Inversion(int(inversion)))
                except ValueError:
                    raise ValueError(
                        ErrorMessages.UNKNOWN_INVERSION.format(inversion=inversion)
                    ) from None
        return parsed

    @field_validator("octave_range")
    @classmethod
    def validate_octave_range(cls, v: list[int]) -> list[int]:
        """Octaves must keep chords on a piano keyboard."""
        for octave in v:
            if not 0 <= octave <= 7:
                raise ValueError(f"Octave out of range 0-7: {octave}")
        return v

    @property
    def octaves(self) -> list[int]:
        """
        The octave numbers to draw from.

        A two-element list is an inclusive range ([3, 5] -> 3, 4, 5);
        anything else is an explicit list.
        """
        if len(self.octave_range) == 2:
            low, high = sorted(self.octave_range)
            return list(range(low, high + 1))
        return list(self.octave_range)


class ValidationSettings(BaseModel):
    """How strictly a chord recognition level checks answers."""

    supports_inversions: bool = Field(False, description="Inversion answer forms are accepted")
    require_inversion_labeling: bool = Field(
        False, description="Expected answers carry an inversion label"
    )
    max_inversion: int | None = Field(None, ge=0, description="Highest inversion in play")
    acceptable_formats: list[str] = Field(
        default_factory=lambda: ["basic"], description="Answer formats shown in the UI"
    )

    model_config = _CAMEL


class ChordLevelConfig(BaseModel):
    """
    A chord recognition level.

    Example YAML:
        id: basic-triads-2
        category: basic-triads
        level: 2
        title: Triads with First Inversions
        chordGeneration:
          roots: [C, Cs, D]
          chordTypes: [major, minor]
          inversions: [root, first]
        validation:
          supportsInversions: true
    """

    id: str = Field(..., min_length=1, description="Level identifier")
    category: str = Field(..., description="Level category (e.g., 'basic-triads')")
    level: int = Field(..., ge=1, description="Level number within the category")
    title: str = Field(..., description="Display title")
    description: str = Field("", description="What the level trains")
    total_problems: int = Field(30, gt=0, description="Problems per session")
    pass_accuracy: int = Field(90, ge=0, le=100, description="Accuracy needed to pass (%)")
    pass_time: float = Field(5.0, gt=0, description="Average seconds per answer to pass")
    chord_generation: ChordGenerationSettings
    validation: ValidationSettings = Field(default_factory=ValidationSettings)

    model_config = _CAMEL


class TranscriptionOptions(BaseModel):
    """Tolerances and scoring for progression transcription."""

    tolerate_octave_errors: bool = Field(True, description="Compare pitch classes, not pitches")
    tolerate_missing: bool = Field(False, description="Missing notes don't fail the answer")
    tolerate_extra: bool = Field(False, description="Extra notes don't fail the answer")
    wrong_note_penalty: int = Field(
        WRONG_NOTE_PENALTY, ge=0, description="Points lost per wrong or missing note"
    )
    pass_ratio: float = Field(
        TRANSCRIPTION_PASS_RATIO,
        ge=0.0,
        le=1.0,
        description="Share of notes needed when tolerances are on",
    )

    model_config = _CAMEL


class AvailableKeys(BaseModel):
    """Keys a progression level may be played in, grouped by mode."""

    major: list[str] = Field(default_factory=list, description="Major key names")
    minor: list[str] = Field(default_factory=list, description="Minor key names")

    model_config = _CAMEL

    @field_validator("major", "minor")
    @classmethod
    def validate_keys(cls, v: list[str]) -> list[str]:
        """Every key must be in the key signature table."""
        for key in v:
            get_key_signature(key)
        return v

    @model_validator(mode="after")
    def check_not_empty(self) -> AvailableKeys:
        """At least one key overall."""
        if not self.major and not self.minor:
            raise ValueError(ErrorMessages.EMPTY_CHOICES.format(what="keys"))
        return self

    def by_mode(self) -> dict[KeyMode, list[str]]:
        """Non-empty key lists keyed by mode."""
        groups = {KeyMode.MAJOR: self.major, KeyMode.MINOR: self.minor}
        return {mode: keys for mode, keys in groups.items() if keys}


class ProgressionLevelConfig(BaseModel):
    """
    A progression transcription level.

    Every pattern must resolve in every mode the level offers keys for.
    """

    id: str = Field(..., min_length=1, description="Level identifier")
    title: str = Field(..., description="Display title")
    description: str = Field("", description="What the level trains")
    progressions: list[list[str]] = Field(
        ..., min_length=1, description="Roman numeral patterns"
    )
    available_keys: AvailableKeys
    base_octave: int = Field(DEFAULT_OCTAVE_BASE, ge=0, le=127, description="MIDI base pitch")
    max_attempts: int = Field(3, gt=0, description="Attempts per progression")
    transcription: TranscriptionOptions = Field(default_factory=TranscriptionOptions)

    model_config = _CAMEL

    @field_validator("progressions")
    @classmethod
    def validate_progressions(cls, v: list[list[str]]) -> list[list[str]]:
        """Patterns can't be empty."""
        for pattern in v:
            if not pattern:
                raise ValueError("Progression pattern must have at least one chord")
        return v

    @model_validator(mode="after")
    def check_patterns_resolve(self) -> ProgressionLevelConfig:
        """Every token must exist in the numeral table of each offered mode."""
        resolver = RomanNumeralResolver()
        for mode in self.available_keys.by_mode():
            for pattern in self.progressions:
                for token in pattern:
                    numeral, _ = resolver.split_token(token)
                    resolver.lookup(numeral, mode)
        return self


LevelConfig = ChordLevelConfig | ProgressionLevelConfig
