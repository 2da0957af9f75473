"""
Result models - what the engine hands to the UI and audio collaborators.

All of these are immutable value objects, constructed fresh per problem.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, computed_field, field_validator

from chuk_chord_trainer.constants import Voicing
from chuk_chord_trainer.core.chord_types import ChordType
from chuk_chord_trainer.core.pitch import PitchClass


class ChordInstance(BaseModel):
    """
    One generated chord: identity, concrete pitches and the canonical answer.

    Pitches are MIDI note numbers in ascending order. Close voicings have
    exactly one pitch per chord tone; open voicings may add doublings.
    """

    root: PitchClass = Field(..., description="Chord root pitch class")
    chord_type: ChordType = Field(..., description="Chord quality")
    inversion: int = Field(0, ge=0, description="0 = root position")
    pitches: tuple[int, ...] = Field(..., min_length=1, description="MIDI pitches, ascending")
    expected_answer: str = Field(..., description="Canonical answer, e.g. 'Cm/1'")
    voicing: Voicing = Field(Voicing.CLOSE, description="Close or open voicing")
    roman_numeral: str | None = Field(None, description="Source token for progression chords")

    model_config = {"frozen": True}

    @field_validator("pitches")
    @classmethod
    def validate_pitches(cls, v: tuple[int, ...]) -> tuple[int, ...]:
        """Pitches are valid MIDI numbers in ascending order."""
        if any(not 0 <= pitch <= 127 for pitch in v):
            raise ValueError(f"Pitches must be MIDI note numbers 0-127: {v}")
        if list(v) != sorted(v):
            raise ValueError(f"Pitches must be ascending: {v}")
        return v

    @property
    def root_name(self) -> str:
        return self.root.spell()

    @property
    def pitch_classes(self) -> frozenset[PitchClass]:
        return frozenset(PitchClass.from_midi(pitch) for pitch in self.pitches)

    @property
    def identity(self) -> tuple[PitchClass, str, int]:
        """(root, chord type key, inversion) - what makes two problems 'the same'."""
        return (self.root, self.chord_type.key, self.inversion)


class Progression(BaseModel):
    """
    A Roman numeral pattern realized in a key.

    `all_pitches` is every chord's pitches concatenated in order,
    repeats included.
    """

    key: str = Field(..., description="Key signature name")
    pattern: tuple[str, ...] = Field(..., min_length=1, description="Roman numeral tokens")
    chords: tuple[ChordInstance, ...] = Field(..., description="One chord per token")
    all_pitches: tuple[int, ...] = Field(..., description="Concatenated chord pitches")

    model_config = {"frozen": True}

    @computed_field  # type: ignore[prop-decorator]
    @property
    def expected_answer(self) -> str:
        """Pattern written the way users type it ('I - V - vi - IV')."""
        return " - ".join(self.pattern)


class ValidationResult(BaseModel):
    """Outcome of checking a placed-note transcription."""

    is_correct: bool = Field(..., description="Answer passes")
    score: int = Field(..., ge=0, le=100, description="Score 0-100")
    total_count: int = Field(..., ge=0, description="Notes in the progression")
    correct_count: int = Field(..., ge=0, description="Notes matched")
    wrong_count: int = Field(..., ge=0, description="Notes placed that don't belong")
    missing: tuple[int, ...] = Field(default=(), description="Expected pitches not placed")
    extra: tuple[int, ...] = Field(default=(), description="Placed pitches not expected")
    feedback: str = Field("", description="Human-readable summary")

    model_config = {"frozen": True}
