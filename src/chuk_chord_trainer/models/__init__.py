"""
Pydantic models for the chord trainer.

This module provides:
- ChordLevelConfig: A chord recognition level (generation + validation settings)
- ProgressionLevelConfig: A progression transcription level
- ChordInstance: One generated chord with its expected answer
- Progression: A pattern realized in a key
- ValidationResult: Outcome of a transcription check
"""

from chuk_chord_trainer.models.level import (
    AvailableKeys,
    ChordGenerationSettings,
    ChordLevelConfig,
    LevelConfig,
    ProgressionLevelConfig,
    TranscriptionOptions,
    ValidationSettings,
    VoicingSettings,
)
from chuk_chord_trainer.models.results import ChordInstance, Progression, ValidationResult

__all__ = [
    "AvailableKeys",
    "ChordGenerationSettings",
    "ChordInstance",
    "ChordLevelConfig",
    "LevelConfig",
    "Progression",
    "ProgressionLevelConfig",
    "TranscriptionOptions",
    "ValidationResult",
    "ValidationSettings",
    "VoicingSettings",
]
