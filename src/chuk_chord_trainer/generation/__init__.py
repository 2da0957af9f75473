"""
Generation - chord and progression instances from level settings.

- ChordGenerator: random chords (close, inverted or open voicing)
- ProgressionGenerator: Roman numeral patterns realized in a key
- normalize_range: octave-shift a chord into a pitch window
"""

from chuk_chord_trainer.generation.chord import ChordGenerator, format_answer, reroot_symmetric
from chuk_chord_trainer.generation.progression import ProgressionGenerator
from chuk_chord_trainer.generation.range import normalize_range
from chuk_chord_trainer.generation.sampling import RandomSource, default_rng
from chuk_chord_trainer.generation.voicing import close_voicing, invert, open_voicing

__all__ = [
    "ChordGenerator",
    "ProgressionGenerator",
    "RandomSource",
    "close_voicing",
    "default_rng",
    "format_answer",
    "invert",
    "normalize_range",
    "open_voicing",
    "reroot_symmetric",
]
