"""
Progression generator - Roman numeral patterns realized in a key.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from chuk_chord_trainer.constants import (
    DEFAULT_OCTAVE_BASE,
    PROGRESSION_MAX_PITCH,
    PROGRESSION_MIN_PITCH,
)
from chuk_chord_trainer.core.keys import KeySignature, get_key_signature
from chuk_chord_trainer.core.roman import RomanNumeralResolver
from chuk_chord_trainer.generation.chord import ChordGenerator
from chuk_chord_trainer.generation.sampling import RandomSource, choose, default_rng
from chuk_chord_trainer.models.level import ProgressionLevelConfig
from chuk_chord_trainer.models.results import Progression

logger = logging.getLogger(__name__)


class ProgressionGenerator:
    """
    Builds progressions chord by chord.

    Each token is resolved independently; chords are voiced in close
    position from `octave_base` and kept inside C3-C6.

    Example:
        generator = ProgressionGenerator()
        progression = generator.generate(["I", "IV", "V", "I"], "C")
        progression.all_pitches  # 12 pitches, repeats kept
    """

    def __init__(
        self,
        rng: RandomSource | None = None,
        chord_generator: ChordGenerator | None = None,
        resolver: RomanNumeralResolver | None = None,
    ):
        self.rng = rng if rng is not None else default_rng()
        self.chord_generator = chord_generator or ChordGenerator(
            self.rng, min_pitch=PROGRESSION_MIN_PITCH, max_pitch=PROGRESSION_MAX_PITCH
        )
        self.resolver = resolver or RomanNumeralResolver()

    def generate(
        self,
        pattern: Sequence[str],
        key: KeySignature | str,
        octave_base: int = DEFAULT_OCTAVE_BASE,
    ) -> Progression:
        """
        Realize a pattern in a key.

        Args:
            pattern: Roman numeral tokens, e.g. ['I', 'V/3', 'vi', 'IV']
            key: KeySignature or key name
            octave_base: MIDI pitch the chords are built from

        Returns:
            Progression with one chord per token and the concatenated pitches

        Raises:
            ConfigurationError: Unknown key or token
        """
        if not pattern:
            raise ValueError("Progression pattern must have at least one chord")
        signature = key if isinstance(key, KeySignature) else get_key_signature(key)

        chords = []
        for token in pattern:
            resolved = self.resolver.resolve(token, signature)
            chords.append(
                self.chord_generator.build(
                    resolved.root,
                    resolved.chord_type,
                    resolved.inversion,
                    octave_base=octave_base,
                    roman_numeral=token,
                    prefer_flats=signature.prefers_flats,
                )
            )

        all_pitches = tuple(pitch for chord in chords for pitch in chord.pitches)
        logger.debug(
            "Generated %s in %s: %s", " - ".join(pattern), signature.name, all_pitches
        )
        return Progression(
            key=signature.name,
            pattern=tuple(pattern),
            chords=tuple(chords),
            all_pitches=all_pitches,
        )

    def generate_for_level(self, level: ProgressionLevelConfig) -> Progression:
        """
        Pick a pattern, then a key mode, then a key, and realize the pattern.

        Modes with no keys listed are never picked.
        """
        pattern = choose(self.rng, level.progressions, what="progressions")
        keys_by_mode = level.available_keys.by_mode()
        mode = choose(self.rng, list(keys_by_mode), what="key modes")
        key = choose(self.rng, keys_by_mode[mode], what="keys")
        return self.generate(pattern, key, level.base_octave)
