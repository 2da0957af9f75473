"""
Chord generator - turns a level's generation settings into chord instances.

The generator is the only place randomness enters chord construction;
`build` is fully deterministic for a given (root, type, inversion, octave).
"""

from __future__ import annotations

import logging

from chuk_chord_trainer.constants import (
    DEFAULT_MAX_PITCH,
    DEFAULT_MIN_PITCH,
    DEFAULT_OCTAVE_BASE,
    EMPHASIZED_CHORD_WEIGHT,
    MAX_DUPLICATE_ATTEMPTS,
    Inversion,
    Voicing,
)
from chuk_chord_trainer.core.chord_types import ChordType, get_chord_type
from chuk_chord_trainer.core.pitch import PitchClass
from chuk_chord_trainer.generation.range import normalize_range
from chuk_chord_trainer.generation.sampling import (
    RandomSource,
    choose,
    default_rng,
    weighted_choose,
)
from chuk_chord_trainer.generation.voicing import close_voicing, invert, open_voicing
from chuk_chord_trainer.models.level import ChordGenerationSettings, ValidationSettings
from chuk_chord_trainer.models.results import ChordInstance

logger = logging.getLogger(__name__)


def reroot_symmetric(
    root: PitchClass, chord_type: ChordType, inversion: int
) -> tuple[PitchClass, int]:
    """
    Re-express an inversion of a symmetric chord as root position on a new root.

    Every inversion of an augmented triad is another augmented triad, so
    C aug in first inversion is heard (and answered) as E aug.
    """
    if not chord_type.symmetric or inversion == 0:
        return root, inversion
    return root.transpose(chord_type.intervals[inversion]), 0


def format_answer(
    root: PitchClass,
    chord_type: ChordType,
    inversion: int = 0,
    require_inversion_labeling: bool = False,
    prefer_flats: bool = False,
) -> str:
    """
    Canonical answer text: root name + symbol, '/k' when labeling inversions.

    Examples:
        format_answer(PitchClass.D, CHORD_TYPES["minor"]) == "Dm"
        format_answer(PitchClass.C, CHORD_TYPES["major"], 1, True) == "C/1"
    """
    answer = f"{root.spell(prefer_flats)}{chord_type.symbol}"
    if require_inversion_labeling and inversion > 0:
        answer += f"/{inversion}"
    return answer


class ChordGenerator:
    """
    Generates chord instances from level settings.

    Args:
        rng: Random source (anything with `random()`); a fresh
            random.Random when omitted
        max_attempts: Bound on re-draws when the previous chord repeats
        min_pitch: Bottom of the output window
        max_pitch: Top of the output window

    Example:
        generator = ChordGenerator(random.Random(7))
        chord = generator.generate(level.chord_generation, previous, level.validation)
        chord.pitches, chord.expected_answer
    """

    def __init__(
        self,
        rng: RandomSource | None = None,
        max_attempts: int = MAX_DUPLICATE_ATTEMPTS,
        min_pitch: int = DEFAULT_MIN_PITCH,
        max_pitch: int = DEFAULT_MAX_PITCH,
    ):
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")
        self.rng = rng if rng is not None else default_rng()
        self.max_attempts = max_attempts
        self.min_pitch = min_pitch
        self.max_pitch = max_pitch

    def build(
        self,
        root: PitchClass | str | int,
        chord_type: ChordType | str,
        inversion: int = 0,
        octave_base: int = DEFAULT_OCTAVE_BASE,
        require_inversion_labeling: bool = False,
        voicing: Voicing = Voicing.CLOSE,
        double_root: bool = True,
        roman_numeral: str | None = None,
        prefer_flats: bool = False,
    ) -> ChordInstance:
        """
        Build one chord instance.

        Close voicings are deterministic. Open voicings draw their layout
        from the generator's random source and ignore the inversion.

        Args:
            root: Root pitch class or note name
            chord_type: ChordType or catalog key
            inversion: 0 = root position
            octave_base: MIDI pitch of C in the chord's octave (C4 = 60)
            require_inversion_labeling: Append '/k' to the expected answer
            voicing: Close or open
            double_root: Allow the open wide-spread high root
            roman_numeral: Source token when building progression chords
            prefer_flats: Spell the root with flats

        Returns:
            ChordInstance with range-normalized pitches

        Raises:
            ConfigurationError: Unknown root name or chord type key
        """
        root = PitchClass.parse(root)
        if isinstance(chord_type, str):
            chord_type = get_chord_type(chord_type)
        if not 0 <= inversion <= chord_type.max_inversion:
            raise ValueError(
                f"{chord_type.display_name} has no inversion {inversion} "
                f"(max {chord_type.max_inversion})"
            )

        if voicing is Voicing.OPEN:
            inversion = 0
            pitches = open_voicing(root, chord_type, octave_base, self.rng, double_root)
        else:
            root, inversion = reroot_symmetric(root, chord_type, inversion)
            pitches = invert(close_voicing(root, chord_type, octave_base), inversion)

        pitches = normalize_range(pitches, self.min_pitch, self.max_pitch)

        return ChordInstance(
            root=root,
            chord_type=chord_type,
            inversion=inversion,
            pitches=tuple(pitches),
            expected_answer=format_answer(
                root, chord_type, inversion, require_inversion_labeling, prefer_flats
            ),
            voicing=voicing,
            roman_numeral=roman_numeral,
        )

    def generate(
        self,
        settings: ChordGenerationSettings,
        previous: ChordInstance | None = None,
        validation: ValidationSettings | None = None,
    ) -> ChordInstance:
        """
        Draw a random chord allowed by the settings.

        Draw order per attempt: root, chord type, inversion, octave. If the
        result has the same (root, type, inversion) as `previous`, everything
        is re-drawn, up to `max_attempts` times; after that the repeat is
        accepted.

        Args:
            settings: The level's chord generation settings
            previous: The chord shown last, to avoid immediate repeats
            validation: The level's validation settings (inversion labeling)

        Returns:
            A new ChordInstance
        """
        require_labeling = bool(validation and validation.require_inversion_labeling)
        type_keys = list(settings.chord_types)
        weights = [
            EMPHASIZED_CHORD_WEIGHT if key in settings.emphasized_chord_types else 1.0
            for key in type_keys
        ]

        for attempt in range(1, self.max_attempts + 1):
            root = choose(self.rng, settings.roots, what="roots")
            chord_type = get_chord_type(
                weighted_choose(self.rng, type_keys, weights, what="chord types")
            )
            allowed = [
                inversion for inversion in settings.inversions if inversion < chord_type.size
            ]
            inversion = int(choose(self.rng, allowed or [Inversion.ROOT], what="inversions"))
            octave = choose(self.rng, settings.octaves, what="octaves")

            if settings.is_open_voicing:
                inversion = 0
            heard_root, heard_inversion = reroot_symmetric(root, chord_type, inversion)
            identity = (heard_root, chord_type.key, heard_inversion)
            if previous is None or previous.identity != identity:
                break
        else:
            logger.debug(
                "Accepting repeat of %s after %d attempts", previous.expected_answer, attempt
            )

        chord = self.build(
            root,
            chord_type,
            inversion,
            octave_base=PitchClass.C.to_midi(octave),
            require_inversion_labeling=require_labeling,
            voicing=Voicing.OPEN if settings.is_open_voicing else Voicing.CLOSE,
            double_root=settings.voicing_settings.double_root,
        )
        logger.debug("Generated %s: %s", chord.expected_answer, chord.pitches)
        return chord
