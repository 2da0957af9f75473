"""
Voicings - laying chord tones out as concrete MIDI pitches.

Close voicing stacks the intervals on the root in definition order.
Inversions rotate the lowest tones up an octave. Open voicings spread the
chord over three octaves around a middle octave, with optional doublings.
"""

from __future__ import annotations

import logging

from chuk_chord_trainer.constants import (
    DOUBLE_ROOT_CHANCE,
    OPEN_VOICING_WEIGHTS,
    WIDE_SPREAD_HIGH_ROOT_CHANCE,
    OpenVoicingStrategy,
)
from chuk_chord_trainer.core.chord_types import ChordType
from chuk_chord_trainer.core.pitch import PitchClass
from chuk_chord_trainer.generation.sampling import RandomSource, chance, choose, weighted_choose

logger = logging.getLogger(__name__)


def close_voicing(root: PitchClass, chord_type: ChordType, octave_base: int) -> list[int]:
    """
    Root-position pitches: octave_base + root + interval, in definition order.

    Examples:
        close_voicing(PitchClass.C, CHORD_TYPES["major"], 60) == [60, 64, 67]
    """
    return [octave_base + root.value + interval for interval in chord_type.intervals]


def invert(pitches: list[int], inversion: int) -> list[int]:
    """
    Apply an inversion to a root-position voicing.

    The first `inversion` pitches move to the top, each an octave higher.
    A left-to-right pass then raises any pitch that isn't strictly above its
    predecessor by octaves, so the result is always strictly ascending.

    Examples:
        invert([60, 64, 67], 1) == [64, 67, 72]
        invert([60, 64, 67], 2) == [67, 72, 76]
    """
    if inversion <= 0:
        return list(pitches)
    if inversion >= len(pitches):
        raise ValueError(f"Inversion {inversion} needs more than {len(pitches)} pitches")

    rotated = pitches[inversion:] + [pitch + 12 for pitch in pitches[:inversion]]

    ascending = [rotated[0]]
    for pitch in rotated[1:]:
        while pitch <= ascending[-1]:
            pitch += 12
        ascending.append(pitch)
    return ascending


def choose_open_strategy(rng: RandomSource) -> OpenVoicingStrategy:
    """One weighted draw over the three open layouts."""
    strategies = list(OPEN_VOICING_WEIGHTS)
    weights = [OPEN_VOICING_WEIGHTS[strategy] for strategy in strategies]
    return weighted_choose(rng, strategies, weights, what="open voicing strategies")


def open_voicing(
    root: PitchClass,
    chord_type: ChordType,
    octave_base: int,
    rng: RandomSource,
    double_root: bool = True,
    strategy: OpenVoicingStrategy | None = None,
) -> list[int]:
    """
    Spread a chord over the octaves around `octave_base`.

    Layouts:
        wide_spread: root an octave below, other tones in the middle octave,
            sometimes the root again an octave above
        octave_doubling: close voicing in the middle octave, plus the root
            (usually) or the third chord entry an octave up
        mixed: low root, middle tones, one random chord tone an octave up

    Tones are folded to pitch classes before placement, so extended intervals
    (9ths, 13ths) land inside their octave. Duplicates are dropped and any
    chord tone that went missing is put back in the middle octave.

    Args:
        root: Chord root
        chord_type: Chord quality
        octave_base: MIDI pitch of C in the middle octave
        rng: Random source
        double_root: Allow the wide-spread high root
        strategy: Force a layout instead of drawing one

    Returns:
        Ascending, de-duplicated MIDI pitches
    """
    middle = octave_base
    low = middle - 12
    high = middle + 12

    def fold(interval: int) -> int:
        return (root.value + interval) % 12

    if strategy is None:
        strategy = choose_open_strategy(rng)

    pitches: list[int] = []
    if strategy is OpenVoicingStrategy.WIDE_SPREAD:
        pitches.append(low + root.value)
        pitches.extend(middle + fold(interval) for interval in chord_type.intervals[1:])
        if double_root and chance(rng, WIDE_SPREAD_HIGH_ROOT_CHANCE):
            pitches.append(high + root.value)
    elif strategy is OpenVoicingStrategy.OCTAVE_DOUBLING:
        pitches.extend(middle + fold(interval) for interval in chord_type.intervals)
        doubled = (
            chord_type.intervals[0]
            if chance(rng, DOUBLE_ROOT_CHANCE)
            else chord_type.intervals[2]
        )
        pitches.append(high + fold(doubled))
    else:
        pitches.append(low + root.value)
        pitches.extend(middle + fold(interval) for interval in chord_type.intervals[1:])
        doubled = choose(rng, chord_type.intervals, what="chord tones")
        pitches.append(high + fold(doubled))

    voiced = sorted(set(pitches))

    present = {pitch % 12 for pitch in voiced}
    for pitch_class in chord_type.get_pitch_classes(root):
        if pitch_class.value not in present:
            voiced.append(middle + pitch_class.value)
            present.add(pitch_class.value)

    logger.debug(
        "Open voicing %s for %s%s: %s", strategy.value, root.spell(), chord_type.symbol, voiced
    )
    return sorted(voiced)
