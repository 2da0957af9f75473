"""
Range normalization - keep a chord inside a pitch window by whole octaves.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from chuk_chord_trainer.constants import (
    DEFAULT_MAX_PITCH,
    DEFAULT_MIN_PITCH,
    MAX_RANGE_ITERATIONS,
)

logger = logging.getLogger(__name__)


def normalize_range(
    pitches: Iterable[int],
    min_pitch: int = DEFAULT_MIN_PITCH,
    max_pitch: int = DEFAULT_MAX_PITCH,
    max_iterations: int = MAX_RANGE_ITERATIONS,
) -> list[int]:
    """
    Shift a chord by octaves until every pitch lies in [min_pitch, max_pitch].

    The whole chord moves together, so pitch classes and the intervals between
    pitches are preserved exactly. Each pass shifts down while the top is above
    the window, then up while the bottom is below it. A chord wider than the
    window can never fit; after `max_iterations` passes the best effort is
    returned and a warning logged.

    Args:
        pitches: MIDI pitches (any order; order is preserved)
        min_pitch: Lowest allowed pitch
        max_pitch: Highest allowed pitch
        max_iterations: Bound on the fixed-point loop

    Returns:
        The shifted pitches

    Examples:
        normalize_range([10, 20, 30]) == [34, 44, 54]
        normalize_range([90, 94, 97]) == [66, 70, 73]
    """
    result = list(pitches)
    if not result:
        return result

    for _ in range(max_iterations):
        if min(result) >= min_pitch and max(result) <= max_pitch:
            return result
        while max(result) > max_pitch and min(result) - 12 >= 0:
            result = [pitch - 12 for pitch in result]
        while min(result) < min_pitch:
            result = [pitch + 12 for pitch in result]

    if min(result) >= min_pitch and max(result) <= max_pitch:
        return result

    logger.warning(
        "Could not fit %s into %d-%d after %d passes; using best effort",
        result,
        min_pitch,
        max_pitch,
        max_iterations,
    )
    return result
