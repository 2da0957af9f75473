"""
Construction validation - notes a user placed to build a named chord.

The user is asked for a chord (root, type, inversion) and places notes on a
keyboard. Octave placement is free; what matters is which chord tones are
there and which one sits lowest.
"""

from __future__ import annotations

from collections.abc import Sequence

from chuk_chord_trainer.core.pitch import PitchClass
from chuk_chord_trainer.models.results import ChordInstance


def validate_construction(placed_pitches: Sequence[int], chord: ChordInstance) -> bool:
    """
    Check placed notes against the chord they were meant to build.

    Correct means:
        - one note per chord tone (no doublings, nothing left out)
        - the placed pitch classes are exactly the chord's pitch classes
        - the lowest placed note is the inversion's bass tone

    Args:
        placed_pitches: MIDI pitches in any order
        chord: The requested chord (its pitches are not compared directly)

    Returns:
        True if the placed notes build the chord in the requested inversion
    """
    if len(placed_pitches) != chord.chord_type.size:
        return False

    chord_tones = set(chord.chord_type.get_pitch_classes(chord.root))
    placed = [PitchClass.from_midi(pitch) for pitch in placed_pitches]
    if set(placed) != chord_tones:
        return False

    lowest = PitchClass.from_midi(min(placed_pitches))
    return lowest == chord.chord_type.bass_pitch_class(chord.root, chord.inversion)
