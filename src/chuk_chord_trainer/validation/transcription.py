"""
Transcription validation - placed notes against a progression's pitches.

Notes are compared as multisets: the same pitch recurring in consecutive
chords has to be placed that many times. Answers can be a flat list of
pitches (compared against the whole progression) or one list per chord
(compared chord by chord, so the right notes under the wrong chord fail).
"""

from __future__ import annotations

import math
from collections import Counter
from collections.abc import Sequence

from chuk_chord_trainer.models.level import TranscriptionOptions
from chuk_chord_trainer.models.results import Progression, ValidationResult


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values (2.5 -> 3)."""
    return math.floor(value + 0.5)


def _multiset_diff(
    expected: Sequence[int], placed: Sequence[int], by_pitch_class: bool
) -> tuple[int, list[int], list[int]]:
    """(matched count, missing pitches, extra pitches) for one comparison unit."""

    def key(pitch: int) -> int:
        return pitch % 12 if by_pitch_class else pitch

    expected_counts = Counter(key(pitch) for pitch in expected)
    placed_counts = Counter(key(pitch) for pitch in placed)
    matched = sum((expected_counts & placed_counts).values())

    # Report actual pitches, taking them in order until each key's surplus is used up
    missing_left = expected_counts - placed_counts
    missing = []
    for pitch in expected:
        if missing_left[key(pitch)] > 0:
            missing_left[key(pitch)] -= 1
            missing.append(pitch)

    extra_left = placed_counts - expected_counts
    extra = []
    for pitch in placed:
        if extra_left[key(pitch)] > 0:
            extra_left[key(pitch)] -= 1
            extra.append(pitch)

    return matched, missing, extra


def _feedback(is_correct: bool, score: int, missing: int, wrong: int) -> str:
    if is_correct:
        return "Perfect transcription!" if score == 100 else f"Great job! Score: {score}/100"
    issues = []
    if missing:
        issues.append(f"Missing {missing} note(s)")
    if wrong:
        issues.append(f"{wrong} incorrect note(s)")
    summary = ", ".join(issues) or "Not enough notes matched"
    return f"Not quite right. {summary}. Score: {score}/100"


def validate_transcription(
    user_pitches: Sequence[int] | Sequence[Sequence[int]],
    progression: Progression | Sequence[int],
    options: TranscriptionOptions | None = None,
) -> ValidationResult:
    """
    Score a transcription.

    Args:
        user_pitches: Placed MIDI pitches, flat or grouped per chord
        progression: The Progression (or its flat pitch list) to check against
        options: Tolerances and scoring; defaults to octave-tolerant exact match

    Returns:
        ValidationResult. `score` is
        round(max(0, accuracy * 100 - penalty * (wrong + missing))) with
        accuracy = correct / total. `is_correct` needs no missing notes
        (unless tolerated), no extra notes (unless tolerated) and at least
        `pass_ratio` of the notes matched.
    """
    options = options or TranscriptionOptions()
    by_pitch_class = options.tolerate_octave_errors

    grouped = bool(user_pitches) and not isinstance(user_pitches[0], int)
    if grouped:
        if not isinstance(progression, Progression):
            raise TypeError("Grouped answers need a Progression to compare chord by chord")
        expected_groups = [list(chord.pitches) for chord in progression.chords]
        placed_groups = [list(group) for group in user_pitches]  # type: ignore[arg-type]
        # Pad so surplus chords count as extra and absent chords as missing
        width = max(len(expected_groups), len(placed_groups))
        expected_groups += [[] for _ in range(width - len(expected_groups))]
        placed_groups += [[] for _ in range(width - len(placed_groups))]
    else:
        expected_flat = (
            list(progression.all_pitches)
            if isinstance(progression, Progression)
            else list(progression)
        )
        expected_groups = [expected_flat]
        placed_groups = [list(user_pitches)]  # type: ignore[arg-type]

    correct = 0
    missing: list[int] = []
    extra: list[int] = []
    for expected, placed in zip(expected_groups, placed_groups, strict=True):
        matched, group_missing, group_extra = _multiset_diff(expected, placed, by_pitch_class)
        correct += matched
        missing.extend(group_missing)
        extra.extend(group_extra)

    total = sum(len(group) for group in expected_groups)
    wrong = len(extra)
    if total:
        accuracy = correct / total
    else:
        accuracy = 0.0 if extra else 1.0
    penalty = options.wrong_note_penalty * (wrong + len(missing))
    score = min(100, max(0, round_half_up(accuracy * 100 - penalty)))

    is_correct = (
        (not missing or options.tolerate_missing)
        and (not extra or options.tolerate_extra)
        and correct >= options.pass_ratio * total
    )

    return ValidationResult(
        is_correct=is_correct,
        score=score,
        total_count=total,
        correct_count=correct,
        wrong_count=wrong,
        missing=tuple(missing),
        extra=tuple(extra),
        feedback=_feedback(is_correct, score, len(missing), wrong),
    )
