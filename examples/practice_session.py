#!/usr/bin/env python3
"""
Example: A short practice session.

This walks through both kinds of training level: naming generated chords
(checked against free-text answers) and transcribing a Roman numeral
progression note by note.

Usage:
    python examples/practice_session.py
"""

import random

from chuk_chord_trainer.core import midi_note_name
from chuk_chord_trainer.generation import ChordGenerator, ProgressionGenerator
from chuk_chord_trainer.levels import LevelLoader
from chuk_chord_trainer.validation import (
    validate_chord_answer,
    validate_progression_answer,
    validate_transcription,
)


def main() -> None:
    """Run a scripted practice session."""
    print("CHUK Chord Trainer Demo")
    print("=" * 40)
    print()

    loader = LevelLoader()
    rng = random.Random(42)

    print("Available levels:")
    for level in loader.list_levels():
        print(f"  {level.id}: {level.title}")
    print()

    # Chord recognition
    level = loader.get_chord_level("basic-triads-2")
    print(f"Level: {level.title}")
    generator = ChordGenerator(rng)
    previous = None
    for number in range(1, 6):
        chord = generator.generate(level.chord_generation, previous, level.validation)
        notes = " ".join(midi_note_name(pitch) or "?" for pitch in chord.pitches)
        # Answer in lowercase with the long quality name
        answer = chord.expected_answer.lower().replace("dim", " diminished")
        correct = validate_chord_answer(answer, chord.expected_answer, level.validation)
        print(f"  {number}. {notes:<16} answer {answer!r:<18} -> {'OK' if correct else 'WRONG'}")
        previous = chord
    print()

    # Progression transcription
    level = loader.get_progression_level("progression-transcription-2")
    progression = ProgressionGenerator(rng).generate_for_level(level)
    print(f"Level: {level.title}")
    print(f"  Key: {progression.key}")
    print(f"  Progression: {progression.expected_answer}")
    for chord in progression.chords:
        notes = " ".join(midi_note_name(pitch) or "?" for pitch in chord.pitches)
        print(f"    {chord.roman_numeral:<6} {chord.expected_answer:<6} {notes}")

    # Same notes an octave low, with the last one forgotten
    placed = [pitch - 12 for pitch in progression.all_pitches[:-1]]
    result = validate_transcription(placed, progression, level.transcription)
    print(f"  Transcription: {result.feedback}")

    typed = progression.expected_answer.lower().replace(" - ", " ")
    print(f"  Typed {typed!r}: {validate_progression_answer(typed, progression.expected_answer)}")


if __name__ == "__main__":
    main()
