#!/usr/bin/env python3
"""
Command-line entry point for the chord trainer engine.

Every command prints one JSON document to stdout:
    {"status": "success", ...} or {"status": "error", "message": ...}

Commands:
    levels              List bundled (and project) levels
    chord               Generate chords for a chord recognition level
    progression         Generate a progression from a level or a pattern
    check               Validate a chord answer
    check-progression   Validate a Roman numeral progression answer
    construct           Validate notes placed to build a named chord
    transcribe          Validate placed notes against a progression
"""

from __future__ import annotations

import argparse
import json
import logging
import random
import sys
from pathlib import Path
from typing import Any

from chuk_chord_trainer.constants import LevelKind
from chuk_chord_trainer.core import get_chord_type
from chuk_chord_trainer.errors import ChordTrainerError
from chuk_chord_trainer.generation import ChordGenerator, ProgressionGenerator
from chuk_chord_trainer.levels import LevelLoader
from chuk_chord_trainer.models import (
    ChordInstance,
    ChordLevelConfig,
    Progression,
    TranscriptionOptions,
    ValidationSettings,
)
from chuk_chord_trainer.validation import (
    acceptable_answers,
    validate_chord_answer,
    validate_construction,
    validate_progression_answer,
    validate_transcription,
)

logger = logging.getLogger(__name__)


def _chord_json(chord: ChordInstance) -> dict[str, Any]:
    data = chord.model_dump(mode="json")
    data["root_name"] = chord.root_name
    return data


def _progression_json(progression: Progression) -> dict[str, Any]:
    data = progression.model_dump(mode="json")
    for chord_data, chord in zip(data["chords"], progression.chords, strict=True):
        chord_data["root_name"] = chord.root_name
    return data


def _loader(args: argparse.Namespace) -> LevelLoader:
    return LevelLoader(project_path=Path(args.project_dir) if args.project_dir else None)


def _build_progression(args: argparse.Namespace, rng: random.Random) -> Progression:
    generator = ProgressionGenerator(rng)
    if args.level:
        return generator.generate_for_level(_loader(args).get_progression_level(args.level))
    if not args.pattern or not args.key:
        raise ChordTrainerError("Give either --level or both --pattern and --key")
    return generator.generate(args.pattern, args.key, args.octave_base)


def cmd_levels(args: argparse.Namespace) -> dict[str, Any]:
    """List levels with basic metadata."""
    levels = _loader(args).list_levels(args.kind)
    return {
        "levels": [
            {
                "id": level.id,
                "kind": (
                    LevelKind.CHORD_RECOGNITION.value
                    if isinstance(level, ChordLevelConfig)
                    else LevelKind.PROGRESSION_TRANSCRIPTION.value
                ),
                "title": level.title,
                "description": level.description,
            }
            for level in levels
        ],
        "count": len(levels),
    }


def cmd_chord(args: argparse.Namespace) -> dict[str, Any]:
    """Generate a run of chords, each avoiding a repeat of the one before."""
    level = _loader(args).get_chord_level(args.level)
    generator = ChordGenerator(random.Random(args.seed))

    chords = []
    previous = None
    for _ in range(args.count):
        previous = generator.generate(level.chord_generation, previous, level.validation)
        chords.append(_chord_json(previous))
    return {"level": level.id, "chords": chords}


def cmd_progression(args: argparse.Namespace) -> dict[str, Any]:
    """Generate one progression."""
    progression = _build_progression(args, random.Random(args.seed))
    return {"progression": _progression_json(progression)}


def cmd_check(args: argparse.Namespace) -> dict[str, Any]:
    """Validate a chord answer."""
    if args.level:
        settings = _loader(args).get_chord_level(args.level).validation
    else:
        settings = ValidationSettings(
            supports_inversions=args.supports_inversions,
            require_inversion_labeling=args.require_inversion_labeling,
        )
    return {
        "answer": args.answer,
        "expected": args.expected,
        "is_correct": validate_chord_answer(args.answer, args.expected, settings),
        "acceptable": sorted(acceptable_answers(args.expected, settings)),
    }


def cmd_check_progression(args: argparse.Namespace) -> dict[str, Any]:
    """Validate a Roman numeral progression answer."""
    return {
        "answer": args.answer,
        "expected": args.expected,
        "is_correct": validate_progression_answer(args.answer, args.expected),
    }


def cmd_construct(args: argparse.Namespace) -> dict[str, Any]:
    """Validate notes placed to build a named chord."""
    chord_type = get_chord_type(args.type)
    if not 0 <= args.inversion <= chord_type.max_inversion:
        raise ChordTrainerError(
            f"{chord_type.display_name} has no inversion {args.inversion} "
            f"(max {chord_type.max_inversion})"
        )
    chord = ChordGenerator().build(args.root, chord_type, args.inversion)
    return {
        "chord": _chord_json(chord),
        "pitches": args.pitches,
        "is_correct": validate_construction(args.pitches, chord),
    }


def cmd_transcribe(args: argparse.Namespace) -> dict[str, Any]:
    """Validate placed notes against a progression."""
    progression = _build_progression(args, random.Random(args.seed))
    if args.level:
        options = _loader(args).get_progression_level(args.level).transcription
    else:
        options = TranscriptionOptions()
    if args.strict_octaves:
        options = options.model_copy(update={"tolerate_octave_errors": False})

    result = validate_transcription(args.pitches, progression, options)
    return {
        "progression": _progression_json(progression),
        "result": result.model_dump(mode="json"),
    }


def _add_progression_source(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--level", help="Progression transcription level id")
    parser.add_argument("--pattern", nargs="+", help="Roman numeral tokens (e.g. I V vi IV)")
    parser.add_argument("--key", help="Key name (e.g. C, F#m, 'Bb major')")
    parser.add_argument(
        "--octave-base", type=int, default=60, help="MIDI base pitch (default: 60)"
    )
    parser.add_argument("--seed", type=int, help="Random seed for reproducible output")


def build_parser() -> argparse.ArgumentParser:
    """The argument parser for all commands."""
    parser = argparse.ArgumentParser(
        prog="chuk-chord-trainer", description="Chord and progression ear-training engine"
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--project-dir", help="Directory of project level files")
    commands = parser.add_subparsers(dest="command", required=True)

    levels = commands.add_parser("levels", help="List available levels")
    levels.add_argument("--kind", choices=[kind.value for kind in LevelKind])
    levels.set_defaults(handler=cmd_levels)

    chord = commands.add_parser("chord", help="Generate chords for a level")
    chord.add_argument("--level", required=True, help="Chord recognition level id")
    chord.add_argument("--count", type=int, default=1, help="Chords to generate (default: 1)")
    chord.add_argument("--seed", type=int, help="Random seed for reproducible output")
    chord.set_defaults(handler=cmd_chord)

    progression = commands.add_parser("progression", help="Generate a progression")
    _add_progression_source(progression)
    progression.set_defaults(handler=cmd_progression)

    check = commands.add_parser("check", help="Validate a chord answer")
    check.add_argument("--answer", required=True, help="The user's answer")
    check.add_argument("--expected", required=True, help="The expected answer")
    check.add_argument("--level", help="Take validation settings from this level")
    check.add_argument("--supports-inversions", action="store_true")
    check.add_argument("--require-inversion-labeling", action="store_true")
    check.set_defaults(handler=cmd_check)

    check_progression = commands.add_parser(
        "check-progression", help="Validate a Roman numeral progression answer"
    )
    check_progression.add_argument("--answer", required=True, help="The user's answer")
    check_progression.add_argument("--expected", required=True, help="The expected answer")
    check_progression.set_defaults(handler=cmd_check_progression)

    construct = commands.add_parser("construct", help="Validate notes placed to build a chord")
    construct.add_argument("--root", required=True, help="Root note name (e.g. C, F#, Bb)")
    construct.add_argument("--type", required=True, help="Chord type key (e.g. major, minor7)")
    construct.add_argument("--inversion", type=int, default=0, help="0 = root position")
    construct.add_argument(
        "--pitches", nargs="*", type=int, default=[], help="Placed MIDI pitches"
    )
    construct.set_defaults(handler=cmd_construct)

    transcribe = commands.add_parser("transcribe", help="Validate placed notes")
    _add_progression_source(transcribe)
    transcribe.add_argument(
        "--pitches", nargs="*", type=int, default=[], help="Placed MIDI pitches"
    )
    transcribe.add_argument(
        "--strict-octaves", action="store_true", help="Compare exact pitches, not pitch classes"
    )
    transcribe.set_defaults(handler=cmd_transcribe)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.debug else logging.INFO)

    try:
        payload = {"status": "success", **args.handler(args)}
    except ChordTrainerError as e:
        logger.exception("Command %s failed", args.command)
        print(json.dumps({"status": "error", "message": str(e)}))
        return 1

    print(json.dumps(payload, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
