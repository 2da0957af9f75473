"""
Chord answer validation - free-text answers against a chord's canonical answer.

Rather than normalizing the user's text toward one form, the validator
expands the expected answer into every acceptable spelling (all symbol
abbreviations, both enharmonic root spellings, inversion forms) and checks
membership.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from functools import cache

from chuk_chord_trainer.constants import Inversion
from chuk_chord_trainer.core.chord_types import CHORD_TYPES, ChordType
from chuk_chord_trainer.core.pitch import PitchClass
from chuk_chord_trainer.errors import ConfigurationError
from chuk_chord_trainer.models.level import ValidationSettings
from chuk_chord_trainer.validation.normalize import canonicalize, enharmonic_swaps

logger = logging.getLogger(__name__)

_ROOT = re.compile(r"^\s*(?P<root>[A-Ga-g](?:#|b|♯|♭)?)(?P<rest>.*)$", re.DOTALL)
_SLASH = re.compile(
    r"^(?P<quality>.*?)\s*/\s*(?P<bass>\d+|first|second|third|fourth|[A-Ga-g](?:#|b|♯|♭)?)\s*$",
    re.IGNORECASE | re.DOTALL,
)

# Neutral root used to canonicalize symbols consistently with full answers
_NEUTRAL_ROOT = "C"


@dataclass(frozen=True)
class ParsedChord:
    """An answer broken into root, quality and inversion."""

    root_name: str
    root: PitchClass
    chord_type: ChordType
    inversion: int = 0


@cache
def _symbol_index() -> dict[str, ChordType]:
    """Canonical suffix -> chord type. Catalog order decides shared spellings."""
    index: dict[str, ChordType] = {}
    for chord_type in CHORD_TYPES.values():
        for spelling in chord_type.spellings:
            suffix = canonicalize(_NEUTRAL_ROOT + spelling)[len(_NEUTRAL_ROOT) :]
            index.setdefault(suffix, chord_type)
    return index


def find_chord_type(suffix: str) -> ChordType | None:
    """Chord type whose symbol or abbreviation matches a suffix ('maj7', 'M7', '-')."""
    canonical = canonicalize(_NEUTRAL_ROOT + suffix)[len(_NEUTRAL_ROOT) :]
    return _symbol_index().get(canonical)


def parse_chord_answer(text: str) -> ParsedChord | None:
    """
    Split an answer like 'Dm/1', 'Dm/F' or 'F#maj7' into its parts.

    Returns None when the text isn't a recognizable chord.
    """
    match = _ROOT.match(text)
    if match is None:
        return None

    root_name = match.group("root")
    rest = match.group("rest")
    bass_text = None
    slash = _SLASH.match(rest)
    if slash is not None:
        rest, bass_text = slash.group("quality"), slash.group("bass")

    chord_type = find_chord_type(rest)
    if chord_type is None:
        return None
    root = PitchClass.parse(root_name)

    inversion = 0
    if bass_text is not None:
        found = _parse_inversion(bass_text, root, chord_type)
        if found is None:
            return None
        inversion = found

    normalized_root = root_name[0].upper() + root_name[1:].replace("♯", "#").replace("♭", "b")
    return ParsedChord(normalized_root, root, chord_type, inversion)


def _parse_inversion(bass_text: str, root: PitchClass, chord_type: ChordType) -> int | None:
    if bass_text.isdigit():
        inversion = int(bass_text)
    elif bass_text.upper() in Inversion.__members__:
        inversion = Inversion[bass_text.upper()].value
    else:
        try:
            bass = PitchClass.parse(bass_text)
        except ConfigurationError:
            return None
        tones = chord_type.get_pitch_classes(root)
        if bass not in tones:
            return None
        inversion = tones.index(bass)
    if inversion > chord_type.max_inversion:
        return None
    return inversion


def _spellings(pitch_class: PitchClass, given: str | None = None) -> list[str]:
    names = [given] if given else []
    names += [pitch_class.spell(), pitch_class.spell(prefer_flats=True)]
    return list(dict.fromkeys(names))


def acceptable_answers(
    expected_text: str, settings: ValidationSettings | None = None
) -> frozenset[str]:
    """
    Every canonical answer accepted for an expected answer.

    The set covers all spellings of the chord type for both enharmonic root
    spellings. When the level supports and requires inversion labeling it
    also covers the inversion forms ('/1', '/first', 'first inversion',
    '1st inversion', slash-bass 'C/E' with either bass spelling) or, in root
    position, 'root' and 'root position'. The bare chord is always included.

    Unparseable expected answers only accept themselves.
    """
    settings = settings or ValidationSettings()
    parsed = parse_chord_answer(expected_text)
    if parsed is None:
        logger.debug("Could not parse expected answer %r", expected_text)
        return frozenset({canonicalize(expected_text)})

    label_inversions = settings.supports_inversions and settings.require_inversion_labeling
    inversion = Inversion(parsed.inversion) if parsed.inversion <= Inversion.FOURTH else None
    bass_names = []
    if parsed.inversion > 0:
        bass = parsed.chord_type.bass_pitch_class(parsed.root, parsed.inversion)
        bass_names = _spellings(bass)

    answers: set[str] = set()
    for root_name in _spellings(parsed.root, parsed.root_name):
        for spelling in parsed.chord_type.spellings:
            base = root_name + spelling
            answers.add(canonicalize(base))
            if not label_inversions:
                continue
            if parsed.inversion == 0:
                answers.add(canonicalize(f"{base} root"))
                answers.add(canonicalize(f"{base} root position"))
                continue
            answers.add(canonicalize(f"{base}/{parsed.inversion}"))
            if inversion is not None:
                answers.add(canonicalize(f"{base}/{inversion.label}"))
                answers.add(canonicalize(f"{base} {inversion.label} inversion"))
                answers.add(canonicalize(f"{base} {inversion.ordinal} inversion"))
            for bass_name in bass_names:
                answers.add(canonicalize(f"{base}/{bass_name}"))
    return frozenset(answers)


def validate_chord_answer(
    user_text: str, expected_text: str, settings: ValidationSettings | None = None
) -> bool:
    """
    Check a free-text chord answer.

    Accepted when the canonical forms match directly, when the answer is in
    `acceptable_answers(expected_text, settings)`, or when swapping one
    sharp/flat spelling in the answer (C#/Db, D#/Eb, F#/Gb, G#/Ab, A#/Bb)
    makes it acceptable.

    Examples:
        validate_chord_answer("c maj", "C") is True
        validate_chord_answer("Dbm", "C#m") is True
        validate_chord_answer("C/E", "C/1", ValidationSettings(
            supports_inversions=True, require_inversion_labeling=True)) is True
    """
    answer = canonicalize(user_text)
    if not answer:
        return False
    if answer == canonicalize(expected_text):
        return True

    accepted = acceptable_answers(expected_text, settings)
    if answer in accepted:
        return True
    return any(swapped in accepted for swapped in enharmonic_swaps(answer))
