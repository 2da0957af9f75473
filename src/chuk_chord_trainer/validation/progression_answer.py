"""
Progression answer validation - Roman numeral answers like 'I - V - vi - IV'.
"""

from __future__ import annotations

import re

_SEPARATORS = re.compile(r"[\s,–—−‐-]+")
_DIMINISHED = re.compile(r"°|º|dim")
_D_SUFFIX = re.compile(r"^([#b]?[iv]+)d(?=$|\d|/)")


def normalize_numeral(token: str) -> str:
    """
    Normalize one Roman numeral token.

    Case-insensitive; '°', 'º', 'dim' and a trailing 'd' ('iid') all mean
    diminished and become 'o'; '♭'/'♯' become 'b'/'#'.

    Examples:
        normalize_numeral("vii°") == "viio"
        normalize_numeral("VIIdim") == "viio"
        normalize_numeral("♭VII") == "bvii"
    """
    result = token.strip().lower().replace("♭", "b").replace("♯", "#")
    result = _DIMINISHED.sub("o", result)
    return _D_SUFFIX.sub(r"\1o", result)


def split_progression(text: str) -> list[str]:
    """Split on whitespace, commas and any dash variant."""
    return [normalize_numeral(token) for token in _SEPARATORS.split(text.strip()) if token]


def validate_progression_answer(user_text: str, expected_text: str) -> bool:
    """
    Check a Roman numeral progression answer.

    Chords are compared position by position. An answer typed without any
    separators ('IVviIV') is compared as one run against the expected
    numerals joined together.

    Examples:
        validate_progression_answer("i-v-vi-iv", "I - V - vi - IV") is True
        validate_progression_answer("I - IV - vi - V", "I - V - vi - IV") is False
    """
    expected = split_progression(expected_text)
    answer = split_progression(user_text)
    if not answer or not expected:
        return False
    if len(answer) == 1 and len(expected) > 1:
        return answer[0] == "".join(expected)
    return answer == expected
