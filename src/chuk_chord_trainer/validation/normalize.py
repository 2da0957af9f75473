"""
Answer canonicalization - one ordered list of text substitutions.

Every comparison in the validators goes through `canonicalize`, so the
user's answer, the expected answer and every generated acceptable variant
land in the same form.
"""

from __future__ import annotations

import re

# A root letter followed by a bare uppercase M means major ("CM7" -> "Cmaj7").
# Any letter after the M makes it part of a word ("CMAJ", "CMIN"), left to lowercasing.
# Must run before lowercasing, or "CM" and "Cm" collapse together.
_MAJOR_M = re.compile(r"(?<![A-Za-z])([A-G](?:#|b|♯|♭)?)M(?![A-Za-z])")
_WHITESPACE = re.compile(r"\s+")
_DASHES = re.compile(r"[–—−‐]")
_DIMINISHED = re.compile(r"diminished|°|º")

_ENHARMONIC_SWAPS: tuple[tuple[str, str], ...] = (
    ("c#", "db"),
    ("d#", "eb"),
    ("f#", "gb"),
    ("g#", "ab"),
    ("a#", "bb"),
)


def canonicalize(text: str) -> str:
    """
    Canonical form of an answer.

    Substitutions, in order:
        1. strip; root letter + bare uppercase 'M' -> 'maj'
        2. lowercase
        3. remove all whitespace
        4. dash variants (en, em, minus, hyphen) -> '-'
        5. 'diminished', '°', 'º' -> 'dim'
        6. '♭' -> 'b', '♯' -> '#'

    Examples:
        canonicalize("C maj") == "cmaj"
        canonicalize("CM7") == "cmaj7"
        canonicalize("B° 7") == "bdim7"
        canonicalize("E♭ – 7") == "eb-7"
    """
    result = _MAJOR_M.sub(r"\1maj", text.strip())
    result = result.lower()
    result = _WHITESPACE.sub("", result)
    result = _DASHES.sub("-", result)
    result = _DIMINISHED.sub("dim", result)
    return result.replace("♭", "b").replace("♯", "#")


def enharmonic_swaps(canonical: str) -> list[str]:
    """
    Every string made by swapping one sharp/flat spelling occurrence.

    Works on canonical (lowercase) text.

    Examples:
        enharmonic_swaps("c#m") == ["dbm"]
        enharmonic_swaps("c#/g#") == ["db/g#", "c#/ab"]
    """
    swaps = []
    for sharp, flat in _ENHARMONIC_SWAPS:
        for source, target in ((sharp, flat), (flat, sharp)):
            start = canonical.find(source)
            while start != -1:
                swaps.append(canonical[:start] + target + canonical[start + len(source) :])
                start = canonical.find(source, start + 1)
    return swaps
