"""
Engine errors.

Only configuration mistakes are errors here. Range exhaustion and duplicate
retry exhaustion degrade gracefully and are logged instead of raised.
"""

from __future__ import annotations


class ChordTrainerError(Exception):
    """Base error for the chord trainer engine."""


class ConfigurationError(ChordTrainerError, ValueError):
    """
    Raised when a level or pattern references something the catalogs don't know.

    Unknown chord types, key signatures, Roman numerals, root names and level ids
    all land here. A misconfigured level is a content bug, so callers should treat
    this as fatal for that configuration rather than retrying.
    """
