"""
Random selection on top of an injected random source.

Only `random()` is ever called on the source, so tests can script the
exact sequence of draws.
"""

from __future__ import annotations

import random
from collections.abc import Sequence
from typing import Protocol, TypeVar

from chuk_chord_trainer.constants import ErrorMessages
from chuk_chord_trainer.errors import ConfigurationError

T = TypeVar("T")


class RandomSource(Protocol):
    """Anything with `random() -> float in [0, 1)`; random.Random qualifies."""

    def random(self) -> float: ...


def default_rng(seed: int | None = None) -> random.Random:
    """A fresh random.Random, seeded when reproducibility matters."""
    return random.Random(seed)


def choose(rng: RandomSource, items: Sequence[T], what: str = "items") -> T:
    """Pick one item uniformly."""
    if not items:
        raise ConfigurationError(ErrorMessages.EMPTY_CHOICES.format(what=what))
    index = int(rng.random() * len(items))
    return items[min(index, len(items) - 1)]


def weighted_choose(
    rng: RandomSource, items: Sequence[T], weights: Sequence[float], what: str = "items"
) -> T:
    """
    Pick one item with probability proportional to its weight.

    Items are walked in order, so a draw of 0.0 always lands on the first
    item with a positive weight.
    """
    if not items or len(items) != len(weights):
        raise ConfigurationError(ErrorMessages.EMPTY_CHOICES.format(what=what))
    total = sum(weights)
    if total <= 0:
        raise ConfigurationError(ErrorMessages.EMPTY_CHOICES.format(what=what))

    threshold = rng.random() * total
    cumulative = 0.0
    for item, weight in zip(items, weights, strict=True):
        cumulative += weight
        if threshold < cumulative:
            return item
    return items[-1]


def chance(rng: RandomSource, probability: float) -> bool:
    """True with the given probability."""
    return rng.random() < probability
