"""Weighted random choice primitive."""

from __future__ import annotations

import random
from collections.abc import Callable, Sequence
from typing import TypeVar

T = TypeVar("T")


def weighted_choice(
    items: Sequence[T],
    weight_fn: Callable[[T], float],
    rng: random.Random | None = None,
) -> T | None:
    """Pick one item with probability proportional to its weight.

    Negative weights count as zero. When every weight is zero the choice is
    uniform over ``items``; an empty sequence yields ``None``.
    """
    if not items:
        return None

    source = rng if rng is not None else random
    weights = [max(0.0, float(weight_fn(item))) for item in items]
    total_weight = sum(weights)

    if total_weight <= 0.0:
        return items[source.randrange(len(items))]

    threshold = source.random() * total_weight
    for item, weight in zip(items, weights):
        threshold -= weight
        if threshold <= 0.0 and weight > 0.0:
            return item

    # Float drift can leave a sliver of threshold; fall back to the last weighted item.
    for item, weight in zip(reversed(items), reversed(weights)):
        if weight > 0.0:
            return item
    return items[-1]


__all__ = ["weighted_choice"]
