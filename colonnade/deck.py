"""Shuffling and drawing helpers for the draw pile."""

from __future__ import annotations

import logging
import random
from typing import Any, Callable, Sequence, TypeVar, cast

__all__ = ["shuffle", "draw", "recycle", "draw_with_recycle"]

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _shuffle_fn(rng: Any | None) -> Callable[[list], None]:
    if rng is None:
        return random.shuffle
    if hasattr(rng, "shuffle") and callable(rng.shuffle):
        return cast(Callable[[list], None], rng.shuffle)
    raise TypeError("rng must provide a shuffle(seq) method")


def shuffle(cards: Sequence[T], rng: Any | None = None) -> list[T]:
    """Return a uniformly shuffled copy of ``cards``.

    ``rng`` may be any object exposing ``shuffle(seq)``; ``random.Random``
    is the usual choice and gives reproducible games when seeded.
    """

    shuffled = list(cards)
    _shuffle_fn(rng)(shuffled)
    return shuffled


def draw(pile: Sequence[T], n: int) -> tuple[list[T], list[T]]:
    """Remove up to ``n`` cards from the top of ``pile``.

    The top of the pile is the end of the sequence. Returns
    ``(remaining, drawn)`` with ``drawn`` in draw order; asking for more
    cards than the pile holds simply returns fewer.
    """

    remaining = list(pile)
    drawn: list[T] = []
    for _ in range(max(0, n)):
        if not remaining:
            break
        drawn.append(remaining.pop())
    return remaining, drawn


def recycle(pile: Sequence[T], discard: Sequence[T], rng: Any | None = None) -> tuple[list[T], list[T]]:
    """Shuffle the discard pile into an empty draw pile.

    Returns ``(pile, discard)``. Nothing changes while the draw pile still
    holds cards or the discard pile is empty.
    """

    if pile or not discard:
        return list(pile), list(discard)
    logger.info("Recycling %d discarded card(s) into the draw pile", len(discard))
    return shuffle(discard, rng), []


def draw_with_recycle(
    pile: Sequence[T],
    discard: Sequence[T],
    n: int,
    rng: Any | None = None,
) -> tuple[list[T], list[T], list[T]]:
    """Draw ``n`` cards, recycling the discard pile when the pile runs dry.

    Returns ``(remaining, drawn, discard)``. When both piles are exhausted
    fewer than ``n`` cards are returned; this never raises.
    """

    remaining, drawn = draw(pile, n)
    discard_left = list(discard)
    missing = max(0, n) - len(drawn)
    if missing > 0 and discard_left:
        remaining, discard_left = recycle(remaining, discard_left, rng)
        remaining, extra = draw(remaining, missing)
        drawn.extend(extra)
    return remaining, drawn, discard_left
