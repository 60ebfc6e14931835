from __future__ import annotations

import random

import pytest

from colonnade import deck
from colonnade.cards import create_deck


def test_shuffle_is_permutation_and_reproducible() -> None:
    cards = create_deck()

    first = deck.shuffle(cards, random.Random(7))
    second = deck.shuffle(cards, random.Random(7))

    assert first == second
    assert sorted(card.id for card in first) == sorted(card.id for card in cards)
    assert cards == create_deck()


def test_shuffle_rejects_rng_without_shuffle() -> None:
    with pytest.raises(TypeError):
        deck.shuffle([1, 2, 3], rng=object())


def test_draw_takes_from_the_top() -> None:
    remaining, drawn = deck.draw([1, 2, 3, 4], 2)

    assert drawn == [4, 3]
    assert remaining == [1, 2]


def test_draw_more_than_available_returns_fewer() -> None:
    remaining, drawn = deck.draw([1, 2], 5)

    assert drawn == [2, 1]
    assert remaining == []


def test_recycle_only_when_pile_empty() -> None:
    pile, discard = deck.recycle([1], [2, 3], random.Random(0))
    assert (pile, discard) == ([1], [2, 3])

    pile, discard = deck.recycle([], [2, 3], random.Random(0))
    assert sorted(pile) == [2, 3]
    assert discard == []


def test_draw_with_recycle_refills_from_discard() -> None:
    remaining, drawn, discard = deck.draw_with_recycle([1], [2, 3, 4], 3, random.Random(3))

    assert drawn[0] == 1
    assert sorted(drawn + remaining) == [1, 2, 3, 4]
    assert len(drawn) == 3
    assert discard == []


def test_draw_with_recycle_both_empty() -> None:
    remaining, drawn, discard = deck.draw_with_recycle([], [], 4)

    assert (remaining, drawn, discard) == ([], [], [])
