from __future__ import annotations

import pytest

from colonnade.cards import (
    DECK_CARD_COUNT,
    FULL_DECK_IDS,
    CardType,
    Color,
    Joker,
    Seven,
    Suit,
    Value,
    as_activator,
    card_by_id,
    card_from_code,
    create_deck,
)


def test_deck_holds_fifty_four_unique_cards() -> None:
    deck = create_deck()

    assert len(deck) == DECK_CARD_COUNT == 54
    assert {card.id for card in deck} == FULL_DECK_IDS
    jokers = [card for card in deck if card.type is CardType.JOKER]
    assert sorted(card.color.value for card in jokers) == ["black", "red"]


@pytest.mark.parametrize(
    ("code", "suit", "value"),
    [
        ("AH", Suit.HEARTS, Value.ACE),
        ("10s", Suit.SPADES, Value.TEN),
        ("7D", Suit.DIAMONDS, Value.SEVEN),
        ("kc", Suit.CLUBS, Value.KING),
    ],
)
def test_card_from_code(code: str, suit: Suit, value: Value) -> None:
    card = card_from_code(code)

    assert card.suit is suit
    assert card.value is value
    assert card_from_code(card.code) == card


@pytest.mark.parametrize("code", ["", "H", "1H", "11S", "7X", "JOKER-G"])
def test_card_from_code_rejects_garbage(code: str) -> None:
    with pytest.raises(ValueError):
        card_from_code(code)


def test_card_by_id_unknown() -> None:
    with pytest.raises(ValueError):
        card_by_id("hearts-11")


@pytest.mark.parametrize(
    ("code", "expected"),
    [
        ("7H", Seven),
        ("JOKER-R", Joker),
        ("JOKER-B", Joker),
    ],
)
def test_activator_variants(code: str, expected: type) -> None:
    card = card_from_code(code)
    variant = as_activator(card)

    assert isinstance(variant, expected)
    assert variant.suit is card.suit
    assert variant.color is card.color
    assert card.is_activator


@pytest.mark.parametrize("code", ["AH", "QS", "8C", "KD"])
def test_non_activators(code: str) -> None:
    card = card_from_code(code)

    assert as_activator(card) is None
    assert not card.is_activator


def test_card_colors_and_ranks() -> None:
    assert card_from_code("5D").color is Color.RED
    assert card_from_code("5C").color is Color.BLACK
    assert card_from_code("JOKER-R").color is Color.RED
    assert card_from_code("AH").rank == 1
    assert card_from_code("10H").rank == 10
    assert card_from_code("JH").rank is None
    assert card_from_code("JH").is_face
    assert not card_from_code("QH").is_face
    assert card_from_code("QH").is_queen
