"""Card abstractions and helpers for Colonnade."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final, Iterable, Union


class Suit(str, Enum):
    """Enumeration of card suits, including the Joker pseudo-suit."""

    HEARTS = "hearts"
    DIAMONDS = "diamonds"
    CLUBS = "clubs"
    SPADES = "spades"
    SPECIAL = "special"

    @classmethod
    def column_suits(cls) -> tuple["Suit", ...]:
        """Return the four suits that own a column on the board."""

        return (cls.HEARTS, cls.DIAMONDS, cls.CLUBS, cls.SPADES)


class Value(str, Enum):
    """Enumeration of card values in deck order."""

    ACE = "A"
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"
    JOKER = "JOKER"

    @classmethod
    def ordered(cls) -> tuple["Value", ...]:
        """Return the thirteen suited values in ascending order."""

        return (
            cls.ACE,
            cls.TWO,
            cls.THREE,
            cls.FOUR,
            cls.FIVE,
            cls.SIX,
            cls.SEVEN,
            cls.EIGHT,
            cls.NINE,
            cls.TEN,
            cls.JACK,
            cls.QUEEN,
            cls.KING,
        )

    @property
    def rank(self) -> int | None:
        """Return the sequence rank (A=1 .. 10) or ``None`` for court cards."""

        return NUMERIC_RANKS.get(self)


class CardType(str, Enum):
    NUMBER = "number"
    JOKER = "joker"


class Color(str, Enum):
    RED = "red"
    BLACK = "black"


NUMERIC_RANKS: Final[dict[Value, int]] = {
    value: idx for idx, value in enumerate(Value.ordered()[:10], start=1)
}
FACE_VALUES: Final[frozenset[Value]] = frozenset({Value.JACK, Value.KING})
RED_SUITS: Final[frozenset[Suit]] = frozenset({Suit.HEARTS, Suit.DIAMONDS})

_SUIT_SYMBOLS: Final[dict[Suit, str]] = {
    Suit.HEARTS: "♥",
    Suit.DIAMONDS: "♦",
    Suit.CLUBS: "♣",
    Suit.SPADES: "♠",
}
_SUIT_LETTERS: Final[dict[Suit, str]] = {
    Suit.HEARTS: "H",
    Suit.DIAMONDS: "D",
    Suit.CLUBS: "C",
    Suit.SPADES: "S",
}


@dataclass(frozen=True, slots=True)
class Card:
    """Value object describing a physical card.

    Cards are created once per game and only ever move between zones; two
    cards are the same card exactly when their ``id`` matches.
    """

    id: str
    suit: Suit
    value: Value
    type: CardType
    is_red_joker: bool = False

    @property
    def color(self) -> Color:
        if self.type is CardType.JOKER:
            return Color.RED if self.is_red_joker else Color.BLACK
        return Color.RED if self.suit in RED_SUITS else Color.BLACK

    @property
    def is_joker(self) -> bool:
        return self.type is CardType.JOKER

    @property
    def is_ace(self) -> bool:
        return self.value is Value.ACE

    @property
    def is_seven(self) -> bool:
        return self.value is Value.SEVEN

    @property
    def is_queen(self) -> bool:
        return self.value is Value.QUEEN

    @property
    def is_face(self) -> bool:
        """Return ``True`` for the Jack and King, the attachable court cards."""

        return self.value in FACE_VALUES

    @property
    def is_numeric(self) -> bool:
        """Return ``True`` for the values cleared by a Revolution (A..10)."""

        return self.value in NUMERIC_RANKS

    @property
    def is_activator(self) -> bool:
        return as_activator(self) is not None

    @property
    def rank(self) -> int | None:
        return self.value.rank

    @property
    def code(self) -> str:
        """Return the compact code accepted by :func:`card_from_code` (``"10H"``, ``"JOKER-R"``)."""

        if self.is_joker:
            return "JOKER-R" if self.is_red_joker else "JOKER-B"
        return f"{self.value.value}{_SUIT_LETTERS[self.suit]}"

    def label(self) -> str:
        """Create a display label suitable for CLI representations."""

        if self.is_joker:
            return "JOKER(R)" if self.is_red_joker else "JOKER(B)"
        return f"{self.value.value}{_SUIT_SYMBOLS[self.suit]}"


@dataclass(frozen=True, slots=True)
class Seven:
    """A seven acting as a column activator."""

    card: Card
    kind = "7"

    @property
    def suit(self) -> Suit:
        return self.card.suit

    @property
    def color(self) -> Color:
        return self.card.color


@dataclass(frozen=True, slots=True)
class Joker:
    """A Joker acting as a column activator."""

    card: Card
    kind = "JOKER"

    @property
    def suit(self) -> Suit:
        return self.card.suit

    @property
    def color(self) -> Color:
        return self.card.color


Activator = Union[Seven, Joker]


def as_activator(card: Card | None) -> Activator | None:
    """Return the activator variant wrapping ``card`` or ``None``."""

    if card is None:
        return None
    if card.is_joker:
        return Joker(card)
    if card.is_seven:
        return Seven(card)
    return None


def card_id(suit: Suit, value: Value) -> str:
    """Return the stable identifier of a suited card."""

    return f"{suit.value}-{value.value}"


def iter_full_deck() -> Iterable[Card]:
    """Yield all 54 physical cards in deterministic order."""

    for suit in Suit.column_suits():
        for value in Value.ordered():
            yield Card(id=card_id(suit, value), suit=suit, value=value, type=CardType.NUMBER)
    yield Card(
        id="joker-red",
        suit=Suit.SPECIAL,
        value=Value.JOKER,
        type=CardType.JOKER,
        is_red_joker=True,
    )
    yield Card(
        id="joker-black",
        suit=Suit.SPECIAL,
        value=Value.JOKER,
        type=CardType.JOKER,
        is_red_joker=False,
    )


def create_deck() -> list[Card]:
    """Return the fixed 54-card universe in deterministic order."""

    return list(iter_full_deck())


_CATALOG: Final[dict[str, Card]] = {card.id: card for card in iter_full_deck()}
FULL_DECK_IDS: Final[frozenset[str]] = frozenset(_CATALOG)
DECK_CARD_COUNT: Final[int] = len(_CATALOG)


def card_by_id(identifier: str) -> Card:
    """Look up the catalog card for ``identifier``."""

    try:
        return _CATALOG[identifier]
    except KeyError:
        raise ValueError(f"unknown card id '{identifier}'") from None


def card_from_code(code: str) -> Card:
    """Parse a compact card code such as ``"7H"``, ``"10s"`` or ``"JOKER-B"``."""

    normalized = code.strip().upper()
    if normalized in ("JOKER-R", "JOKER-B"):
        return card_by_id("joker-red" if normalized.endswith("R") else "joker-black")
    if len(normalized) < 2:
        raise ValueError(f"invalid card code '{code}'")
    value_part, suit_letter = normalized[:-1], normalized[-1]
    suits = {letter: suit for suit, letter in _SUIT_LETTERS.items()}
    if suit_letter not in suits:
        raise ValueError(f"invalid card code '{code}'")
    try:
        value = Value(value_part)
    except ValueError:
        raise ValueError(f"invalid card code '{code}'") from None
    return card_by_id(card_id(suits[suit_letter], value))
