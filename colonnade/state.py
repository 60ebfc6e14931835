"""Core game state data structures for Colonnade."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Iterator, List

from . import deck
from .cards import FULL_DECK_IDS, Card, Suit, create_deck

logger = logging.getLogger(__name__)

GUARDED_SLOT = 7
"""Position addressing a column's guarded (reserve) slot in placement commands."""


class TurnPhase(str, Enum):
    """Phases of the single-player turn cycle."""

    SETUP = "setup"
    DISCARD = "discard"
    DRAW = "draw"
    ACTION = "action"


class Zone(str, Enum):
    """Player-held zones a card can be played from."""

    HAND = "hand"
    RESERVE = "reserve"


@dataclass(slots=True)
class GameConfig:
    """Runtime configuration for a single game."""

    hand_limit: int = 5
    reserve_limit: int = 2
    initial_hand_size: int = 7
    discard_threshold: int = 6
    initial_health: int = 10
    joker_heal: int = 2
    queen_joker_heal: int = 4
    queen_seven_heal: int = 2
    challenge_success_heal: int = 5
    challenge_failure_heal: int = 1
    player_name: str = "Joueur 1"
    player_epithet: str = "Maître des Cartes"
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.hand_limit <= 0 or self.reserve_limit <= 0:
            raise ValueError("hand and reserve limits must be positive")
        if self.initial_hand_size != self.hand_limit + self.reserve_limit:
            raise ValueError("initial hand size must fill both hand and reserve")
        if self.initial_health < 0:
            raise ValueError("initial health must be non-negative")

    @property
    def full_count(self) -> int:
        """Return the number of cards held when hand and reserve are full."""

        return self.hand_limit + self.reserve_limit


@dataclass(slots=True)
class Profile:
    """Display metadata owned by the profile collaborator."""

    name: str
    epithet: str = ""
    avatar: str | None = None


@dataclass(slots=True)
class Player:
    """State tracked for the seated player."""

    hand: List[Card] = field(default_factory=list)
    reserve: List[Card] = field(default_factory=list)
    discard_pile: List[Card] = field(default_factory=list)
    health: int = 10
    max_health: int = 10
    has_used_strategic_shuffle: bool = False
    profile: Profile = field(default_factory=lambda: Profile(name="Joueur 1"))

    def copy(self) -> "Player":
        """Return a copy whose zone lists can be mutated independently."""

        return Player(
            hand=list(self.hand),
            reserve=list(self.reserve),
            discard_pile=list(self.discard_pile),
            health=self.health,
            max_health=self.max_health,
            has_used_strategic_shuffle=self.has_used_strategic_shuffle,
            profile=replace(self.profile),
        )

    @property
    def card_count(self) -> int:
        """Cards held in hand and reserve combined."""

        return len(self.hand) + len(self.reserve)

    def zone(self, zone: Zone) -> List[Card]:
        return self.hand if zone is Zone.HAND else self.reserve

    def find(self, card: Card) -> Zone | None:
        """Return the zone holding ``card`` or ``None`` when it is not held."""

        if any(held.id == card.id for held in self.hand):
            return Zone.HAND
        if any(held.id == card.id for held in self.reserve):
            return Zone.RESERVE
        return None

    def holds(self, card: Card) -> bool:
        return self.find(card) is not None


@dataclass(slots=True)
class Column:
    """One suit column: an ascending run opened by its Ace."""

    suit: Suit
    cards: List[Card] = field(default_factory=list)
    reserve_suit: Card | None = None
    activator_type: str | None = None
    has_lucky_card: bool = False
    is_locked: bool = False
    is_reserve_blocked: bool = False
    face_cards: Dict[str, Card] = field(default_factory=dict)

    def copy(self) -> "Column":
        return Column(
            suit=self.suit,
            cards=list(self.cards),
            reserve_suit=self.reserve_suit,
            activator_type=self.activator_type,
            has_lucky_card=self.has_lucky_card,
            is_locked=self.is_locked,
            is_reserve_blocked=self.is_reserve_blocked,
            face_cards=dict(self.face_cards),
        )

    @property
    def is_open(self) -> bool:
        """Return ``True`` once the column holds its lucky Ace."""

        return self.has_lucky_card and bool(self.cards) and self.cards[0].is_ace


@dataclass(slots=True)
class QueenChallenge:
    """A pending Queen challenge awaiting its resolution."""

    is_active: bool = False
    queen: Card | None = None
    joker: Card | None = None


def _empty_columns() -> Dict[Suit, Column]:
    return {suit: Column(suit=suit) for suit in Suit.column_suits()}


@dataclass(slots=True)
class GameState:
    """Complete, self-contained game state threaded through every command."""

    current_player: Player = field(default_factory=Player)
    draw_pile: List[Card] = field(default_factory=list)
    phase: TurnPhase = TurnPhase.SETUP
    turn: int = 1
    selected_cards: List[Card] = field(default_factory=list)
    columns: Dict[Suit, Column] = field(default_factory=_empty_columns)
    has_discarded: bool = False
    has_drawn: bool = False
    has_played_action: bool = False
    can_end_turn: bool = False
    queen_challenge: QueenChallenge = field(default_factory=QueenChallenge)
    has_used_first_strategic_shuffle: bool = False
    next_phase: TurnPhase | None = None
    played_cards_last_turn: int = 0
    is_game_over: bool = False
    winner: str | None = None
    config: GameConfig = field(default_factory=GameConfig)

    def clone(self) -> "GameState":
        """Return a copy that shares no mutable containers with ``self``."""

        return GameState(
            current_player=self.current_player.copy(),
            draw_pile=list(self.draw_pile),
            phase=self.phase,
            turn=self.turn,
            selected_cards=list(self.selected_cards),
            columns={suit: column.copy() for suit, column in self.columns.items()},
            has_discarded=self.has_discarded,
            has_drawn=self.has_drawn,
            has_played_action=self.has_played_action,
            can_end_turn=self.can_end_turn,
            queen_challenge=replace(self.queen_challenge),
            has_used_first_strategic_shuffle=self.has_used_first_strategic_shuffle,
            next_phase=self.next_phase,
            played_cards_last_turn=self.played_cards_last_turn,
            is_game_over=self.is_game_over,
            winner=self.winner,
            config=self.config,
        )

    def iter_cards(self) -> Iterator[Card]:
        """Yield every card in every zone, once per occurrence."""

        player = self.current_player
        yield from self.draw_pile
        yield from player.hand
        yield from player.reserve
        yield from player.discard_pile
        for column in self.columns.values():
            yield from column.cards
            if column.reserve_suit is not None:
                yield column.reserve_suit
            yield from column.face_cards.values()

    def all_card_ids(self) -> list[str]:
        return [card.id for card in self.iter_cards()]

    def column(self, suit: Suit | str) -> Column:
        return self.columns[Suit(suit)]


def check_conservation(state: GameState) -> list[str]:
    """Return conservation violations; an empty list means every card is accounted for."""

    counts = Counter(state.all_card_ids())
    problems: list[str] = []
    for identifier, count in sorted(counts.items()):
        if count > 1:
            problems.append(f"card {identifier} appears {count} times")
        if identifier not in FULL_DECK_IDS:
            problems.append(f"unknown card {identifier}")
    for identifier in sorted(FULL_DECK_IDS - counts.keys()):
        problems.append(f"card {identifier} is missing")
    return problems


def check_capacity(state: GameState) -> list[str]:
    """Return capacity violations for the hand and reserve.

    The setup phase is exempt for the hand, which holds the whole opening
    deal until two cards are moved to the reserve.
    """

    config = state.config
    player = state.current_player
    problems: list[str] = []
    if state.phase is not TurnPhase.SETUP and len(player.hand) > config.hand_limit:
        problems.append(f"hand holds {len(player.hand)} cards (limit {config.hand_limit})")
    if len(player.reserve) > config.reserve_limit:
        problems.append(f"reserve holds {len(player.reserve)} cards (limit {config.reserve_limit})")
    return problems


def new_game(config: GameConfig | None = None, rng: Any | None = None) -> GameState:
    """Deal a fresh game returning a ``GameState`` in the setup phase."""

    config = config or GameConfig()
    draw_pile = deck.shuffle(create_deck(), rng)
    draw_pile, hand = deck.draw(draw_pile, config.initial_hand_size)
    player = Player(
        hand=hand,
        health=config.initial_health,
        max_health=config.initial_health,
        profile=Profile(name=config.player_name, epithet=config.player_epithet),
    )
    logger.info("Dealt %d card(s); %d remain in the draw pile", len(hand), len(draw_pile))
    return GameState(current_player=player, draw_pile=draw_pile, config=config)
