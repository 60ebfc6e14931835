"""Shared builders for hand-crafted game states."""

from __future__ import annotations

import random
from typing import Callable, Iterable, Sequence

import pytest

from colonnade.cards import Card, Suit, as_activator, card_from_code, create_deck
from colonnade.state import Column, GameConfig, GameState, Player, Profile, TurnPhase


def make_cards(codes: Iterable[str]) -> list[Card]:
    return [card_from_code(code) for code in codes]


def make_column(suit: Suit, run: Sequence[str] = (), *, guard: str | None = None, **flags: object) -> Column:
    """Return a column holding ``run``; a run starting with an Ace counts as opened."""

    guard_card = card_from_code(guard) if guard else None
    variant = as_activator(guard_card)
    column = Column(
        suit=suit,
        cards=make_cards(run),
        reserve_suit=guard_card,
        activator_type=variant.kind if variant is not None else None,
        has_lucky_card=bool(run) and run[0].upper().startswith("A"),
    )
    for name, value in flags.items():
        setattr(column, name, value)
    return column


def make_state(
    *,
    hand: Sequence[str] = (),
    reserve: Sequence[str] = (),
    discard: Sequence[str] = (),
    columns: Sequence[Column] = (),
    draw: Sequence[str] | None = None,
    phase: TurnPhase = TurnPhase.ACTION,
    config: GameConfig | None = None,
    **flags: object,
) -> GameState:
    """Build a state; unless ``draw`` is given the draw pile holds every unused card."""

    config = config or GameConfig()
    player = Player(
        hand=make_cards(hand),
        reserve=make_cards(reserve),
        discard_pile=make_cards(discard),
        health=config.initial_health,
        max_health=config.initial_health,
        profile=Profile(name=config.player_name, epithet=config.player_epithet),
    )
    state = GameState(current_player=player, phase=phase, config=config)
    for column in columns:
        state.columns[column.suit] = column
    if draw is None:
        used = set(state.all_card_ids())
        state.draw_pile = [card for card in create_deck() if card.id not in used]
    else:
        state.draw_pile = make_cards(draw)
    if phase is TurnPhase.ACTION:
        state.has_discarded = True
        state.has_drawn = True
    for name, value in flags.items():
        setattr(state, name, value)
    return state


@pytest.fixture
def build_state() -> Callable[..., GameState]:
    return make_state


@pytest.fixture
def build_column() -> Callable[..., Column]:
    return make_column


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)
