"""Special effect handlers: Joker, Queen, Strategic Shuffle and Revolution."""

from __future__ import annotations

import logging
from typing import Any

from . import deck, rules
from .cards import Card
from .messages import Event, MessageKey
from .rules import PhaseViolation, SelectionViolation
from .state import GameState, QueenChallenge, TurnPhase

logger = logging.getLogger(__name__)

JOKER_ACTIONS = ("heal", "attack")


def queen_heal(state: GameState, queen: Card, activator: Card) -> Event:
    """Play a Queen with an activator for an immediate heal."""

    config = state.config
    amount = config.queen_joker_heal if activator.is_joker else config.queen_seven_heal
    rules.discard_cards(state, queen, activator)
    health = rules.heal(state.current_player, amount)
    rules.consume_action(state, played_cards=2)
    state.next_phase = rules.next_phase_for(state)
    return Event.ok(MessageKey.QUEEN_HEAL, amount=amount, health=health)


def open_queen_challenge(state: GameState, queen: Card, joker: Card) -> Event:
    """Stage a Queen challenge; the action is spent when it resolves."""

    if state.queen_challenge.is_active:
        raise PhaseViolation(MessageKey.CHALLENGE_PENDING)
    rules.origin_of(state.current_player, queen)
    rules.origin_of(state.current_player, joker)
    state.queen_challenge = QueenChallenge(is_active=True, queen=queen, joker=joker)
    return Event.ok(MessageKey.QUEEN_CHALLENGE)


def handle_joker_action(state: GameState, joker: Card, action: str) -> Event:
    """Resolve a Joker effect, routing to the Queen combo when a Queen is selected."""

    rules.require_action_available(state)
    if not joker.is_joker or action not in JOKER_ACTIONS:
        raise SelectionViolation(MessageKey.INVALID_SELECTION, {"card": joker.id, "action": action})
    rules.origin_of(state.current_player, joker)

    queen = next((card for card in state.selected_cards if card.is_queen), None)
    if queen is not None:
        if action == "heal":
            return queen_heal(state, queen, joker)
        return open_queen_challenge(state, queen, joker)

    player = state.current_player
    rules.discard_cards(state, joker)
    rules.consume_action(state, played_cards=1)
    if action == "heal":
        health = rules.heal(player, state.config.joker_heal)
        return Event.ok(MessageKey.JOKER_HEAL, amount=state.config.joker_heal, health=health)
    # No opponent exists in solo play: the attack only spends the Joker.
    return Event.ok(MessageKey.JOKER_ATTACK)


def handle_queen_challenge(state: GameState, is_correct: bool) -> Event:
    """Resolve the pending Queen challenge."""

    rules.require_action_available(state, allow_challenge=True)
    challenge = state.queen_challenge
    if not challenge.is_active or challenge.queen is None or challenge.joker is None:
        raise PhaseViolation(MessageKey.NO_CHALLENGE)

    config = state.config
    amount = config.challenge_success_heal if is_correct else config.challenge_failure_heal
    rules.discard_cards(state, challenge.queen, challenge.joker)
    health = rules.heal(state.current_player, amount)
    state.queen_challenge = QueenChallenge()
    rules.consume_action(state, played_cards=2)
    return Event.ok(
        MessageKey.QUEEN_CHALLENGE_RESULT,
        amount=amount,
        health=health,
        result="correct" if is_correct else "incorrect",
    )


def _apply_strategic_shuffle(state: GameState, rng: Any | None) -> None:
    player = state.current_player
    pool = deck.shuffle([*state.draw_pile, *player.hand, *player.discard_pile], rng)
    state.draw_pile, player.hand = deck.draw(pool, state.config.hand_limit)
    player.discard_pile = []
    player.has_used_strategic_shuffle = True
    state.selected_cards = []
    state.phase = TurnPhase.ACTION
    state.has_discarded = True
    state.has_drawn = True


def handle_strategic_shuffle(state: GameState, rng: Any | None = None) -> Event:
    """Reshuffle hand, draw and discard piles into a fresh hand.

    The first use of the game is free and leaves the action available;
    every later use spends the turn's action.
    """

    if not rules.can_use_strategic_shuffle(state):
        rules.require_not_over(state)
        raise PhaseViolation(MessageKey.SHUFFLE_UNAVAILABLE)

    _apply_strategic_shuffle(state, rng)
    if not state.has_used_first_strategic_shuffle:
        state.has_used_first_strategic_shuffle = True
        state.has_played_action = False
        logger.debug("Free strategic shuffle used on turn %d", state.turn)
        return Event.ok(MessageKey.STRATEGIC_SHUFFLE_FIRST)

    rules.consume_action(state, played_cards=0)
    return Event.ok(MessageKey.STRATEGIC_SHUFFLE_NEXT)


def handle_revolution(state: GameState) -> Event:
    """Clear every A..10 from the board into the discard pile."""

    rules.require_action_available(state)
    player = state.current_player
    cleared: list[Card] = []
    for column in state.columns.values():
        cleared.extend(card for card in column.cards if card.is_numeric)
        column.cards = [card for card in column.cards if not card.is_numeric]
        if column.reserve_suit is not None and column.reserve_suit.is_numeric:
            cleared.append(column.reserve_suit)
            column.reserve_suit = None
        column.has_lucky_card = False
        column.activator_type = None
        column.is_locked = False
        column.is_reserve_blocked = False

    player.discard_pile.extend(cleared)
    rules.consume_action(state, played_cards=0)
    state.next_phase = rules.next_phase_for(state, at_least=True)
    logger.debug("Revolution cleared %d card(s)", len(cleared))
    return Event.ok(MessageKey.REVOLUTION, count=len(cleared))
