"""Turn phase controller: setup, discard, draw and end-of-turn transitions.

Every function mutates the ``GameState`` it is given and returns an
``Event``; rule violations raise :class:`~colonnade.rules.IllegalCommand`
and are turned into no-ops by :func:`colonnade.actions.apply_command`.
"""

from __future__ import annotations

import logging
from typing import Any

from . import deck, rules
from .cards import Card
from .messages import Event, MessageKey
from .rules import CapacityViolation, PhaseViolation, SelectionViolation
from .state import GameConfig, GameState, TurnPhase, Zone, new_game

logger = logging.getLogger(__name__)


def initialize_game(config: GameConfig | None = None, rng: Any | None = None) -> tuple[GameState, Event]:
    """Create a freshly dealt game in the setup phase."""

    state = new_game(config, rng)
    return state, Event.ok(MessageKey.START)


def move_to_reserve(state: GameState, card: Card) -> Event:
    """Move a hand card into the reserve during setup."""

    rules.require_phase(state, TurnPhase.SETUP)
    player = state.current_player
    if player.find(card) is not Zone.HAND:
        raise SelectionViolation(MessageKey.CARD_NOT_HELD, {"card": card.id})
    rules.add_to_zone(state, Zone.RESERVE, card)
    player.hand = [held for held in player.hand if held.id != card.id]
    return Event.ok(MessageKey.CARD_MOVED, card=card.id, zone=Zone.RESERVE.value)


def move_to_hand(state: GameState, card: Card) -> Event:
    """Move a reserve card back into the hand during setup."""

    rules.require_phase(state, TurnPhase.SETUP)
    player = state.current_player
    if player.find(card) is not Zone.RESERVE:
        raise SelectionViolation(MessageKey.CARD_NOT_HELD, {"card": card.id})
    rules.add_to_zone(state, Zone.HAND, card)
    player.reserve = [held for held in player.reserve if held.id != card.id]
    return Event.ok(MessageKey.CARD_MOVED, card=card.id, zone=Zone.HAND.value)


def start_game(state: GameState) -> Event:
    """Leave setup once the reserve holds its two cards."""

    rules.require_phase(state, TurnPhase.SETUP)
    player = state.current_player
    if len(player.reserve) != state.config.reserve_limit:
        raise SelectionViolation(
            MessageKey.RESERVE_INCOMPLETE,
            {"required": state.config.reserve_limit, "held": len(player.reserve)},
        )
    state.phase = TurnPhase.DISCARD
    state.has_discarded = False
    state.has_drawn = False
    state.has_played_action = False
    state.can_end_turn = False
    state.has_used_first_strategic_shuffle = False
    state.selected_cards = []
    logger.info("Game started with %d card(s) in hand", len(player.hand))
    return Event.ok(MessageKey.GAME_STARTED)


def handle_discard(state: GameState, card: Card | None) -> Event:
    """Discard one card, or skip straight to drawing when few cards are held."""

    rules.require_phase(state, TurnPhase.DISCARD)
    player = state.current_player
    if player.card_count <= state.config.discard_threshold:
        state.phase = TurnPhase.DRAW
        state.has_discarded = False
        return Event.ok(MessageKey.DRAW_PHASE)

    if state.has_discarded:
        raise PhaseViolation(MessageKey.ALREADY_DISCARDED)
    if card is None:
        raise SelectionViolation(MessageKey.INVALID_SELECTION)
    rules.discard_cards(state, card)
    state.has_discarded = True
    state.selected_cards = []
    state.phase = TurnPhase.DRAW
    return Event.ok(MessageKey.CARD_DISCARDED, card=card.id)


def handle_draw_card(state: GameState, rng: Any | None = None) -> Event:
    """Refill the hand, then the reserve, from the draw pile."""

    rules.require_phase(state, TurnPhase.DRAW)
    if state.has_drawn:
        raise PhaseViolation(MessageKey.ALREADY_DRAWN)

    player = state.current_player
    config = state.config
    hand_space = max(0, config.hand_limit - len(player.hand))
    reserve_space = max(0, config.reserve_limit - len(player.reserve))
    needed = hand_space + reserve_space

    drawn: list[Card] = []
    if needed > 0:
        state.draw_pile, drawn, player.discard_pile = deck.draw_with_recycle(
            state.draw_pile, player.discard_pile, needed, rng
        )
        for card in drawn:
            if len(player.hand) < config.hand_limit:
                player.hand.append(card)
            else:
                player.reserve.append(card)
        if len(drawn) < needed:
            logger.info("Draw pile exhausted: drew %d of %d card(s)", len(drawn), needed)

    state.has_drawn = True
    state.phase = TurnPhase.ACTION
    return Event.ok(MessageKey.CARDS_DRAWN, count=len(drawn))


def exchange_cards(state: GameState, hand_card: Card, reserve_card: Card) -> Event:
    """Swap a hand card with a reserve card in place."""

    rules.require_not_over(state)
    player = state.current_player
    if player.find(hand_card) is not Zone.HAND or player.find(reserve_card) is not Zone.RESERVE:
        raise SelectionViolation(MessageKey.CARD_NOT_HELD)
    hand_index = next(idx for idx, held in enumerate(player.hand) if held.id == hand_card.id)
    reserve_index = next(idx for idx, held in enumerate(player.reserve) if held.id == reserve_card.id)
    player.hand[hand_index], player.reserve[reserve_index] = reserve_card, hand_card
    return Event.ok(MessageKey.EXCHANGE_COMPLETE)


def end_turn(state: GameState) -> Event:
    """Close the turn once its action is spent and pick the next phase."""

    rules.require_phase(state, TurnPhase.ACTION)
    if not state.has_played_action:
        raise PhaseViolation(MessageKey.ACTION_REQUIRED)
    player = state.current_player
    config = state.config
    if len(player.hand) > config.hand_limit or len(player.reserve) > config.reserve_limit:
        raise CapacityViolation(MessageKey.LIMIT_EXCEEDED)

    next_phase = state.next_phase or rules.next_phase_for(state)
    state.phase = next_phase
    state.next_phase = None
    state.has_discarded = False
    state.has_drawn = False
    state.has_played_action = False
    state.can_end_turn = False
    state.selected_cards = []
    player.has_used_strategic_shuffle = False
    state.turn += 1
    logger.debug("Turn %d begins in the %s phase", state.turn, next_phase.value)
    key = MessageKey.DISCARD_PHASE if next_phase is TurnPhase.DISCARD else MessageKey.DRAW_PHASE
    return Event.ok(key, turn=state.turn)


def handle_skip_action(state: GameState) -> Event:
    """Spend the turn's action without playing a card."""

    rules.require_action_available(state)
    rules.consume_action(state, played_cards=0)
    state.has_discarded = True
    state.has_drawn = True
    return Event.ok(MessageKey.ACTION_SKIPPED)


def handle_surrender(state: GameState) -> Event:
    """End the game; the only terminal transition."""

    rules.require_not_over(state)
    state.is_game_over = True
    state.winner = "opponent"
    state.selected_cards = []
    logger.info("Player surrendered on turn %d", state.turn)
    return Event.ok(MessageKey.SURRENDERED)
