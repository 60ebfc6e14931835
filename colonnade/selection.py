"""Selection manager tracking the cards provisionally picked for an action."""

from __future__ import annotations

from enum import Enum
from typing import Sequence

from .cards import Card
from .messages import Event, MessageKey
from .rules import SelectionViolation, require_not_over
from .state import GameState

MAX_SELECTED = 2


class Combo(str, Enum):
    """Card combinations the action resolver knows how to play."""

    OPEN_COLUMN = "open_column"
    FACE_CARD = "face_card"
    QUEEN = "queen"
    LONE_SEVEN = "lone_seven"
    LONE_NUMBER = "lone_number"
    LONE_JOKER = "lone_joker"
    NONE = "none"


def _split_activator(cards: Sequence[Card]) -> tuple[Card | None, Card | None]:
    """Return ``(activator, other)`` for a two-card selection."""

    first, second = cards
    if first.is_activator != second.is_activator:
        return (first, second) if first.is_activator else (second, first)
    return None, None


def combination(cards: Sequence[Card]) -> Combo:
    """Classify the current selection."""

    if len(cards) == 1:
        card = cards[0]
        if card.is_seven:
            return Combo.LONE_SEVEN
        if card.is_joker:
            return Combo.LONE_JOKER
        if card.is_numeric:
            return Combo.LONE_NUMBER
        return Combo.NONE
    if len(cards) != 2:
        return Combo.NONE
    activator, other = _split_activator(cards)
    if activator is None or other is None:
        return Combo.NONE
    if other.is_ace:
        return Combo.OPEN_COLUMN
    if other.is_face:
        return Combo.FACE_CARD
    if other.is_queen:
        return Combo.QUEEN
    return Combo.NONE


def combo_parts(cards: Sequence[Card]) -> tuple[Card, Card]:
    """Return ``(activator, partner)`` for a two-card combination."""

    if len(cards) != 2:
        raise SelectionViolation(MessageKey.INVALID_SELECTION)
    activator, other = _split_activator(cards)
    if activator is None or other is None:
        raise SelectionViolation(MessageKey.INVALID_SELECTION)
    return activator, other


def advisory(cards: Sequence[Card]) -> MessageKey | None:
    """Return the hint shown for the current selection; display only."""

    if len(cards) == 1:
        card = cards[0]
        if card.is_ace:
            return MessageKey.SELECT_ACTIVATOR
        if card.is_activator:
            return MessageKey.SELECT_ACE
        return None
    combo = combination(cards)
    if combo in (Combo.OPEN_COLUMN, Combo.FACE_CARD):
        return MessageKey.TAP_COLUMN
    if combo is Combo.QUEEN:
        return MessageKey.CHOOSE_QUEEN_EFFECT
    return None


def can_select_card(state: GameState, card: Card) -> bool:
    return state.current_player.holds(card)


def select_card(state: GameState, card: Card) -> Event:
    """Toggle ``card`` in the selection.

    Deselecting always succeeds; selecting is ignored once two cards are
    picked. Nothing changes after the turn's action has been played.
    """

    require_not_over(state)
    if state.has_played_action:
        return Event.rejected(MessageKey.ACTION_ALREADY_PLAYED)
    if any(selected.id == card.id for selected in state.selected_cards):
        state.selected_cards = [selected for selected in state.selected_cards if selected.id != card.id]
        return Event.ok(advisory(state.selected_cards))
    if not can_select_card(state, card):
        raise SelectionViolation(MessageKey.CARD_NOT_HELD, {"card": card.id})
    if len(state.selected_cards) >= MAX_SELECTED:
        return Event.rejected(None)
    state.selected_cards = [*state.selected_cards, card]
    return Event.ok(advisory(state.selected_cards))
