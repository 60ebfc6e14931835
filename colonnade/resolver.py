"""Action resolver: column opening, card placement and activator exchange.

The guarded slot of a column is only ever written through
:func:`swap_into_guarded_slot`, which applies a single set of identity and
capacity rules whichever command reached it.
"""

from __future__ import annotations

import logging

from . import effects, rules
from .cards import Card, Suit, as_activator
from .messages import Event, MessageKey
from .rules import PhaseViolation, SelectionViolation
from .selection import Combo, combination, combo_parts
from .state import GUARDED_SLOT, Column, GameState, Zone

logger = logging.getLogger(__name__)

__all__ = [
    "handle_card_place",
    "handle_seven_action",
    "handle_activator_exchange",
    "swap_into_guarded_slot",
]


def swap_into_guarded_slot(state: GameState, column: Column, incoming: Card, origin: Zone) -> Card | None:
    """Move ``incoming`` from ``origin`` into ``column``'s guarded slot.

    The previous occupant, if any, returns to ``origin``. A full origin zone
    rejects the whole command. Returns the displaced card.
    """

    variant = as_activator(incoming)
    if variant is None:
        raise SelectionViolation(MessageKey.NOT_AN_ACTIVATOR, {"card": incoming.id})
    displaced = column.reserve_suit
    if displaced is not None:
        rules.validate_activator_swap(displaced, incoming)

    player = state.current_player
    if player.find(incoming) is not origin:
        raise SelectionViolation(MessageKey.CARD_NOT_HELD, {"card": incoming.id})
    rules.remove_from_origin(player, incoming)
    if displaced is not None:
        rules.add_to_zone(state, origin, displaced)

    column.reserve_suit = incoming
    column.activator_type = variant.kind
    return displaced


def _release_guarded_slot(state: GameState, column: Column, origin: Zone) -> Card | None:
    """Return the guarded-slot card to ``origin`` and block the slot."""

    displaced = column.reserve_suit
    if displaced is not None:
        rules.add_to_zone(state, origin, displaced)
    column.reserve_suit = None
    column.activator_type = None
    column.is_reserve_blocked = True
    return displaced


def _require_held(state: GameState, cards: list[Card]) -> None:
    for card in cards:
        rules.origin_of(state.current_player, card)


def _open_column(state: GameState, column: Column, position: int) -> Event:
    activator, ace = combo_parts(state.selected_cards)
    if position != 0 or ace.suit is not column.suit:
        raise SelectionViolation(MessageKey.INVALID_TARGET, {"suit": column.suit.value, "position": position})
    if column.cards and column.has_lucky_card:
        raise PhaseViolation(MessageKey.COLUMN_ALREADY_OPEN, {"suit": column.suit.value})

    player = state.current_player
    leftovers = list(column.cards)
    if column.reserve_suit is not None:
        leftovers.append(column.reserve_suit)
    rules.remove_from_origin(player, ace)
    rules.remove_from_origin(player, activator)
    player.discard_pile.extend(leftovers)

    column.cards = [ace]
    column.has_lucky_card = True
    column.reserve_suit = activator
    column.activator_type = as_activator(activator).kind
    column.is_locked = False
    column.is_reserve_blocked = False
    rules.consume_action(state, played_cards=2)
    logger.debug("Opened %s column with %s", column.suit.value, activator.label())
    return Event.ok(MessageKey.COLUMN_ACTIVATED, suit=column.suit.value)


def _attach_face_card(state: GameState, column: Column, position: int) -> Event:
    activator, face = combo_parts(state.selected_cards)
    if position != 0 or face.suit is not column.suit:
        raise SelectionViolation(MessageKey.INVALID_TARGET, {"suit": column.suit.value, "position": position})
    if not column.is_open:
        raise PhaseViolation(MessageKey.COLUMN_NOT_OPEN, {"suit": column.suit.value})

    player = state.current_player
    rules.remove_from_origin(player, face)
    rules.discard_cards(state, activator)
    column.face_cards[face.value.value] = face
    rules.consume_action(state, played_cards=2)
    return Event.ok(MessageKey.FACE_CARD_PLACED, suit=column.suit.value, value=face.value.value)


def _seven_to_guarded_slot(state: GameState, seven: Card) -> Event:
    column = state.columns[seven.suit]
    if not column.is_open:
        raise PhaseViolation(MessageKey.COLUMN_NOT_OPEN, {"suit": column.suit.value})
    if column.is_reserve_blocked:
        raise SelectionViolation(MessageKey.INVALID_TARGET, {"suit": column.suit.value})
    origin = rules.origin_of(state.current_player, seven)
    displaced = swap_into_guarded_slot(state, column, seven, origin)
    rules.consume_action(state, played_cards=1)
    if displaced is not None:
        return Event.ok(MessageKey.SEVEN_EXCHANGED, suit=column.suit.value, recovered=displaced.id)
    return Event.ok(MessageKey.SEVEN_PLACED, suit=column.suit.value)


def _place_in_sequence(state: GameState, column: Column, card: Card, position: int) -> Event:
    if not column.is_open:
        raise PhaseViolation(MessageKey.COLUMN_NOT_OPEN, {"suit": column.suit.value})
    if column.is_locked:
        raise PhaseViolation(MessageKey.COLUMN_LOCKED, {"suit": column.suit.value})
    if not rules.is_successor(column, card, position):
        raise SelectionViolation(MessageKey.INVALID_TARGET, {"suit": column.suit.value, "position": position})

    origin = rules.remove_from_origin(state.current_player, card)
    column.cards.append(card)
    recovered = None
    if card.is_seven:
        recovered = _release_guarded_slot(state, column, origin)
    if rules.completes_run(column):
        column.is_locked = True
    rules.consume_action(state, played_cards=1)

    params = {"suit": column.suit.value, "position": position, "card": card.id}
    if recovered is not None:
        params["recovered"] = recovered.id
    return Event.ok(MessageKey.SEVEN_PLACED if card.is_seven else MessageKey.CARD_PLACED, **params)


def handle_card_place(state: GameState, suit: Suit | str, position: int) -> Event:
    """Play the current selection onto the ``suit`` column at ``position``."""

    rules.require_action_available(state)
    try:
        column = state.column(suit)
    except (ValueError, KeyError):
        raise SelectionViolation(MessageKey.INVALID_TARGET, {"suit": str(suit)}) from None

    selected = list(state.selected_cards)
    _require_held(state, selected)
    combo = combination(selected)

    if combo is Combo.OPEN_COLUMN:
        return _open_column(state, column, position)
    if combo is Combo.FACE_CARD:
        return _attach_face_card(state, column, position)
    if combo is Combo.QUEEN:
        activator, queen = combo_parts(selected)
        return effects.queen_heal(state, queen, activator)
    if combo is Combo.LONE_SEVEN and position == GUARDED_SLOT:
        if selected[0].suit is not column.suit:
            raise SelectionViolation(MessageKey.INVALID_TARGET, {"suit": column.suit.value})
        return _seven_to_guarded_slot(state, selected[0])
    if combo in (Combo.LONE_SEVEN, Combo.LONE_NUMBER):
        return _place_in_sequence(state, column, selected[0], position)
    raise SelectionViolation(MessageKey.INVALID_SELECTION, {"count": len(selected)})


def handle_seven_action(state: GameState, seven: Card) -> Event:
    """Put ``seven`` into the guarded slot of its own suit's column."""

    rules.require_action_available(state)
    if not seven.is_seven:
        raise SelectionViolation(MessageKey.INVALID_SELECTION, {"card": seven.id})
    return _seven_to_guarded_slot(state, seven)


def handle_activator_exchange(state: GameState, suit: Suit | str, column_card: Card, player_card: Card) -> Event:
    """Swap a held seven or Joker with the activator guarding ``suit``."""

    rules.require_action_available(state)
    try:
        column = state.column(suit)
    except (ValueError, KeyError):
        raise SelectionViolation(MessageKey.INVALID_TARGET, {"suit": str(suit)}) from None
    if column.reserve_suit is None or column.reserve_suit.id != column_card.id:
        raise SelectionViolation(MessageKey.INVALID_TARGET, {"suit": column.suit.value})
    if not column_card.is_activator or not player_card.is_activator:
        raise SelectionViolation(MessageKey.NOT_AN_ACTIVATOR)

    origin = rules.origin_of(state.current_player, player_card)
    swap_into_guarded_slot(state, column, player_card, origin)
    rules.consume_action(state, played_cards=1)
    return Event.ok(
        MessageKey.ACTIVATOR_EXCHANGED,
        suit=column.suit.value,
        placed=player_card.id,
        recovered=column_card.id,
    )
