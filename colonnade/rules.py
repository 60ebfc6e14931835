"""Rule utilities and validation helpers shared by every command."""

from __future__ import annotations

from typing import Any, Mapping

from .cards import Card, Value, as_activator
from .messages import MessageKey
from .state import Column, GameState, Player, TurnPhase, Zone

__all__ = [
    "IllegalCommand",
    "PhaseViolation",
    "SelectionViolation",
    "CapacityViolation",
    "IdentityViolation",
    "GameOver",
    "require_not_over",
    "require_phase",
    "require_action_available",
    "origin_of",
    "remove_from_origin",
    "zone_limit",
    "add_to_zone",
    "validate_activator_swap",
    "next_phase_for",
    "can_use_strategic_shuffle",
    "heal",
    "consume_action",
    "discard_cards",
    "is_successor",
    "completes_run",
]


class IllegalCommand(RuntimeError):
    """Raised by rule code when a command must be rejected.

    The dispatcher turns it into an unchanged state plus ``key``.
    """

    def __init__(self, key: MessageKey, params: Mapping[str, Any] | None = None) -> None:
        super().__init__(key.value)
        self.key = key
        self.params = dict(params or {})


class PhaseViolation(IllegalCommand):
    """Wrong phase, or the turn's action has already been played."""


class SelectionViolation(IllegalCommand):
    """Wrong card count or combination for the command."""


class CapacityViolation(IllegalCommand):
    """A transfer would overflow the hand or reserve."""


class IdentityViolation(IllegalCommand):
    """An activator exchange between indistinguishable cards."""


class GameOver(IllegalCommand):
    """The game has ended; no further transitions are possible."""


def require_not_over(state: GameState) -> None:
    if state.is_game_over:
        raise GameOver(MessageKey.GAME_OVER)


def require_phase(state: GameState, phase: TurnPhase) -> None:
    require_not_over(state)
    if state.phase is not phase:
        raise PhaseViolation(MessageKey.WRONG_PHASE, {"expected": phase.value, "actual": state.phase.value})


def require_action_available(state: GameState, *, allow_challenge: bool = False) -> None:
    """Ensure the action phase is open and the turn's action is unspent."""

    require_phase(state, TurnPhase.ACTION)
    if state.has_played_action:
        raise PhaseViolation(MessageKey.ACTION_ALREADY_PLAYED)
    if state.queen_challenge.is_active and not allow_challenge:
        raise PhaseViolation(MessageKey.CHALLENGE_PENDING)


def origin_of(player: Player, card: Card) -> Zone:
    """Return the zone holding ``card`` or reject the command."""

    zone = player.find(card)
    if zone is None:
        raise SelectionViolation(MessageKey.CARD_NOT_HELD, {"card": card.id})
    return zone


def remove_from_origin(player: Player, card: Card) -> Zone:
    """Remove ``card`` from the hand or reserve, returning where it was."""

    zone = origin_of(player, card)
    cards = player.zone(zone)
    cards[:] = [held for held in cards if held.id != card.id]
    return zone


def zone_limit(state: GameState, zone: Zone) -> int:
    config = state.config
    return config.hand_limit if zone is Zone.HAND else config.reserve_limit


def add_to_zone(state: GameState, zone: Zone, card: Card) -> None:
    """Append ``card`` to ``zone``, rejecting the command when it is full."""

    cards = state.current_player.zone(zone)
    limit = zone_limit(state, zone)
    if len(cards) >= limit:
        raise CapacityViolation(MessageKey.LIMIT_EXCEEDED, {"zone": zone.value, "limit": limit})
    cards.append(card)


def validate_activator_swap(outgoing: Card, incoming: Card) -> None:
    """Apply the identity rules for swapping two activators.

    Two Jokers are told apart only by color, so a Joker pair is judged on
    color alone; any other pair is rejected when suit and value match.
    """

    outgoing_variant = as_activator(outgoing)
    incoming_variant = as_activator(incoming)
    if outgoing_variant is None or incoming_variant is None:
        raise SelectionViolation(MessageKey.NOT_AN_ACTIVATOR)
    if outgoing.is_joker and incoming.is_joker:
        if outgoing_variant.color is incoming_variant.color:
            raise IdentityViolation(MessageKey.SAME_COLOR_JOKER, {"color": incoming_variant.color.value})
        return
    if outgoing.value is incoming.value and outgoing.suit is incoming.suit:
        raise IdentityViolation(MessageKey.IDENTICAL_CARDS, {"card": incoming.label()})


def next_phase_for(state: GameState, *, at_least: bool = False) -> TurnPhase:
    """Return the phase that follows an action given the cards held.

    A full hand and reserve must shed a card first, otherwise the player
    draws. ``at_least`` treats any count at or above full as full.
    """

    count = state.current_player.card_count
    full = state.config.full_count
    is_full = count >= full if at_least else count == full
    return TurnPhase.DISCARD if is_full else TurnPhase.DRAW


def can_use_strategic_shuffle(state: GameState) -> bool:
    """Return ``True`` when a Strategic Shuffle may be started."""

    return (
        not state.is_game_over
        and state.phase is TurnPhase.DISCARD
        and not state.has_discarded
        and not state.has_drawn
        and not state.has_played_action
        and not state.current_player.has_used_strategic_shuffle
    )


def heal(player: Player, amount: int) -> int:
    """Raise health and maximum health by ``amount``; returns the new health."""

    player.max_health += amount
    player.health += amount
    return player.health


def consume_action(state: GameState, played_cards: int) -> None:
    """Mark the turn's single action as spent."""

    state.has_played_action = True
    state.can_end_turn = True
    state.played_cards_last_turn = played_cards
    state.selected_cards = []


def discard_cards(state: GameState, *cards: Card) -> None:
    """Move held ``cards`` from hand or reserve onto the discard pile."""

    player = state.current_player
    for card in cards:
        remove_from_origin(player, card)
        player.discard_pile.append(card)


def is_successor(column: Column, card: Card, position: int) -> bool:
    """Return ``True`` when ``card`` extends ``column`` at ``position``."""

    if position < 1 or position != len(column.cards):
        return False
    if card.suit is not column.suit or card.rank is None:
        return False
    previous = column.cards[position - 1]
    return previous.rank is not None and card.rank == previous.rank + 1


def completes_run(column: Column) -> bool:
    return bool(column.cards) and column.cards[-1].value is Value.TEN
