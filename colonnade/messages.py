"""Stable message keys emitted by the engine for the presentation layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Mapping

if TYPE_CHECKING:
    from .state import GameState

__all__ = ["MessageKey", "Event", "phase_prompt"]


class MessageKey(str, Enum):
    """Identifiers resolved to localized text by the presentation layer."""

    # Lifecycle
    START = "start"
    GAME_STARTED = "game_started"
    SURRENDERED = "surrendered"
    GAME_OVER = "game_over"

    # Phase prompts
    SETUP_PHASE = "setup_phase"
    DISCARD_PHASE = "discard_phase"
    DRAW_PHASE = "draw_phase"
    ACTION_PHASE = "action_phase"

    # Selection advisories
    SELECT_ACTIVATOR = "select_activator"
    SELECT_ACE = "select_ace"
    TAP_COLUMN = "tap_column"
    CHOOSE_QUEEN_EFFECT = "choose_queen_effect"

    # Accepted outcomes
    CARD_MOVED = "card_moved"
    CARD_DISCARDED = "card_discarded"
    CARDS_DRAWN = "cards_drawn"
    EXCHANGE_COMPLETE = "exchange_complete"
    COLUMN_ACTIVATED = "column_activated"
    FACE_CARD_PLACED = "face_card_placed"
    CARD_PLACED = "card_placed"
    SEVEN_PLACED = "seven_placed"
    SEVEN_EXCHANGED = "seven_exchanged"
    ACTIVATOR_EXCHANGED = "activator_exchanged"
    JOKER_HEAL = "joker_heal"
    JOKER_ATTACK = "joker_attack"
    QUEEN_HEAL = "queen_heal"
    QUEEN_CHALLENGE = "queen_challenge"
    QUEEN_CHALLENGE_RESULT = "queen_challenge_result"
    STRATEGIC_SHUFFLE_FIRST = "strategic_shuffle_first"
    STRATEGIC_SHUFFLE_NEXT = "strategic_shuffle_next"
    REVOLUTION = "revolution"
    ACTION_SKIPPED = "action_skipped"

    # Rejections
    WRONG_PHASE = "wrong_phase"
    ACTION_ALREADY_PLAYED = "action_already_played"
    ACTION_REQUIRED = "action_required"
    ALREADY_DISCARDED = "already_discarded"
    ALREADY_DRAWN = "already_drawn"
    CHALLENGE_PENDING = "challenge_pending"
    NO_CHALLENGE = "no_challenge"
    CARD_NOT_HELD = "card_not_held"
    INVALID_SELECTION = "invalid_selection"
    INVALID_TARGET = "invalid_target"
    COLUMN_ALREADY_OPEN = "column_already_open"
    COLUMN_NOT_OPEN = "column_not_open"
    COLUMN_LOCKED = "column_locked"
    NOT_AN_ACTIVATOR = "not_an_activator"
    LIMIT_EXCEEDED = "limit_exceeded"
    IDENTICAL_CARDS = "identical_cards"
    SAME_COLOR_JOKER = "same_color_joker"
    RESERVE_INCOMPLETE = "reserve_incomplete"
    SHUFFLE_UNAVAILABLE = "shuffle_unavailable"


def _frozen(params: Mapping[str, Any] | None) -> Mapping[str, Any]:
    return MappingProxyType(dict(params or {}))


@dataclass(frozen=True, slots=True)
class Event:
    """Outcome of one command: a message key, its parameters, and acceptance."""

    key: MessageKey | None = None
    params: Mapping[str, Any] = field(default_factory=lambda: _frozen(None))
    accepted: bool = True

    @classmethod
    def ok(cls, key: MessageKey | None = None, **params: Any) -> "Event":
        return cls(key=key, params=_frozen(params), accepted=True)

    @classmethod
    def rejected(cls, key: MessageKey | None, params: Mapping[str, Any] | None = None) -> "Event":
        return cls(key=key, params=_frozen(params), accepted=False)


def phase_prompt(state: "GameState") -> MessageKey | None:
    """Return the prompt the UI should show for the current phase, if any."""

    from .state import TurnPhase

    if state.is_game_over:
        return MessageKey.GAME_OVER
    if state.phase is TurnPhase.SETUP:
        return MessageKey.SETUP_PHASE
    if state.phase is TurnPhase.DISCARD:
        if state.played_cards_last_turn > 0 or state.has_discarded:
            return None
        return MessageKey.DISCARD_PHASE
    if state.phase is TurnPhase.DRAW:
        return None if state.has_drawn else MessageKey.DRAW_PHASE
    if state.phase is TurnPhase.ACTION:
        return None if state.has_played_action else MessageKey.ACTION_PHASE
    return None
