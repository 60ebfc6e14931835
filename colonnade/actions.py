"""Command vocabulary, the reducer that applies it, and legal command generation."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Union

from . import effects, phases, resolver, selection
from .cards import Card, Suit
from .messages import Event
from .rules import IllegalCommand
from .state import GUARDED_SLOT, GameConfig, GameState, TurnPhase

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InitializeGame:
    """Deal a brand new game."""


@dataclass(frozen=True)
class NewGame:
    """Abandon the current game and deal a new one."""


@dataclass(frozen=True)
class SelectCard:
    card: Card


@dataclass(frozen=True)
class MoveToReserve:
    card: Card


@dataclass(frozen=True)
class MoveToHand:
    card: Card


@dataclass(frozen=True)
class StartGame:
    pass


@dataclass(frozen=True)
class Discard:
    card: Card | None = None


@dataclass(frozen=True)
class DrawCards:
    pass


@dataclass(frozen=True)
class ExchangeCards:
    hand_card: Card
    reserve_card: Card


@dataclass(frozen=True)
class PlaceCard:
    """Play the current selection onto a column slot."""

    suit: Suit | str
    position: int


@dataclass(frozen=True)
class ActivatorExchange:
    suit: Suit | str
    column_card: Card
    player_card: Card


@dataclass(frozen=True)
class SevenAction:
    seven: Card


@dataclass(frozen=True)
class JokerAction:
    joker: Card
    action: str  # "heal" or "attack"


@dataclass(frozen=True)
class QueenChallengeAnswer:
    is_correct: bool


@dataclass(frozen=True)
class StrategicShuffle:
    pass


@dataclass(frozen=True)
class Revolution:
    pass


@dataclass(frozen=True)
class PassTurn:
    pass


@dataclass(frozen=True)
class SkipAction:
    pass


@dataclass(frozen=True)
class Surrender:
    pass


Command = Union[
    InitializeGame,
    NewGame,
    SelectCard,
    MoveToReserve,
    MoveToHand,
    StartGame,
    Discard,
    DrawCards,
    ExchangeCards,
    PlaceCard,
    ActivatorExchange,
    SevenAction,
    JokerAction,
    QueenChallengeAnswer,
    StrategicShuffle,
    Revolution,
    PassTurn,
    SkipAction,
    Surrender,
]


@dataclass(frozen=True)
class Outcome:
    """New state and feedback produced by one command."""

    state: GameState
    event: Event


def _handler(command: Command, rng: Any | None) -> Callable[[GameState], Event]:
    if isinstance(command, SelectCard):
        return lambda state: selection.select_card(state, command.card)
    if isinstance(command, MoveToReserve):
        return lambda state: phases.move_to_reserve(state, command.card)
    if isinstance(command, MoveToHand):
        return lambda state: phases.move_to_hand(state, command.card)
    if isinstance(command, StartGame):
        return phases.start_game
    if isinstance(command, Discard):
        return lambda state: phases.handle_discard(state, command.card)
    if isinstance(command, DrawCards):
        return lambda state: phases.handle_draw_card(state, rng)
    if isinstance(command, ExchangeCards):
        return lambda state: phases.exchange_cards(state, command.hand_card, command.reserve_card)
    if isinstance(command, PlaceCard):
        return lambda state: resolver.handle_card_place(state, command.suit, command.position)
    if isinstance(command, ActivatorExchange):
        return lambda state: resolver.handle_activator_exchange(
            state, command.suit, command.column_card, command.player_card
        )
    if isinstance(command, SevenAction):
        return lambda state: resolver.handle_seven_action(state, command.seven)
    if isinstance(command, JokerAction):
        return lambda state: effects.handle_joker_action(state, command.joker, command.action)
    if isinstance(command, QueenChallengeAnswer):
        return lambda state: effects.handle_queen_challenge(state, command.is_correct)
    if isinstance(command, StrategicShuffle):
        return lambda state: effects.handle_strategic_shuffle(state, rng)
    if isinstance(command, Revolution):
        return effects.handle_revolution
    if isinstance(command, PassTurn):
        return phases.end_turn
    if isinstance(command, SkipAction):
        return phases.handle_skip_action
    if isinstance(command, Surrender):
        return phases.handle_surrender
    raise TypeError(f"unknown command {command!r}")


def apply_command(
    state: GameState | None,
    command: Command,
    rng: Any | None = None,
    *,
    config: GameConfig | None = None,
) -> Outcome:
    """Apply ``command`` to ``state`` atomically.

    The command runs against a clone; a rejected command returns the
    original ``state`` untouched together with its message key.
    """

    if isinstance(command, (InitializeGame, NewGame)):
        if config is None and state is not None:
            config = state.config
        new_state, event = phases.initialize_game(config, rng)
        return Outcome(new_state, event)
    if state is None:
        raise ValueError("game has not been initialized")

    handler = _handler(command, rng)
    candidate = state.clone()
    try:
        event = handler(candidate)
    except IllegalCommand as exc:
        logger.debug("Rejected %s: %s", type(command).__name__, exc.key.value)
        return Outcome(state, Event.rejected(exc.key, exc.params))
    if not event.accepted:
        return Outcome(state, event)
    logger.debug("Applied %s -> %s", type(command).__name__, event.key.value if event.key else None)
    return Outcome(candidate, event)


def is_legal(state: GameState, command: Command) -> bool:
    """Return ``True`` if ``command`` would be accepted in ``state``."""

    return apply_command(state, command).event.accepted


def _held(state: GameState) -> list[Card]:
    player = state.current_player
    return [*player.hand, *player.reserve]


def _candidate_commands(state: GameState) -> list[Command]:
    player = state.current_player
    held = _held(state)
    candidates: list[Command] = []

    if state.phase is TurnPhase.SETUP:
        candidates.extend(MoveToReserve(card) for card in player.hand)
        candidates.extend(MoveToHand(card) for card in player.reserve)
        candidates.append(StartGame())
        return candidates

    if state.phase is TurnPhase.DISCARD:
        if player.card_count <= state.config.discard_threshold:
            candidates.append(Discard())
        else:
            candidates.extend(Discard(card) for card in held)
        candidates.append(StrategicShuffle())
        return candidates

    if state.phase is TurnPhase.DRAW:
        candidates.append(DrawCards())
        return candidates

    if state.has_played_action:
        candidates.append(PassTurn())
        return candidates

    if state.queen_challenge.is_active:
        candidates.extend([QueenChallengeAnswer(True), QueenChallengeAnswer(False)])
        return candidates

    selected_ids = {card.id for card in state.selected_cards}
    candidates.extend(SelectCard(card) for card in held if len(selected_ids) < 2 or card.id in selected_ids)
    for suit in Suit.column_suits():
        column = state.columns[suit]
        candidates.append(PlaceCard(suit, 0))
        candidates.append(PlaceCard(suit, len(column.cards)))
        candidates.append(PlaceCard(suit, GUARDED_SLOT))
        if column.reserve_suit is not None:
            candidates.extend(
                ActivatorExchange(suit, column.reserve_suit, card) for card in held if card.is_activator
            )
    for card in held:
        if card.is_seven:
            candidates.append(SevenAction(card))
        if card.is_joker:
            candidates.extend(JokerAction(card, action) for action in effects.JOKER_ACTIONS)
    candidates.extend([Revolution(), SkipAction()])
    return candidates


def legal_commands(state: GameState) -> list[Command]:
    """Return the commands that would be accepted in ``state``.

    ``Surrender`` is always available outside a finished game and is left out
    so random play does not end immediately.
    """

    if state.is_game_over:
        return []
    return [command for command in _candidate_commands(state) if is_legal(state, command)]


def can_end_turn(state: GameState) -> bool:
    return is_legal(state, PassTurn())
