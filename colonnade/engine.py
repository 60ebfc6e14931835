"""Single-writer game session exposing the command surface."""

from __future__ import annotations

import logging
import random
from dataclasses import replace
from typing import Any, Callable, List, Mapping

from . import actions
from .cards import Card, Suit
from .messages import Event, MessageKey
from .state import GameConfig, GameState, Profile

logger = logging.getLogger(__name__)

Observer = Callable[[GameState, Event], None]

PROFILE_FIELDS = ("name", "epithet", "avatar")


class GameSession:
    """Owns one ``GameState`` and applies commands to it one at a time.

    Observers registered with :meth:`subscribe` receive the new state and
    the event after every command; they must treat the state as read-only.
    """

    def __init__(self, config: GameConfig | None = None, *, rng: Any | None = None) -> None:
        self.config = config or GameConfig()
        self.rng = rng if rng is not None else random.Random(self.config.seed)
        self._state: GameState | None = None
        self._observers: List[Observer] = []
        self.history: List[Event] = []

    @property
    def state(self) -> GameState:
        if self._state is None:
            raise RuntimeError("game has not been initialized; call initialize_game() first")
        return self._state

    @property
    def last_event(self) -> Event | None:
        return self.history[-1] if self.history else None

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Register ``observer``; returns a callable that unsubscribes it."""

        self._observers.append(observer)

        def _unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return _unsubscribe

    def dispatch(self, command: actions.Command) -> Event:
        """Apply ``command`` and publish the outcome."""

        outcome = actions.apply_command(self._state, command, self.rng, config=self.config)
        self._state = outcome.state
        self.history.append(outcome.event)
        logger.debug("Turn %d: %s", outcome.state.turn, describe(outcome.event))
        for observer in list(self._observers):
            observer(outcome.state, outcome.event)
        return outcome.event

    # Command surface

    def initialize_game(self) -> Event:
        return self.dispatch(actions.InitializeGame())

    def handle_new_game(self) -> Event:
        return self.dispatch(actions.NewGame())

    def select_card(self, card: Card) -> Event:
        return self.dispatch(actions.SelectCard(card))

    def move_to_reserve(self, card: Card) -> Event:
        return self.dispatch(actions.MoveToReserve(card))

    def move_to_hand(self, card: Card) -> Event:
        return self.dispatch(actions.MoveToHand(card))

    def start_game(self) -> Event:
        return self.dispatch(actions.StartGame())

    def handle_discard(self, card: Card | None = None) -> Event:
        return self.dispatch(actions.Discard(card))

    def handle_draw_card(self) -> Event:
        return self.dispatch(actions.DrawCards())

    def exchange_cards(self, hand_card: Card, reserve_card: Card) -> Event:
        return self.dispatch(actions.ExchangeCards(hand_card, reserve_card))

    def handle_card_place(self, suit: Suit | str, position: int) -> Event:
        return self.dispatch(actions.PlaceCard(suit, position))

    def handle_activator_exchange(self, suit: Suit | str, column_card: Card, player_card: Card) -> Event:
        return self.dispatch(actions.ActivatorExchange(suit, column_card, player_card))

    def handle_seven_action(self, seven: Card) -> Event:
        return self.dispatch(actions.SevenAction(seven))

    def handle_joker_action(self, joker: Card, action: str) -> Event:
        return self.dispatch(actions.JokerAction(joker, action))

    def handle_queen_challenge(self, is_correct: bool) -> Event:
        return self.dispatch(actions.QueenChallengeAnswer(is_correct))

    def handle_strategic_shuffle(self) -> Event:
        return self.dispatch(actions.StrategicShuffle())

    confirm_strategic_shuffle = handle_strategic_shuffle

    def handle_revolution(self) -> Event:
        return self.dispatch(actions.Revolution())

    def end_turn(self) -> Event:
        return self.dispatch(actions.PassTurn())

    handle_pass_turn = end_turn

    def handle_skip_action(self) -> Event:
        return self.dispatch(actions.SkipAction())

    def handle_surrender(self) -> Event:
        return self.dispatch(actions.Surrender())

    def can_end_turn(self) -> bool:
        return self._state is not None and actions.can_end_turn(self._state)

    def update_profile(self, partial: Mapping[str, Any]) -> Profile:
        """Merge ``partial`` into the player profile; no game rules apply."""

        unknown = set(partial) - set(PROFILE_FIELDS)
        if unknown:
            raise ValueError(f"unknown profile field(s): {', '.join(sorted(unknown))}")
        state = self.state.clone()
        state.current_player.profile = replace(state.current_player.profile, **dict(partial))
        self._state = state
        event = Event.ok(None, **dict(partial))
        for observer in list(self._observers):
            observer(state, event)
        return state.current_player.profile

    def legal_commands(self) -> list[actions.Command]:
        return actions.legal_commands(self.state)


def describe(event: Event) -> str:
    """Return a compact, non-localized rendering of ``event`` for logs."""

    key = event.key.value if isinstance(event.key, MessageKey) else "-"
    status = "ok" if event.accepted else "rejected"
    if event.params:
        params = ", ".join(f"{name}={value}" for name, value in event.params.items())
        return f"{status}:{key} ({params})"
    return f"{status}:{key}"
