"""Rendering helpers dedicated to the CLI experience."""

from __future__ import annotations

from rich.console import RenderableType
from rich.panel import Panel

from ..cards import Card, Suit
from ..messages import Event, MessageKey
from ..state import GameState
from .views import StateSummaryView

_SUIT_STYLES = {
    Suit.HEARTS: "red",
    Suit.DIAMONDS: "magenta",
    Suit.CLUBS: "green",
    Suit.SPADES: "cyan",
}

MESSAGES: dict[MessageKey, str] = {
    MessageKey.START: "New game dealt. Move two cards to your reserve, then start.",
    MessageKey.GAME_STARTED: "The game begins.",
    MessageKey.SURRENDERED: "You surrendered.",
    MessageKey.GAME_OVER: "The game is over.",
    MessageKey.SETUP_PHASE: "Setup: choose the two cards for your reserve.",
    MessageKey.DISCARD_PHASE: "Discard phase: discard one card.",
    MessageKey.DRAW_PHASE: "Draw phase: refill your hand and reserve.",
    MessageKey.ACTION_PHASE: "Action phase: play one action or skip.",
    MessageKey.SELECT_ACTIVATOR: "Now select a seven or a Joker.",
    MessageKey.SELECT_ACE: "Now select an Ace or a court card.",
    MessageKey.TAP_COLUMN: "Choose the column to play on.",
    MessageKey.CHOOSE_QUEEN_EFFECT: "Choose the Queen effect: heal or challenge.",
    MessageKey.CARD_MOVED: "{card} moved to {zone}.",
    MessageKey.CARD_DISCARDED: "{card} discarded.",
    MessageKey.CARDS_DRAWN: "Drew {count} card(s).",
    MessageKey.EXCHANGE_COMPLETE: "Hand and reserve cards exchanged.",
    MessageKey.COLUMN_ACTIVATED: "The {suit} column is open.",
    MessageKey.FACE_CARD_PLACED: "{value} attached to the {suit} column.",
    MessageKey.CARD_PLACED: "{card} placed on the {suit} column.",
    MessageKey.SEVEN_PLACED: "Seven played on the {suit} column.",
    MessageKey.SEVEN_EXCHANGED: "Seven guards the {suit} column; {recovered} returned.",
    MessageKey.ACTIVATOR_EXCHANGED: "{placed} now guards the {suit} column; {recovered} returned.",
    MessageKey.JOKER_HEAL: "Joker heals {amount}. Health: {health}.",
    MessageKey.JOKER_ATTACK: "Joker attack played.",
    MessageKey.QUEEN_HEAL: "Queen heals {amount}. Health: {health}.",
    MessageKey.QUEEN_CHALLENGE: "Queen challenge! Answer it to resolve.",
    MessageKey.QUEEN_CHALLENGE_RESULT: "Challenge {result}: healed {amount}. Health: {health}.",
    MessageKey.STRATEGIC_SHUFFLE_FIRST: "Free Strategic Shuffle: fresh hand dealt.",
    MessageKey.STRATEGIC_SHUFFLE_NEXT: "Strategic Shuffle used as this turn's action; end your turn.",
    MessageKey.REVOLUTION: "Revolution! {count} card(s) cleared from the board.",
    MessageKey.ACTION_SKIPPED: "Action skipped.",
    MessageKey.WRONG_PHASE: "Not allowed in the {actual} phase.",
    MessageKey.ACTION_ALREADY_PLAYED: "You already played this turn's action.",
    MessageKey.ACTION_REQUIRED: "Play or skip an action before ending the turn.",
    MessageKey.ALREADY_DISCARDED: "You already discarded this turn.",
    MessageKey.ALREADY_DRAWN: "You already drew this turn.",
    MessageKey.CHALLENGE_PENDING: "Resolve the Queen challenge first.",
    MessageKey.NO_CHALLENGE: "No challenge is pending.",
    MessageKey.CARD_NOT_HELD: "That card is not in your hand or reserve.",
    MessageKey.INVALID_SELECTION: "That selection cannot be played.",
    MessageKey.INVALID_TARGET: "That card cannot go there.",
    MessageKey.COLUMN_ALREADY_OPEN: "The {suit} column is already open.",
    MessageKey.COLUMN_NOT_OPEN: "The {suit} column is not open yet.",
    MessageKey.COLUMN_LOCKED: "The {suit} column is complete.",
    MessageKey.NOT_AN_ACTIVATOR: "Only a seven or a Joker can guard a column.",
    MessageKey.LIMIT_EXCEEDED: "No room left in your {zone}.",
    MessageKey.IDENTICAL_CARDS: "You cannot exchange {card} for itself.",
    MessageKey.SAME_COLOR_JOKER: "Jokers of the same color cannot be exchanged.",
    MessageKey.RESERVE_INCOMPLETE: "Your reserve needs {required} card(s).",
    MessageKey.SHUFFLE_UNAVAILABLE: "Strategic Shuffle is not available now.",
}


def format_card(card: Card) -> str:
    """Return a Rich-rendered label for ``card``."""

    if card.is_joker:
        color = "red" if card.is_red_joker else "white"
        return f"[bold {color}]{card.label()}[/bold {color}]"
    color = _SUIT_STYLES.get(card.suit, "white")
    return f"[{color}]{card.label()}[/{color}]"


def describe_event(event: Event) -> str:
    """Return the player-facing text for ``event``."""

    if event.key is None:
        return ""
    template = MESSAGES.get(event.key, event.key.value)
    try:
        return template.format(**event.params)
    except KeyError:
        return template


def render_state(state: GameState, *, title: str = "Colonnade") -> RenderableType:
    """Return a Rich panel describing the current game state."""

    view = StateSummaryView(state=state, card_formatter=format_card)
    return Panel(view.render(), title=title, padding=(0, 1), border_style="cyan")
