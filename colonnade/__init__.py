"""Top-level package for the Colonnade card game engine."""

from . import actions, cards, deck, engine, messages, rules, state

__all__ = [
    "actions",
    "cards",
    "deck",
    "engine",
    "messages",
    "rules",
    "state",
]
