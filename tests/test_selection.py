from __future__ import annotations

import pytest

from colonnade import actions
from colonnade.actions import apply_command
from colonnade.cards import card_from_code
from colonnade.messages import MessageKey
from colonnade.selection import Combo, advisory, combination


def _select(state, *codes: str):
    outcome = None
    for code in codes:
        outcome = apply_command(state, actions.SelectCard(card_from_code(code)))
        state = outcome.state
    return outcome


def test_select_then_deselect_restores_selection(build_state) -> None:
    state = build_state(hand=["AH", "7H"])

    selected = _select(state, "AH")
    assert [card.code for card in selected.state.selected_cards] == ["AH"]
    assert selected.event.key is MessageKey.SELECT_ACTIVATOR

    toggled = _select(selected.state, "AH")
    assert toggled.state.selected_cards == []


def test_selection_caps_at_two_cards(build_state) -> None:
    state = build_state(hand=["AH", "7H", "2H"])

    outcome = _select(state, "AH", "7H", "2H")

    assert not outcome.event.accepted
    assert [card.code for card in outcome.state.selected_cards] == ["AH", "7H"]


def test_deselect_allowed_at_cap(build_state) -> None:
    state = build_state(hand=["AH", "7H", "2H"])

    outcome = _select(state, "AH", "7H", "AH")

    assert [card.code for card in outcome.state.selected_cards] == ["7H"]


def test_select_unheld_card_rejected(build_state) -> None:
    state = build_state(hand=["AH"])

    outcome = _select(state, "KS")

    assert outcome.event.key is MessageKey.CARD_NOT_HELD
    assert outcome.state is state


def test_selection_ignored_after_action(build_state) -> None:
    state = build_state(hand=["AH"], has_played_action=True)

    outcome = _select(state, "AH")

    assert outcome.event.key is MessageKey.ACTION_ALREADY_PLAYED
    assert outcome.state.selected_cards == []


@pytest.mark.parametrize(
    ("codes", "expected"),
    [
        (["AH", "7H"], Combo.OPEN_COLUMN),
        (["JOKER-R", "AS"], Combo.OPEN_COLUMN),
        (["7D", "JD"], Combo.FACE_CARD),
        (["KC", "JOKER-B"], Combo.FACE_CARD),
        (["QH", "JOKER-R"], Combo.QUEEN),
        (["7H"], Combo.LONE_SEVEN),
        (["4H"], Combo.LONE_NUMBER),
        (["JOKER-B"], Combo.LONE_JOKER),
        (["AH", "2H"], Combo.NONE),
        (["7H", "JOKER-R"], Combo.NONE),
        (["QS"], Combo.NONE),
    ],
)
def test_combination(codes: list[str], expected: Combo) -> None:
    assert combination([card_from_code(code) for code in codes]) is expected


@pytest.mark.parametrize(
    ("codes", "expected"),
    [
        (["AH"], MessageKey.SELECT_ACTIVATOR),
        (["7S"], MessageKey.SELECT_ACE),
        (["JOKER-R"], MessageKey.SELECT_ACE),
        (["AH", "7H"], MessageKey.TAP_COLUMN),
        (["KH", "7H"], MessageKey.TAP_COLUMN),
        (["QH", "7H"], MessageKey.CHOOSE_QUEEN_EFFECT),
        (["3H"], None),
        ([], None),
    ],
)
def test_advisory(codes: list[str], expected: MessageKey | None) -> None:
    assert advisory([card_from_code(code) for code in codes]) is expected
