from __future__ import annotations

from colonnade import actions
from colonnade.actions import apply_command
from colonnade.cards import Card, CardType, Suit, Value, card_from_code
from colonnade.messages import MessageKey
from colonnade.state import GUARDED_SLOT, check_conservation


def _play(state, *codes: str, suit: str, position: int):
    for code in codes:
        state = apply_command(state, actions.SelectCard(card_from_code(code))).state
    return apply_command(state, actions.PlaceCard(suit, position))


def _codes(cards: list[Card]) -> list[str]:
    return [card.code for card in cards]


def test_ace_and_joker_open_column(build_state) -> None:
    state = build_state(hand=["AH", "JOKER-R", "3C"], reserve=["9S", "4D"])

    outcome = _play(state, "AH", "JOKER-R", suit="hearts", position=0)

    column = outcome.state.columns[Suit.HEARTS]
    assert outcome.event.key is MessageKey.COLUMN_ACTIVATED
    assert _codes(column.cards) == ["AH"]
    assert column.has_lucky_card
    assert column.reserve_suit == card_from_code("JOKER-R")
    assert column.activator_type == "JOKER"
    assert outcome.state.has_played_action
    assert outcome.state.can_end_turn
    assert outcome.state.selected_cards == []
    assert _codes(outcome.state.current_player.hand) == ["3C"]
    assert check_conservation(outcome.state) == []


def test_open_column_from_reserve(build_state) -> None:
    state = build_state(hand=["3C"], reserve=["AS", "7S"])

    outcome = _play(state, "7S", "AS", suit="spades", position=0)

    assert outcome.event.accepted
    assert outcome.state.current_player.reserve == []
    assert outcome.state.columns[Suit.SPADES].activator_type == "7"


def test_open_column_requires_matching_suit(build_state) -> None:
    state = build_state(hand=["AS", "7H"])

    outcome = _play(state, "AS", "7H", suit="hearts", position=0)

    assert outcome.event.key is MessageKey.INVALID_TARGET
    assert not outcome.state.columns[Suit.HEARTS].has_lucky_card


def test_opening_discards_column_leftovers(build_state, build_column) -> None:
    state = build_state(
        hand=["AH", "7H"],
        columns=[build_column(Suit.HEARTS, ["JH"], guard="JOKER-B")],
    )

    outcome = _play(state, "AH", "7H", suit="hearts", position=0)

    column = outcome.state.columns[Suit.HEARTS]
    assert _codes(column.cards) == ["AH"]
    assert column.reserve_suit == card_from_code("7H")
    assert _codes(outcome.state.current_player.discard_pile) == ["JH", "JOKER-B"]
    assert check_conservation(outcome.state) == []


def test_unknown_column_rejected(build_state) -> None:
    state = build_state(hand=["AH", "7H"])

    outcome = _play(state, "AH", "7H", suit="stars", position=0)

    assert outcome.event.key is MessageKey.INVALID_TARGET


def test_same_color_jokers_cannot_be_exchanged(build_state, build_column) -> None:
    state = build_state(columns=[build_column(Suit.SPADES, ["AS"], guard="JOKER-B")])
    second_black = Card(id="joker-black-2", suit=Suit.SPECIAL, value=Value.JOKER, type=CardType.JOKER)
    state.current_player.hand.append(second_black)

    outcome = apply_command(
        state,
        actions.ActivatorExchange(Suit.SPADES, card_from_code("JOKER-B"), second_black),
    )

    assert not outcome.event.accepted
    assert outcome.event.key is MessageKey.SAME_COLOR_JOKER
    assert outcome.state is state
    assert outcome.state.has_played_action is False


def test_exchange_jokers_of_different_color(build_state, build_column) -> None:
    state = build_state(
        hand=["2C"],
        reserve=["JOKER-R"],
        columns=[build_column(Suit.SPADES, ["AS"], guard="JOKER-B")],
    )

    outcome = apply_command(
        state,
        actions.ActivatorExchange("spades", card_from_code("JOKER-B"), card_from_code("JOKER-R")),
    )

    assert outcome.event.key is MessageKey.ACTIVATOR_EXCHANGED
    assert outcome.state.columns[Suit.SPADES].reserve_suit == card_from_code("JOKER-R")
    assert _codes(outcome.state.current_player.reserve) == ["JOKER-B"]
    assert outcome.state.has_played_action
    assert check_conservation(outcome.state) == []


def test_exchange_seven_for_guarding_joker(build_state, build_column) -> None:
    state = build_state(hand=["7S"], columns=[build_column(Suit.SPADES, ["AS"], guard="JOKER-B")])

    outcome = apply_command(
        state,
        actions.ActivatorExchange(Suit.SPADES, card_from_code("JOKER-B"), card_from_code("7S")),
    )

    column = outcome.state.columns[Suit.SPADES]
    assert column.reserve_suit == card_from_code("7S")
    assert column.activator_type == "7"
    assert _codes(outcome.state.current_player.hand) == ["JOKER-B"]


def test_exchange_requires_matching_guard(build_state, build_column) -> None:
    state = build_state(hand=["JOKER-R"], columns=[build_column(Suit.SPADES, ["AS"], guard="7S")])

    outcome = apply_command(
        state,
        actions.ActivatorExchange(Suit.SPADES, card_from_code("JOKER-B"), card_from_code("JOKER-R")),
    )

    assert outcome.event.key is MessageKey.INVALID_TARGET


def test_exchange_rejects_non_activator(build_state, build_column) -> None:
    state = build_state(hand=["5S"], columns=[build_column(Suit.SPADES, ["AS"], guard="7S")])

    outcome = apply_command(
        state,
        actions.ActivatorExchange(Suit.SPADES, card_from_code("7S"), card_from_code("5S")),
    )

    assert outcome.event.key is MessageKey.NOT_AN_ACTIVATOR


def test_face_card_requires_open_column(build_state) -> None:
    state = build_state(hand=["7D", "JD"])

    outcome = _play(state, "7D", "JD", suit="diamonds", position=0)

    assert outcome.event.key is MessageKey.COLUMN_NOT_OPEN
    column = outcome.state.columns[Suit.DIAMONDS]
    assert column.face_cards == {}
    assert not column.is_open
    assert {card.id for card in outcome.state.current_player.hand} == {"diamonds-7", "diamonds-J"}
    assert not outcome.state.has_played_action


def test_face_card_attaches_to_open_column(build_state, build_column) -> None:
    state = build_state(hand=["7D", "KD"], columns=[build_column(Suit.DIAMONDS, ["AD"], guard="JOKER-R")])

    outcome = _play(state, "KD", "7D", suit="diamonds", position=0)

    column = outcome.state.columns[Suit.DIAMONDS]
    assert outcome.event.key is MessageKey.FACE_CARD_PLACED
    assert column.face_cards == {"K": card_from_code("KD")}
    assert _codes(outcome.state.current_player.discard_pile) == ["7D"]
    assert check_conservation(outcome.state) == []


def test_queen_combo_heals_when_placed(build_state) -> None:
    state = build_state(hand=["QH", "7C"])

    outcome = _play(state, "QH", "7C", suit="hearts", position=0)

    player = outcome.state.current_player
    assert outcome.event.key is MessageKey.QUEEN_HEAL
    assert outcome.event.params["amount"] == 2
    assert (player.health, player.max_health) == (12, 12)
    assert player.hand == []
    assert len(player.discard_pile) == 2


def test_lone_seven_into_empty_guarded_slot(build_state, build_column) -> None:
    state = build_state(hand=["7H", "2C"], columns=[build_column(Suit.HEARTS, ["AH"])])

    outcome = _play(state, "7H", suit="hearts", position=GUARDED_SLOT)

    assert outcome.event.key is MessageKey.SEVEN_PLACED
    assert outcome.state.columns[Suit.HEARTS].reserve_suit == card_from_code("7H")


def test_lone_seven_displaces_guard_to_origin(build_state, build_column) -> None:
    state = build_state(hand=["7H", "2C"], columns=[build_column(Suit.HEARTS, ["AH"], guard="JOKER-R")])

    outcome = _play(state, "7H", suit="hearts", position=GUARDED_SLOT)

    assert outcome.event.key is MessageKey.SEVEN_EXCHANGED
    assert outcome.event.params["recovered"] == "joker-red"
    assert _codes(outcome.state.current_player.hand) == ["2C", "JOKER-R"]
    assert outcome.state.columns[Suit.HEARTS].activator_type == "7"
    assert not outcome.state.columns[Suit.HEARTS].is_reserve_blocked
    assert check_conservation(outcome.state) == []


def test_seven_action_requires_open_column(build_state) -> None:
    state = build_state(hand=["7C"])

    outcome = apply_command(state, actions.SevenAction(card_from_code("7C")))

    assert outcome.event.key is MessageKey.COLUMN_NOT_OPEN


def test_seven_action_rejected_on_blocked_slot(build_state, build_column) -> None:
    column = build_column(Suit.CLUBS, ["AC", "2C", "3C", "4C", "5C", "6C"], is_reserve_blocked=True)
    state = build_state(hand=["7C"], columns=[column])

    outcome = apply_command(state, actions.SevenAction(card_from_code("7C")))

    assert outcome.event.key is MessageKey.INVALID_TARGET


def test_sequence_extends_open_column(build_state, build_column) -> None:
    state = build_state(hand=["3H"], columns=[build_column(Suit.HEARTS, ["AH", "2H"], guard="7S")])

    outcome = _play(state, "3H", suit="hearts", position=2)

    assert outcome.event.key is MessageKey.CARD_PLACED
    assert _codes(outcome.state.columns[Suit.HEARTS].cards) == ["AH", "2H", "3H"]


def test_sequence_rejects_gaps(build_state, build_column) -> None:
    state = build_state(hand=["4H"], columns=[build_column(Suit.HEARTS, ["AH", "2H"], guard="7S")])

    outcome = _play(state, "4H", suit="hearts", position=2)

    assert outcome.event.key is MessageKey.INVALID_TARGET
    assert _codes(outcome.state.columns[Suit.HEARTS].cards) == ["AH", "2H"]


def test_seven_in_sequence_recovers_guard(build_state, build_column) -> None:
    column = build_column(Suit.HEARTS, ["AH", "2H", "3H", "4H", "5H", "6H"], guard="JOKER-R")
    state = build_state(reserve=["7H"], columns=[column])

    outcome = _play(state, "7H", suit="hearts", position=6)

    column = outcome.state.columns[Suit.HEARTS]
    assert outcome.event.key is MessageKey.SEVEN_PLACED
    assert outcome.event.params["recovered"] == "joker-red"
    assert column.reserve_suit is None
    assert column.is_reserve_blocked
    assert _codes(outcome.state.current_player.reserve) == ["JOKER-R"]
    assert check_conservation(outcome.state) == []


def test_run_to_ten_locks_column(build_state, build_column) -> None:
    run = ["AS", "2S", "3S", "4S", "5S", "6S", "7S", "8S", "9S"]
    state = build_state(hand=["10S"], columns=[build_column(Suit.SPADES, run, is_reserve_blocked=True)])

    outcome = _play(state, "10S", suit="spades", position=9)

    assert outcome.state.columns[Suit.SPADES].is_locked


def test_locked_column_rejects_placement(build_state, build_column) -> None:
    column = build_column(Suit.SPADES, ["AS", "2S"], is_locked=True)
    state = build_state(hand=["3S"], columns=[column])

    outcome = _play(state, "3S", suit="spades", position=2)

    assert outcome.event.key is MessageKey.COLUMN_LOCKED


def test_placement_after_action_rejected(build_state) -> None:
    state = build_state(hand=["AH", "7H"])
    state.selected_cards = [card_from_code("AH"), card_from_code("7H")]
    state.has_played_action = True

    outcome = apply_command(state, actions.PlaceCard("hearts", 0))

    assert outcome.event.key is MessageKey.ACTION_ALREADY_PLAYED
