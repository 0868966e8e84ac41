import dataclasses
import pathlib
import sys

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from canasta.cards import Card, Suit, card_label, parse_cards
from canasta.meld import (
    Direction,
    MeldType,
    build_metadata,
    expected_direction,
    extend,
    infer_type,
    is_all_wild,
    is_canasta,
    is_locked,
    is_valid_run_start,
    run_direction,
    sort_run_cards,
)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("", MeldType.NONE),
        ("JK 2H JK", MeldType.WILD),
        ("KS KH JK", MeldType.SET),
        ("4S 5S JK 7S", MeldType.RUN),
        ("4S 5H 9D", MeldType.MIXED),
    ],
)
def test_infer_type(text, expected):
    assert infer_type(parse_cards(text)) == expected


@pytest.mark.parametrize(
    "text, expected",
    [
        ("4S JK", Direction.UNKNOWN),
        ("4S 5S 6S", Direction.UP),
        ("8S 9S 10S", Direction.UP),
        ("KS QS JS", Direction.DOWN),
        ("QS KS AS", Direction.DOWN),
        ("9S 10S", Direction.DOWN),
        # the Ace sits above the King, so it never lowers the bottom of a run
        ("8S 9S 10S JS QS KS AS", Direction.UP),
        # a low start wins even when the top card could also start a downward run
        ("5S 6S 7S 8S 9S 10S JS QS", Direction.UP),
    ],
)
def test_run_direction_prefers_up_from_low_start(text, expected):
    assert run_direction(parse_cards(text)) == expected


def test_valid_run_starts():
    assert is_valid_run_start(Card(4, Suit.SPADE))
    assert is_valid_run_start(Card(8, Suit.SPADE))
    assert is_valid_run_start(Card(10, Suit.SPADE))
    assert is_valid_run_start(Card(13, Suit.SPADE))
    assert is_valid_run_start(Card(1, Suit.SPADE))
    assert not is_valid_run_start(Card(9, Suit.SPADE))
    assert not is_valid_run_start(Card(3, Suit.SPADE))
    assert not is_valid_run_start(Card(2, Suit.SPADE))
    assert not is_valid_run_start(Card.joker())


def test_expected_direction():
    assert expected_direction(4) == Direction.UP
    assert expected_direction(8) == Direction.UP
    assert expected_direction(10) == Direction.DOWN
    assert expected_direction(1) == Direction.DOWN
    assert expected_direction(9) == Direction.NONE
    assert expected_direction(3) == Direction.NONE


def test_build_metadata_for_run_and_set():
    run = build_metadata(parse_cards("4S 5S JK 7S"), "meld_run", "our")
    assert run.meld_id == "meld_run"
    assert run.team == "our"
    assert run.meld_type == MeldType.RUN
    assert run.direction == Direction.UP
    assert not run.is_canasta
    assert len(run) == 4

    group = build_metadata(parse_cards("KS KH KD"))
    assert group.meld_type == MeldType.SET
    assert group.direction == Direction.NONE
    assert group.meld_id.startswith("meld_")


def test_meld_is_immutable():
    meld = build_metadata(parse_cards("KS KH KD"), "m1")
    with pytest.raises(dataclasses.FrozenInstanceError):
        meld.cards = ()


def test_extend_recomputes_and_keeps_identity():
    meld = build_metadata(parse_cards("4S 5S 6S 7S 8S 9S"), "m1", "their")
    extended = extend(meld, parse_cards("10S"))
    assert extended.meld_id == "m1"
    assert extended.team == "their"
    assert extended.is_canasta
    assert len(meld) == 6
    assert [card_label(c) for c in extended.cards][-1] == "10S"


def test_extend_keeps_the_run_direction():
    down = build_metadata(parse_cards("KS QS JS 10S"), "m1")
    assert down.direction == Direction.DOWN
    extended = extend(down, parse_cards("8S 7S"))
    assert extended.meld_type == MeldType.RUN
    assert extended.direction == Direction.DOWN

    short = build_metadata(parse_cards("4S JK"), "m2")
    assert extend(short, parse_cards("6S")).direction == Direction.UP


def test_extend_does_not_check_legality():
    meld = build_metadata(parse_cards("KS KH KD"), "m1")
    extended = extend(meld, parse_cards("4S"))
    assert extended.meld_type == MeldType.MIXED


def test_locked_only_for_wild_canasta():
    wild_canasta = build_metadata([Card.joker()] * 7)
    assert is_locked(wild_canasta)
    assert wild_canasta.is_locked
    assert not is_locked(build_metadata([Card.joker()] * 6))
    assert not is_locked(build_metadata(parse_cards("4S 5S 6S 7S 8S 9S 10S")))


def test_wild_and_canasta_helpers():
    assert not is_all_wild([])
    assert is_all_wild(parse_cards("2H JK 2C"))
    assert not is_all_wild(parse_cards("2H JK 4C"))
    assert is_canasta(parse_cards("KS KH KD KC KS KH JK"))
    assert not is_canasta(parse_cards("KS KH KD KC KS KH"))


def test_sort_run_cards_by_direction():
    cards = parse_cards("7S JK 5S 6S")
    assert [card_label(c) for c in sort_run_cards(cards)] == ["5S", "6S", "7S", "JK"]
    down = parse_cards("JS AS KS 2H QS")
    assert [card_label(c) for c in sort_run_cards(down, Direction.DOWN)] == ["AS", "KS", "QS", "JS", "2H"]
