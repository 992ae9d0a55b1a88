"""
Tests for the action line grammar and its handler table.
"""

from decimal import Decimal

import pytest

from handreplay.parse.actions import HANDLERS, STATE_KINDS
from handreplay.parse.grammar import LineKind, PostKind, classify, classify_post, is_street_boundary


class TestHandlerTable:

    def test_every_kind_except_noise_has_a_handler(self):
        assert set(HANDLERS) == set(LineKind) - {LineKind.NOISE}

    def test_state_kinds_have_handlers(self):
        assert STATE_KINDS <= set(HANDLERS)


class TestClassify:

    @pytest.mark.parametrize("line,kind,player,amount", [
        ("Alice: raises 20 to 40 and is all-in", LineKind.RAISE_ALL_IN, "Alice", Decimal("40")),
        ("Bob: calls 1,500 and is all-in", LineKind.CALL_ALL_IN, "Bob", Decimal("1500")),
        ("Bob: bets $12.50 and is all-in", LineKind.BET_ALL_IN, "Bob", Decimal("12.50")),
        ("Alice: folds", LineKind.FOLD, "Alice", None),
        ("Alice: folds [Ah Kd]", LineKind.FOLD, "Alice", None),
        ("Alice: checks", LineKind.CHECK, "Alice", None),
        ("John Smith: calls 10", LineKind.CALL, "John Smith", Decimal("10")),
        ("Bob: bets $2.50", LineKind.BET, "Bob", Decimal("2.50")),
        ("Bob: raises 4 to 6", LineKind.RAISE, "Bob", Decimal("6")),
        ("Uncalled bet ($5) returned to John Smith", LineKind.UNCALLED, "John Smith", Decimal("5")),
        ("Alice collected 40 from pot", LineKind.COLLECTED, "Alice", Decimal("40")),
        ("Alice collected 40 from side pot-2", LineKind.COLLECTED, "Alice", Decimal("40")),
        ("Alice collected 40 from main pot", LineKind.COLLECTED, "Alice", Decimal("40")),
    ])
    def test_action_lines(self, line, kind, player, amount):
        m = classify(line)
        assert m is not None
        assert m.kind is kind
        assert m.player == player
        assert m.amount == amount

    @pytest.mark.parametrize("line,kind", [
        ("Alice: mucks hand", LineKind.MUCK),
        ("Alice has timed out", LineKind.TIMEOUT),
        ("Alice is disconnected", LineKind.DISCONNECT),
        ("Alice is connected", LineKind.RECONNECT),
        ("Alice: sits out", LineKind.SIT_OUT),
        ("Alice is sitting out", LineKind.SIT_OUT),
        ("Alice has returned", LineKind.RETURN),
        ("Alice will be allowed to play after the button", LineKind.RETURN),
    ])
    def test_player_state_lines(self, line, kind):
        m = classify(line)
        assert m.kind is kind
        assert m.player == "Alice"
        assert m.amount is None

    def test_all_in_shapes_win_over_plain_shapes(self):
        assert classify("Alice: calls 10 and is all-in").kind is LineKind.CALL_ALL_IN

    def test_chat_is_noise_even_when_it_quotes_an_action(self):
        m = classify('Alice said, "nice hand: calls 10"')
        assert m.kind is LineKind.NOISE

    @pytest.mark.parametrize("line", [
        "Carol joins the table at seat #4",
        "Carol leaves the table",
        "Bob: doesn't show hand",
    ])
    def test_table_traffic_is_noise(self, line):
        assert classify(line).kind is LineKind.NOISE

    @pytest.mark.parametrize("line", [
        "*** FLOP *** [2c 7h 9s]",
        "Dealt to Alice [Ah Kd]",
        "Alice: does a little dance",
        "",
    ])
    def test_unknown_lines(self, line):
        assert classify(line) is None


class TestStreetBoundary:

    @pytest.mark.parametrize("line", [
        "*** FLOP *** [2c 7h 9s]",
        "*** TURN *** [2c 7h 9s] [Jd]",
        "*** RIVER *** [2c 7h 9s Jd] [3h]",
        "*** SHOW DOWN ***",
        "*** SHOWDOWN ***",
        "*** SUMMARY ***",
    ])
    def test_markers(self, line):
        assert is_street_boundary(line)

    def test_player_named_like_a_street_is_not_a_marker(self):
        assert not is_street_boundary("RIVERRAT: checks")
        assert not is_street_boundary("*** HOLE CARDS ***")


class TestClassifyPost:

    @pytest.mark.parametrize("line,kind,amount", [
        ("Alice: posts small blind 10", PostKind.SMALL_BLIND, Decimal("10")),
        ("Alice: posts big blind $0.25", PostKind.BIG_BLIND, Decimal("0.25")),
        ("Alice: posts small & big blinds 3", PostKind.SMALL_AND_BIG, Decimal("3")),
        ("Alice: posts dead blind 1", PostKind.DEAD_BLIND, Decimal("1")),
        ("Alice: posts the ante 60", PostKind.ANTE, Decimal("60")),
    ])
    def test_posts(self, line, kind, amount):
        assert classify_post(line) == (kind, "Alice", amount)

    def test_unknown_post(self):
        assert classify_post("Alice: posts a selfie") is None
