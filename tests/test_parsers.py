"""Tests for the line-oriented response parsers."""

import logging
from datetime import date, datetime

from smallville_chat.models import Dialog, ObjectChangeResponse, Plan
from smallville_chat.parsers import (
    parse_conversation,
    parse_object_changes,
    parse_plans,
    parse_ranking,
)

TODAY = date(2024, 5, 1)
PLAN_TEXT = "(9:00 AM) eat breakfast\ngo outside\n(1:00 PM) have lunch"


# ---------------------------------------------------------------------------
# Plans
# ---------------------------------------------------------------------------

def test_parse_plans_skips_lines_without_time() -> None:
    got = parse_plans(PLAN_TEXT, today=TODAY)

    assert got == [
        Plan("(9:00 AM) eat breakfast", datetime(2024, 5, 1, 9, 0)),
        Plan("(1:00 PM) have lunch", datetime(2024, 5, 1, 13, 0)),
    ]
    assert all(p.importance == 0.0 for p in got)


def test_parse_plans_is_repeatable() -> None:
    first = parse_plans(PLAN_TEXT, today=TODAY)
    second = parse_plans(PLAN_TEXT, today=TODAY)

    assert first == second


def test_parse_plans_ignores_blank_and_unparseable_lines() -> None:
    raw = "Here is my day:\n\n(8:30 AM) open the bakery\nBake 40 loaves\n"

    got = parse_plans(raw, today=TODAY)

    assert [p.description for p in got] == ["(8:30 AM) open the bakery"]


def test_parse_plans_skips_line_ending_in_number() -> None:
    raw = "(9:00 AM) eat breakfast\nRead chapter 3\n(1:00 PM) have lunch"

    got = parse_plans(raw, today=TODAY)

    assert got == [
        Plan("(9:00 AM) eat breakfast", datetime(2024, 5, 1, 9, 0)),
        Plan("(1:00 PM) have lunch", datetime(2024, 5, 1, 13, 0)),
    ]


def test_parse_plans_empty_response() -> None:
    assert parse_plans("") == []


# ---------------------------------------------------------------------------
# Conversations
# ---------------------------------------------------------------------------

def test_parse_conversation_discards_preamble() -> None:
    got = parse_conversation("Some preamble\nAlice: Hello\nBob: Hi there", "Alice", "Bob")

    assert got.participant_a == "Alice"
    assert got.participant_b == "Bob"
    assert got.dialogs == (Dialog("Alice", "Hello"), Dialog("Bob", "Hi there"))


def test_parse_conversation_splits_on_first_separator_only() -> None:
    got = parse_conversation("Alice: Note: bring bread\r\nBob: Will do", "Alice", "Bob")

    assert got.dialogs == (Dialog("Alice", "Note: bring bread"), Dialog("Bob", "Will do"))


def test_parse_conversation_keeps_duplicates_in_order() -> None:
    got = parse_conversation("Alice: Hi\nBob: Hi\nAlice: Hi", "Alice", "Bob")

    assert [d.speaker for d in got.dialogs] == ["Alice", "Bob", "Alice"]


def test_parse_conversation_drops_empty_text() -> None:
    got = parse_conversation("Alice: \nBob: Hi", "Alice", "Bob")

    assert got.dialogs == (Dialog("Bob", "Hi"),)


def test_parse_conversation_without_dialog() -> None:
    got = parse_conversation("They just wave at each other.", "Alice", "Bob")

    assert got.dialogs == ()


# ---------------------------------------------------------------------------
# Object Changes
# ---------------------------------------------------------------------------

def test_parse_object_changes_drops_unchanged() -> None:
    got = parse_object_changes("door: open\nlamp: Unchanged\nwindow: closed")

    assert got == {
        0: ObjectChangeResponse("door", "open"),
        2: ObjectChangeResponse("window", "closed"),
    }


def test_parse_object_changes_value_with_colon() -> None:
    got = parse_object_changes("clock: 3:00 PM")

    assert got == {0: ObjectChangeResponse("clock", "3:00 PM")}


def test_parse_object_changes_line_without_separator() -> None:
    got = parse_object_changes("Here are the changes\nbed: made")

    assert got == {1: ObjectChangeResponse("bed", "made")}


def test_parse_object_changes_warns_when_nothing_changed(caplog) -> None:
    with caplog.at_level(logging.WARNING):
        got = parse_object_changes("lamp: UNCHANGED\nstove:")

    assert got == {}
    assert "No objects were updated" in caplog.text


# ---------------------------------------------------------------------------
# Memory Ranking
# ---------------------------------------------------------------------------

def test_parse_ranking_bare_integer() -> None:
    assert parse_ranking("5") == [5]
    assert parse_ranking(" 7\n") == [7]


def test_parse_ranking_json_array() -> None:
    assert parse_ranking("[3, 1, 4]") == [3, 1, 4]


def test_parse_ranking_malformed_array(caplog) -> None:
    with caplog.at_level(logging.ERROR):
        got = parse_ranking("[3, 1")

    assert got == []
    assert "memory ranking" in caplog.text


def test_parse_ranking_rejects_non_integers() -> None:
    assert parse_ranking("seven") == []
    assert parse_ranking('["a", 2]') == []
    assert parse_ranking("[true, 2]") == []
