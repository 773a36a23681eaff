"""Tests for clock-time extraction from plan lines."""

import logging
from datetime import date, datetime

from smallville_chat.outcome import NO_TIME, TIME_NOT_FOUND, UNPARSEABLE_TIME
from smallville_chat.time_extractor import extract_time

TODAY = date(2024, 5, 1)


def test_single_line_afternoon_time() -> None:
    line = "(3:00 PM) go to the market"

    got = extract_time(line, line, today=TODAY)

    assert got.ok
    assert got.value == datetime(2024, 5, 1, 15, 0)


def test_defaults_to_current_date() -> None:
    line = "(3:00 PM) go to the market"

    got = extract_time(line, line)

    assert got.value.date() == date.today()
    assert (got.value.hour, got.value.minute) == (15, 0)


def test_two_digit_hour() -> None:
    line = "(10:30 AM) read the newspaper"

    got = extract_time(line, line, today=TODAY)

    assert got.value == datetime(2024, 5, 1, 10, 30)


def test_locates_later_line_in_full_response() -> None:
    full = "(9:00 AM) eat breakfast\n(1:00 PM) have lunch"

    got = extract_time(full, "(1:00 PM) have lunch", today=TODAY)

    assert got.value == datetime(2024, 5, 1, 13, 0)


def test_time_at_start_of_response_is_absent() -> None:
    line = "3:00 PM go for a walk"

    got = extract_time(line, line, today=TODAY)

    assert not got.ok
    assert got.reason == TIME_NOT_FOUND


def test_line_ending_in_digits_is_absent() -> None:
    full = "(9:00 AM) eat breakfast\nRead chapter 3"

    got = extract_time(full, "Read chapter 3", today=TODAY)

    assert got.reason == TIME_NOT_FOUND


def test_lowercase_marker() -> None:
    line = "(7:45 am) wake up"

    got = extract_time(line, line, today=TODAY)

    assert got.value == datetime(2024, 5, 1, 7, 45)


def test_line_without_digits_is_absent(caplog) -> None:
    with caplog.at_level(logging.WARNING):
        got = extract_time("go outside", "go outside", today=TODAY)

    assert not got.ok
    assert got.reason == NO_TIME
    assert "possibly missing a time" in caplog.text


def test_line_missing_from_response() -> None:
    got = extract_time("(9:00 AM) eat", "(8:15 PM) sleep", today=TODAY)

    assert got.reason == TIME_NOT_FOUND


def test_number_that_is_not_a_time(caplog) -> None:
    line = "Room 12 is closed"

    with caplog.at_level(logging.ERROR):
        got = extract_time(line, line, today=TODAY)

    assert got.reason == UNPARSEABLE_TIME
    assert got.value_or(None) is None
    assert "Could not parse time" in caplog.text


def test_uses_injected_logger(caplog) -> None:
    reporter = logging.getLogger("tests.reporter")

    with caplog.at_level(logging.WARNING, logger="tests.reporter"):
        extract_time("no time here", "no time here", log=reporter)

    assert [r.name for r in caplog.records] == ["tests.reporter"]
