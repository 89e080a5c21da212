"""Tests for duration formatting and calendar helpers."""

from datetime import date

from sentinel.timeutil import (
    day_key,
    end_of_month,
    end_of_week,
    format_duration,
    session_duration,
    start_of_month,
    start_of_week,
)
from tests.conftest import make_session, ms


class TestFormatDuration:
    def test_hours_minutes_seconds(self):
        assert format_duration(5425000) == "1h 30m 25s"

    def test_zero(self):
        assert format_duration(0) == "0h 0m 0s"

    def test_floors_partial_seconds(self):
        assert format_duration(59_999) == "0h 0m 59s"

    def test_hours_do_not_wrap(self):
        assert format_duration(30 * 3600 * 1000) == "30h 0m 0s"


class TestSessionDuration:
    def test_ended_session(self):
        session = make_session(session_start=0, session_end=5425000)
        assert format_duration(session_duration(session)) == "1h 30m 25s"

    def test_ongoing_session_runs_until_now(self):
        session = make_session(session_start=1000, session_end=None)
        assert session_duration(session, now=61_000) == 60_000


class TestDayKey:
    def test_same_calendar_day(self):
        assert day_key(ms(2024, 1, 1, 23, 59, 59)) == day_key(ms(2024, 1, 1, 0, 0, 1))

    def test_next_day_differs(self):
        assert day_key(ms(2024, 1, 1, 23, 59, 59)) != day_key(ms(2024, 1, 2, 0, 0, 1))

    def test_iso_format(self):
        assert day_key(ms(2024, 3, 7, 12, 0)) == "2024-03-07"


class TestWeekBoundaries:
    def test_week_starts_on_sunday(self):
        # 2024-01-03 is a Wednesday
        assert start_of_week(date(2024, 1, 3)) == date(2023, 12, 31)
        assert end_of_week(date(2024, 1, 3)) == date(2024, 1, 6)

    def test_sunday_is_its_own_start(self):
        assert start_of_week(date(2024, 1, 7)) == date(2024, 1, 7)

    def test_saturday_is_end(self):
        assert end_of_week(date(2024, 1, 6)) == date(2024, 1, 6)


class TestMonthBoundaries:
    def test_start_of_month(self):
        assert start_of_month(date(2024, 2, 17)) == date(2024, 2, 1)

    def test_leap_february(self):
        assert end_of_month(date(2024, 2, 10)) == date(2024, 2, 29)

    def test_december(self):
        assert end_of_month(date(2023, 12, 5)) == date(2023, 12, 31)
