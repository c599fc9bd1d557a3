"""Tests for UTC calendar helpers."""

import pytest
from datetime import date, datetime, time, timedelta, timezone

from taskrepeat.engine.calendar_math import (
    add_months,
    add_years,
    nth_weekday_of_month,
    resolve_anchor,
    start_of_week,
    to_utc,
)
from taskrepeat.models.repeating import AnchorMode


class TestAddMonths:
    @pytest.mark.parametrize(
        "start, months, expected",
        [
            (date(2025, 1, 31), 1, date(2025, 2, 28)),
            (date(2024, 1, 31), 1, date(2024, 2, 29)),
            (date(2025, 1, 15), 1, date(2025, 2, 15)),
            (date(2025, 11, 30), 3, date(2026, 2, 28)),
            (date(2025, 12, 10), 1, date(2026, 1, 10)),
            (date(2025, 5, 31), 12, date(2026, 5, 31)),
            (date(2025, 8, 31), 1, date(2025, 9, 30)),
        ],
    )
    def test_clamps_to_month_end(self, start, months, expected):
        assert add_months(start, months) == expected

    def test_add_years_leap_day(self):
        assert add_years(date(2024, 2, 29), 1) == date(2025, 2, 28)
        assert add_years(date(2024, 2, 29), 4) == date(2028, 2, 29)


class TestWeekHelpers:
    def test_start_of_week_is_monday(self):
        assert start_of_week(date(2025, 11, 7)) == date(2025, 11, 3)
        assert start_of_week(date(2025, 11, 3)) == date(2025, 11, 3)
        assert start_of_week(date(2025, 11, 9)) == date(2025, 11, 3)

    def test_nth_weekday_of_month(self):
        # Mondays in December 2025: 1, 8, 15, 22, 29
        assert nth_weekday_of_month(2025, 12, 0, 1) == date(2025, 12, 1)
        assert nth_weekday_of_month(2025, 12, 0, 3) == date(2025, 12, 15)
        assert nth_weekday_of_month(2025, 12, 0, 5) == date(2025, 12, 29)
        # Only four Mondays in February 2026
        assert nth_weekday_of_month(2026, 2, 0, 5) == date(2026, 2, 23)


class TestResolveAnchor:
    def test_due_date_mode(self):
        due = datetime(2025, 11, 1, 14, 30, tzinfo=timezone.utc)
        completed = datetime(2025, 11, 4, 9, 0, tzinfo=timezone.utc)
        assert resolve_anchor(due, completed, AnchorMode.DUE_DATE) == (date(2025, 11, 1), time(14, 30))

    def test_completion_mode_keeps_due_time(self):
        due = datetime(2025, 11, 1, 14, 30, tzinfo=timezone.utc)
        completed = datetime(2025, 11, 4, 9, 0, tzinfo=timezone.utc)
        assert resolve_anchor(due, completed, AnchorMode.COMPLETION_DATE) == (date(2025, 11, 4), time(14, 30))

    def test_no_due_date_uses_completion_for_both(self):
        completed = datetime(2025, 11, 4, 9, 5, tzinfo=timezone.utc)
        for mode in AnchorMode:
            assert resolve_anchor(None, completed, mode) == (date(2025, 11, 4), time(9, 5))

    def test_to_utc_converts_offsets(self):
        tokyo = timezone(timedelta(hours=9))
        value = datetime(2025, 11, 2, 8, 0, tzinfo=tokyo)
        assert to_utc(value) == datetime(2025, 11, 1, 23, 0, tzinfo=timezone.utc)
        assert to_utc(value).date() == date(2025, 11, 1)
