"""Tests for stored repeating data conversion."""

import pytest
from datetime import datetime, timezone

from taskrepeat.models.repeating import (
    CustomRepeatingPattern,
    EndAfterOccurrences,
    EndUntilDate,
    MonthWeekday,
    NeverEnd,
    RepeatingPatternError,
    RepeatingUnit,
    Weekday,
)
from taskrepeat.recurrence.pattern_data import (
    dump_custom_pattern,
    dump_end_condition,
    parse_custom_pattern,
    parse_end_condition,
)


class TestParseCustomPattern:
    def test_stored_weekly_pattern(self):
        pattern = parse_custom_pattern(
            {
                "type": "custom",
                "unit": "weeks",
                "interval": 1,
                "weekdays": ["wednesday", "monday"],
                "endCondition": "never",
            }
        )
        assert pattern.unit == RepeatingUnit.WEEKS
        assert pattern.weekdays == [Weekday.MONDAY, Weekday.WEDNESDAY]
        assert isinstance(pattern.end, NeverEnd)

    def test_stored_month_weekday(self):
        pattern = parse_custom_pattern(
            {
                "type": "custom",
                "unit": "months",
                "interval": 1,
                "monthWeekday": {"weekday": "thursday", "weekOfMonth": 2},
                "endCondition": "never",
            }
        )
        assert pattern.month_weekday == MonthWeekday(weekday=Weekday.THURSDAY, week_of_month=2)

    def test_missing_required_end_field_raises(self):
        with pytest.raises(RepeatingPatternError):
            parse_custom_pattern({"type": "custom", "unit": "days", "interval": 1, "endCondition": "until_date"})

    def test_bad_interval_raises(self):
        with pytest.raises(RepeatingPatternError):
            parse_custom_pattern({"type": "custom", "unit": "days", "interval": 0, "endCondition": "never"})

    def test_non_mapping_raises(self):
        with pytest.raises(RepeatingPatternError):
            parse_custom_pattern(["days", 1])


class TestParseEndCondition:
    def test_no_data(self):
        assert parse_end_condition(None) is None
        assert parse_end_condition({}) is None

    def test_data_without_end_condition(self):
        assert parse_end_condition({"note": "legacy"}) is None

    def test_end_fields_without_end_condition_are_ignored(self):
        assert parse_end_condition({"endAfterOccurrences": 3}) is None
        assert parse_end_condition({"endUntilDate": "2025-12-15T00:00:00.000Z"}) is None

    def test_nested_and_flat_end_conflict_raises(self):
        with pytest.raises(RepeatingPatternError):
            parse_end_condition(
                {"end": {"end_condition": "never"}, "endCondition": "after_occurrences", "endAfterOccurrences": 2}
            )

    def test_after_occurrences(self):
        end = parse_end_condition({"endCondition": "after_occurrences", "endAfterOccurrences": 5})
        assert end == EndAfterOccurrences(end_after_occurrences=5)

    def test_until_date_string(self):
        end = parse_end_condition({"endCondition": "until_date", "endUntilDate": "2025-12-15T00:00:00.000Z"})
        assert isinstance(end, EndUntilDate)
        assert end.end_until_date == datetime(2025, 12, 15, tzinfo=timezone.utc)

    def test_declared_but_incomplete_raises(self):
        with pytest.raises(RepeatingPatternError):
            parse_end_condition({"endCondition": "after_occurrences"})


class TestDump:
    def test_dump_custom_pattern_flat_shape(self):
        pattern = CustomRepeatingPattern(
            unit=RepeatingUnit.WEEKS,
            interval=2,
            weekdays=[Weekday.MONDAY, Weekday.FRIDAY],
            end=EndUntilDate(end_until_date=datetime(2025, 12, 1, tzinfo=timezone.utc)),
        )
        assert dump_custom_pattern(pattern) == {
            "type": "custom",
            "unit": "weeks",
            "interval": 2,
            "weekdays": ["monday", "friday"],
            "endCondition": "until_date",
            "endUntilDate": "2025-12-01T00:00:00Z",
        }

    def test_dumped_pattern_parses_back(self):
        pattern = CustomRepeatingPattern(
            unit=RepeatingUnit.MONTHS,
            month_weekday=MonthWeekday(weekday=Weekday.SUNDAY, week_of_month=5),
            end=EndAfterOccurrences(end_after_occurrences=12),
        )
        assert parse_custom_pattern(dump_custom_pattern(pattern)) == pattern

    def test_dump_never(self):
        assert dump_end_condition(NeverEnd()) == {"endCondition": "never"}
