"""UTC calendar arithmetic shared by the evaluators.

Instants are decomposed into UTC calendar fields and recomposed from UTC
calendar fields. The host's local timezone is never consulted.
"""

import calendar
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional, Tuple

from taskrepeat.models.constants import DAYS_PER_WEEK, MONTHS_PER_YEAR
from taskrepeat.models.repeating import AnchorMode


def to_utc(value: datetime) -> datetime:
    """Return `value` as an aware UTC datetime. Naive values are taken to be UTC already."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def utc_day(value: datetime) -> date:
    return to_utc(value).date()


def utc_time_of_day(value: datetime) -> time:
    return to_utc(value).time()


def at_time_of_day(day: date, time_of_day: time) -> datetime:
    return datetime.combine(day, time_of_day, tzinfo=timezone.utc)


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def add_days(day: date, days: int) -> date:
    return day + timedelta(days=days)


def add_weeks(day: date, weeks: int) -> date:
    return day + timedelta(days=weeks * DAYS_PER_WEEK)


def add_months(day: date, months: int) -> date:
    """Step `months` calendar months, clamping the day to the target month's last day.

    Jan 31 + 1 month is Feb 28 (Feb 29 in leap years).
    """
    month_index = day.year * MONTHS_PER_YEAR + (day.month - 1) + months
    year, month = divmod(month_index, MONTHS_PER_YEAR)
    month += 1
    return date(year, month, min(day.day, days_in_month(year, month)))


def add_years(day: date, years: int) -> date:
    """Same month/day `years` later; Feb 29 clamps to Feb 28 in non-leap years."""
    return add_months(day, years * MONTHS_PER_YEAR)


def start_of_week(day: date) -> date:
    """Monday of the week containing `day`."""
    return day - timedelta(days=day.weekday())


def nth_weekday_of_month(year: int, month: int, weekday_number: int, n: int) -> date:
    """The `n`-th weekday (Monday=0) of a month, or the last one if the month has fewer."""
    first_offset = (weekday_number - date(year, month, 1).weekday()) % DAYS_PER_WEEK
    day_of_month = 1 + first_offset + (n - 1) * DAYS_PER_WEEK
    last = days_in_month(year, month)
    while day_of_month > last:
        day_of_month -= DAYS_PER_WEEK
    return date(year, month, day_of_month)


def resolve_anchor(
    current_due_date: Optional[datetime],
    completion_date: datetime,
    anchor_mode: AnchorMode,
) -> Tuple[date, time]:
    """Pick the UTC anchor day and the time of day the next occurrence keeps.

    The anchor is the due date in DUE_DATE mode (falling back to the completion
    date only when there is no due date) and the completion date in
    COMPLETION_DATE mode. The time of day always comes from the current due date
    when there is one, otherwise from the anchor itself.
    """
    anchor_mode = AnchorMode(anchor_mode)
    if anchor_mode == AnchorMode.DUE_DATE and current_due_date is not None:
        anchor = current_due_date
    else:
        anchor = completion_date
    time_source = current_due_date if current_due_date is not None else anchor
    return utc_day(anchor), utc_time_of_day(time_source)
