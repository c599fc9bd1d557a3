"""Next occurrence for custom `{unit, interval, weekdays?}` patterns."""

import logging
from datetime import date, datetime
from typing import Iterator, Optional

from taskrepeat.engine.calendar_math import (
    add_days,
    add_months,
    add_weeks,
    add_years,
    at_time_of_day,
    nth_weekday_of_month,
    resolve_anchor,
    start_of_week,
)
from taskrepeat.engine.termination import check_end_condition
from taskrepeat.models.constants import DAYS_PER_WEEK
from taskrepeat.models.repeating import AnchorMode, CustomRepeatingPattern, RepeatingUnit
from taskrepeat.models.result import EvaluationResult

logger = logging.getLogger(__name__)


def _weekday_candidates(anchor_day: date, interval: int) -> Iterator[date]:
    """Days that may host the next weekly occurrence, in order.

    The rest of the anchor's week (Monday-based) first, then every day of the
    week `interval` weeks after it. A non-empty weekday set always matches
    within these.
    """
    day = add_days(anchor_day, 1)
    while day.weekday() != 0:
        yield day
        day = add_days(day, 1)
    next_week = add_weeks(start_of_week(anchor_day), interval)
    for offset in range(DAYS_PER_WEEK):
        yield add_days(next_week, offset)


def _step_custom_day(pattern: CustomRepeatingPattern, anchor_day: date) -> date:
    if pattern.unit == RepeatingUnit.DAYS:
        return add_days(anchor_day, pattern.interval)

    if pattern.unit == RepeatingUnit.WEEKS:
        if not pattern.weekdays:
            return add_weeks(anchor_day, pattern.interval)
        wanted = {day.number for day in pattern.weekdays}
        return next(
            day for day in _weekday_candidates(anchor_day, pattern.interval) if day.weekday() in wanted
        )

    if pattern.unit == RepeatingUnit.MONTHS:
        target = add_months(anchor_day, pattern.interval)
        if pattern.month_weekday is None:
            return target
        return nth_weekday_of_month(
            target.year,
            target.month,
            pattern.month_weekday.weekday.number,
            pattern.month_weekday.week_of_month,
        )

    if pattern.unit == RepeatingUnit.YEARS:
        return add_years(anchor_day, pattern.interval)

    raise ValueError(f"Unsupported repeating unit: {pattern.unit}")


def next_custom_day(pattern: CustomRepeatingPattern, anchor_day: date) -> date:
    """Step a UTC anchor day forward by one application of `pattern`.

    Raises:
        ValueError: If the step lands past the last representable date
    """
    try:
        return _step_custom_day(pattern, anchor_day)
    except (OverflowError, ValueError) as e:
        raise ValueError(
            f"every {pattern.interval} {pattern.unit.value} from {anchor_day.isoformat()} "
            f"is past the last supported date ({date.max.isoformat()})"
        ) from e


def compute_next_custom_occurrence(
    pattern: CustomRepeatingPattern,
    current_due_date: Optional[datetime],
    completion_date: datetime,
    anchor_mode: AnchorMode,
    current_occurrence_count: int,
) -> EvaluationResult:
    """Compute the next occurrence of a custom pattern and apply its end condition.

    Anchor and time-of-day selection are the same as for simple cadences. The
    occurrence count grows by exactly one per call, however many calendar days
    or weeks the weekday search skips.

    Args:
        pattern: Validated custom pattern
        current_due_date: Current due instant, if the task has one
        completion_date: When the task was completed
        anchor_mode: Step from the due date or from the completion date
        current_occurrence_count: Completions recorded before this one

    Returns:
        EvaluationResult from the end-condition check
    """
    if current_occurrence_count < 0:
        raise ValueError("current_occurrence_count must be >= 0")

    anchor_day, time_of_day = resolve_anchor(current_due_date, completion_date, anchor_mode)
    candidate = at_time_of_day(next_custom_day(pattern, anchor_day), time_of_day)
    logger.debug(
        f"every {pattern.interval} {pattern.unit.value} from {anchor_day.isoformat()}: {candidate.isoformat()}"
    )
    return check_end_condition(candidate, current_occurrence_count + 1, pattern.end)
