"""Next occurrence for the built-in cadences (daily, weekly, monthly, yearly).

All stepping happens on the UTC calendar day of the anchor; the time of day is
then copied back from the current due date. Stepping a local-time day instead
adds a spurious extra day whenever an evening due time sits on the next UTC day
(7pm Pacific is 03:00 UTC the following day).
"""

import logging
from datetime import date, datetime
from typing import Callable, Dict, Optional

from taskrepeat.engine.calendar_math import (
    add_days,
    add_months,
    add_weeks,
    add_years,
    at_time_of_day,
    resolve_anchor,
)
from taskrepeat.engine.termination import check_end_condition
from taskrepeat.models.repeating import AnchorMode, EndCondition, RepeatingCadence
from taskrepeat.models.result import EvaluationResult

logger = logging.getLogger(__name__)


_CADENCE_STEPS: Dict[RepeatingCadence, Callable[[date], date]] = {
    RepeatingCadence.DAILY: lambda day: add_days(day, 1),
    RepeatingCadence.WEEKLY: lambda day: add_weeks(day, 1),
    RepeatingCadence.MONTHLY: lambda day: add_months(day, 1),
    RepeatingCadence.YEARLY: lambda day: add_years(day, 1),
}


def compute_next_simple_occurrence(
    cadence: RepeatingCadence,
    current_due_date: Optional[datetime],
    completion_date: datetime,
    anchor_mode: AnchorMode,
) -> datetime:
    """Compute the next due date for a simple cadence.

    Args:
        cadence: daily, weekly, monthly or yearly
        current_due_date: Current due instant, if the task has one
        completion_date: When the task was completed
        anchor_mode: Step from the due date or from the completion date

    Returns:
        Aware UTC datetime one cadence step after the anchor day, at the current
        due date's UTC time of day

    Raises:
        ValueError: If `cadence` is not one of the four simple cadences
    """
    cadence = RepeatingCadence(cadence)
    step = _CADENCE_STEPS.get(cadence)
    if step is None:
        raise ValueError(f"'{cadence.value}' is not a simple cadence")

    anchor_day, time_of_day = resolve_anchor(current_due_date, completion_date, anchor_mode)
    next_due = at_time_of_day(step(anchor_day), time_of_day)
    logger.debug(f"{cadence.value} from {anchor_day.isoformat()} ({AnchorMode(anchor_mode).value}): {next_due.isoformat()}")
    return next_due


def evaluate_simple_pattern(
    cadence: RepeatingCadence,
    current_due_date: Optional[datetime],
    completion_date: datetime,
    anchor_mode: AnchorMode,
    current_occurrence_count: int,
    end_descriptor: Optional[EndCondition] = None,
) -> EvaluationResult:
    """Next occurrence of a simple cadence, with an optional attached end condition."""
    if current_occurrence_count < 0:
        raise ValueError("current_occurrence_count must be >= 0")
    next_due = compute_next_simple_occurrence(cadence, current_due_date, completion_date, anchor_mode)
    return check_end_condition(next_due, current_occurrence_count + 1, end_descriptor)
