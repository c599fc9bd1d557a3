"""End-condition check shared by the simple and custom evaluators."""

import logging
from datetime import datetime
from typing import Optional

from taskrepeat.engine.calendar_math import utc_day
from taskrepeat.models.repeating import EndAfterOccurrences, EndCondition, EndUntilDate, NeverEnd
from taskrepeat.models.result import EvaluationResult

logger = logging.getLogger(__name__)


def check_end_condition(
    candidate_next_date: Optional[datetime],
    new_occurrence_count: int,
    end_descriptor: Optional[EndCondition] = None,
) -> EvaluationResult:
    """Decide whether a freshly computed next due date ends the series.

    - No descriptor or `never`: the series continues.
    - `after_occurrences`: ends once `new_occurrence_count` (the count including
      the completion just made) reaches the limit. A limit of 1 ends the series
      on the first completion.
    - `until_date`: ends when the candidate falls on a UTC calendar day strictly
      after the until date. A candidate on the until date itself still runs.

    A missing candidate means no further occurrence exists and always ends the series.

    Args:
        candidate_next_date: Next due date computed by an evaluator
        new_occurrence_count: Caller's occurrence count plus one
        end_descriptor: End condition attached to the pattern, if any

    Returns:
        EvaluationResult; `next_due_date` is None whenever the series ends
    """
    terminate = candidate_next_date is None
    if not terminate and end_descriptor is not None:
        if isinstance(end_descriptor, EndAfterOccurrences):
            terminate = new_occurrence_count >= end_descriptor.end_after_occurrences
        elif isinstance(end_descriptor, EndUntilDate):
            terminate = utc_day(candidate_next_date) > utc_day(end_descriptor.end_until_date)
        elif not isinstance(end_descriptor, NeverEnd):
            raise TypeError(f"Unsupported end condition: {type(end_descriptor).__name__}")

    if terminate:
        logger.debug(f"Series ends at occurrence {new_occurrence_count}")
        return EvaluationResult(
            should_terminate=True,
            next_due_date=None,
            new_occurrence_count=new_occurrence_count,
        )
    return EvaluationResult(
        should_terminate=False,
        next_due_date=candidate_next_date,
        new_occurrence_count=new_occurrence_count,
    )
