"""Roll a repeating task forward when it is completed.

The storage layer calls `handle_repeating_task_completion` on a completion event
and persists the state returned by `apply_roll_forward`. Both are pure; the
storage layer serializes concurrent completions of the same task.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from taskrepeat.engine.custom import compute_next_custom_occurrence
from taskrepeat.engine.simple import evaluate_simple_pattern
from taskrepeat.models.constants import LOCAL_DATE_FORMAT
from taskrepeat.models.repeating import (
    SIMPLE_CADENCES,
    AnchorMode,
    RepeatingCadence,
    RepeatingPatternError,
)
from taskrepeat.models.result import RepeatingTaskResult
from taskrepeat.models.task import RepeatingTaskState
from taskrepeat.recurrence.pattern_data import parse_custom_pattern, parse_end_condition

logger = logging.getLogger(__name__)


def resolve_completion_date(
    task: RepeatingTaskState,
    completed_at: datetime,
    local_completion_date: Optional[str] = None,
) -> datetime:
    """Pick the completion instant the engine steps from.

    All-day tasks completed in the evening local time are already on the next
    UTC day, so for them (unless they repeat from the due date) the client's
    local calendar day wins, taken as 00:00 UTC of that day.
    """
    if task.is_all_day and local_completion_date and task.repeat_from != AnchorMode.DUE_DATE:
        try:
            local_day = datetime.strptime(local_completion_date, LOCAL_DATE_FORMAT)
        except ValueError as e:
            raise ValueError(
                f"local_completion_date must be YYYY-MM-DD, got {local_completion_date!r}"
            ) from e
        return local_day.replace(tzinfo=timezone.utc)
    return completed_at


def handle_repeating_task_completion(
    task: RepeatingTaskState,
    *,
    was_completed: bool,
    is_now_completed: bool,
    completed_at: datetime,
    local_completion_date: Optional[str] = None,
) -> Optional[RepeatingTaskResult]:
    """Evaluate a completion event for a repeating task.

    Args:
        task: Current repeating state of the task
        was_completed: Completion flag before the update
        is_now_completed: Completion flag after the update
        completed_at: When the task was completed
        local_completion_date: Client's local calendar day (YYYY-MM-DD), used for all-day tasks

    Returns:
        RepeatingTaskResult, or None when this is not a completion of a repeating task

    Raises:
        RepeatingPatternError: If the stored repeating data is invalid
    """
    if not is_now_completed or was_completed:
        return None
    if task.repeating == RepeatingCadence.NEVER:
        return None

    completion_date = resolve_completion_date(task, completed_at, local_completion_date)

    if task.repeating == RepeatingCadence.CUSTOM:
        if not task.repeating_data:
            raise RepeatingPatternError(f"Task {task.id} repeats 'custom' but has no repeating data")
        pattern = parse_custom_pattern(task.repeating_data)
        result = compute_next_custom_occurrence(
            pattern,
            task.due_date_time,
            completion_date,
            task.repeat_from,
            task.occurrence_count,
        )
    elif task.repeating in SIMPLE_CADENCES:
        result = evaluate_simple_pattern(
            task.repeating,
            task.due_date_time,
            completion_date,
            task.repeat_from,
            task.occurrence_count,
            parse_end_condition(task.repeating_data),
        )
    else:
        raise RepeatingPatternError(f"Task {task.id} has unsupported repeating value {task.repeating!r}")

    if result.should_terminate:
        logger.info(f"Repeating series for task {task.id} ended after {result.new_occurrence_count} occurrences")
    else:
        logger.debug(f"Task {task.id} rolls forward to {result.next_due_date.isoformat()}")
    return RepeatingTaskResult.from_evaluation(result)


def apply_roll_forward(task: RepeatingTaskState, result: RepeatingTaskResult) -> RepeatingTaskState:
    """Return the task state to persist after a completion.

    A terminated series keeps the task completed and drops its repeating
    configuration. Otherwise the task reopens at the next due date with its
    reminder re-armed.
    """
    if result.should_terminate:
        return task.model_copy(
            update={
                "completed": True,
                "repeating": RepeatingCadence.NEVER,
                "repeating_data": None,
                "occurrence_count": result.new_occurrence_count,
            }
        )
    return task.model_copy(
        update={
            "completed": False,
            "due_date_time": result.next_due_date,
            "occurrence_count": result.new_occurrence_count,
            "reminder_sent": False,
        }
    )
