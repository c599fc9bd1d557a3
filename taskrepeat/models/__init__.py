"""Data models for taskrepeat."""

from taskrepeat.models.repeating import (
    AnchorMode,
    CustomRepeatingPattern,
    EndAfterOccurrences,
    EndCondition,
    EndUntilDate,
    MonthWeekday,
    NeverEnd,
    RepeatEndCondition,
    RepeatingCadence,
    RepeatingPatternError,
    RepeatingUnit,
    Weekday,
)
from taskrepeat.models.result import EvaluationResult, RepeatingTaskResult
from taskrepeat.models.task import RepeatingTaskState

__all__ = [
    "AnchorMode",
    "CustomRepeatingPattern",
    "EndAfterOccurrences",
    "EndCondition",
    "EndUntilDate",
    "MonthWeekday",
    "NeverEnd",
    "RepeatEndCondition",
    "RepeatingCadence",
    "RepeatingPatternError",
    "RepeatingUnit",
    "Weekday",
    "EvaluationResult",
    "RepeatingTaskResult",
    "RepeatingTaskState",
]
