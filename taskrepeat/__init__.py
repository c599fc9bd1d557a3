"""taskrepeat: next due date and series termination for repeating tasks."""

from taskrepeat.models import (
    AnchorMode,
    CustomRepeatingPattern,
    EndAfterOccurrences,
    EndUntilDate,
    EvaluationResult,
    NeverEnd,
    RepeatingCadence,
    RepeatingUnit,
    Weekday,
)
from taskrepeat.engine import (
    check_end_condition,
    compute_next_custom_occurrence,
    compute_next_simple_occurrence,
    evaluate_simple_pattern,
)

__all__ = [
    "AnchorMode",
    "CustomRepeatingPattern",
    "EndAfterOccurrences",
    "EndUntilDate",
    "EvaluationResult",
    "NeverEnd",
    "RepeatingCadence",
    "RepeatingUnit",
    "Weekday",
    "check_end_condition",
    "compute_next_custom_occurrence",
    "compute_next_simple_occurrence",
    "evaluate_simple_pattern",
]
