"""Recurrence evaluation engine for taskrepeat."""

from taskrepeat.engine.termination import check_end_condition
from taskrepeat.engine.simple import compute_next_simple_occurrence, evaluate_simple_pattern
from taskrepeat.engine.custom import compute_next_custom_occurrence, next_custom_day

__all__ = [
    "check_end_condition",
    "compute_next_simple_occurrence",
    "evaluate_simple_pattern",
    "compute_next_custom_occurrence",
    "next_custom_day",
]
