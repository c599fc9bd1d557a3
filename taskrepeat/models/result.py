"""Evaluation result models for taskrepeat."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class EvaluationResult(BaseModel):
    """Outcome of evaluating one completion of a repeating task.

    `new_occurrence_count` always includes the completion being evaluated, even
    when that completion ends the series.
    """

    model_config = ConfigDict(frozen=True)

    should_terminate: bool
    next_due_date: Optional[datetime] = Field(None, description="Next due instant (UTC), null when terminated")
    new_occurrence_count: int = Field(..., ge=1)

    @model_validator(mode="after")
    def _terminate_iff_no_next_date(self):
        if self.should_terminate != (self.next_due_date is None):
            raise ValueError("should_terminate must be true exactly when next_due_date is null")
        return self


class RepeatingTaskResult(EvaluationResult):
    """Evaluation result as handed back to the storage layer."""

    should_roll_forward: bool

    @classmethod
    def from_evaluation(cls, result: EvaluationResult) -> "RepeatingTaskResult":
        return cls(
            should_roll_forward=not result.should_terminate,
            should_terminate=result.should_terminate,
            next_due_date=result.next_due_date,
            new_occurrence_count=result.new_occurrence_count,
        )
