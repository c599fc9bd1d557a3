"""Repetition rule models for taskrepeat.

A task repeats either on one of the four built-in cadences or on a custom
`{unit, interval, weekdays?}` rule. Both may carry an end condition, which is
modelled as a tagged union so the field required by each policy is present by
construction.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class RepeatingPatternError(ValueError):
    """Stored repeating data does not describe a valid pattern."""


class RepeatingCadence(str, Enum):
    """Value of a task's `repeating` field."""

    NEVER = "never"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"
    CUSTOM = "custom"


SIMPLE_CADENCES = (
    RepeatingCadence.DAILY,
    RepeatingCadence.WEEKLY,
    RepeatingCadence.MONTHLY,
    RepeatingCadence.YEARLY,
)


class RepeatingUnit(str, Enum):
    DAYS = "days"
    WEEKS = "weeks"
    MONTHS = "months"
    YEARS = "years"


class Weekday(str, Enum):
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"

    @property
    def number(self) -> int:
        """Python weekday number (Monday=0 ... Sunday=6)."""
        return WEEKDAYS_IN_ORDER.index(self)

    @classmethod
    def from_number(cls, number: int) -> "Weekday":
        return WEEKDAYS_IN_ORDER[number]


WEEKDAYS_IN_ORDER: List[Weekday] = [
    Weekday.MONDAY,
    Weekday.TUESDAY,
    Weekday.WEDNESDAY,
    Weekday.THURSDAY,
    Weekday.FRIDAY,
    Weekday.SATURDAY,
    Weekday.SUNDAY,
]


class AnchorMode(str, Enum):
    """Which timestamp the next occurrence's date is stepped from."""

    DUE_DATE = "DUE_DATE"
    COMPLETION_DATE = "COMPLETION_DATE"


class RepeatEndCondition(str, Enum):
    NEVER = "never"
    AFTER_OCCURRENCES = "after_occurrences"
    UNTIL_DATE = "until_date"


class _StoredModel(BaseModel):
    """Frozen model that reads both snake_case and the stored camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class _EndModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class NeverEnd(_EndModel):
    end_condition: Literal["never"] = "never"


class EndAfterOccurrences(_EndModel):
    end_condition: Literal["after_occurrences"] = "after_occurrences"
    end_after_occurrences: int = Field(..., ge=1, description="Completions allowed before the series ends")


class EndUntilDate(_EndModel):
    end_condition: Literal["until_date"] = "until_date"
    end_until_date: datetime = Field(..., description="Last calendar day (UTC) an occurrence may fall on")


EndCondition = Annotated[
    Union[NeverEnd, EndAfterOccurrences, EndUntilDate],
    Field(discriminator="end_condition"),
]

_FLAT_END_KEYS = {
    "endCondition": "end_condition",
    "end_condition": "end_condition",
    "endAfterOccurrences": "end_after_occurrences",
    "end_after_occurrences": "end_after_occurrences",
    "endUntilDate": "end_until_date",
    "end_until_date": "end_until_date",
}


def fold_end_fields(data: dict) -> dict:
    """Move flat end-condition keys of a stored pattern into a nested `end` dict.

    Keys for a policy other than the declared `endCondition` are dropped, and so
    are all end keys when no `endCondition` is declared.

    Raises:
        ValueError: If both a nested `end` and flat end keys are present
    """
    data = dict(data)
    end: dict[str, Any] = {}
    for key, field_name in _FLAT_END_KEYS.items():
        if key in data:
            value = data.pop(key)
            if value is not None:
                end[field_name] = value
    if "end" in data and end:
        raise ValueError("end condition given both as nested 'end' and as flat endCondition fields")
    if "end" in data or "end_condition" not in end:
        return data
    kind = end.get("end_condition")
    if kind == RepeatEndCondition.AFTER_OCCURRENCES.value:
        end.pop("end_until_date", None)
    elif kind == RepeatEndCondition.UNTIL_DATE.value:
        end.pop("end_after_occurrences", None)
    elif kind == RepeatEndCondition.NEVER.value:
        end = {"end_condition": kind}
    data["end"] = end
    return data


class MonthWeekday(_StoredModel):
    """Nth weekday of the month (e.g. 3rd Monday) for month-based patterns."""

    weekday: Weekday
    week_of_month: int = Field(..., ge=1, le=5)


class CustomRepeatingPattern(_StoredModel):
    """Custom repetition rule.

    Notes:
    - `weekdays` only applies to `unit=weeks` and switches stepping from a flat
      N-week jump to "next matching weekday".
    - `month_weekday` only applies to `unit=months`.
    - `end` defaults to never ending.
    """

    type: Literal["custom"] = "custom"
    unit: RepeatingUnit
    interval: int = Field(1, ge=1, description="Every N units (days/weeks/months/years)")
    weekdays: Optional[List[Weekday]] = Field(
        None, description="For weekly patterns: weekdays on which the task occurs"
    )
    month_weekday: Optional[MonthWeekday] = None
    end: EndCondition = Field(default_factory=NeverEnd)

    @model_validator(mode="before")
    @classmethod
    def _fold_flat_end(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return fold_end_fields(data)
        return data

    @field_validator("weekdays")
    @classmethod
    def _validate_weekdays(cls, v):
        if v is None:
            return None
        if not v:
            raise ValueError("weekdays must not be empty; omit it for flat weekly stepping")
        # Calendar order, deduplicated
        present = set(v)
        return [day for day in WEEKDAYS_IN_ORDER if day in present]

    @model_validator(mode="after")
    def _validate_unit_specifics(self):
        if self.weekdays is not None and self.unit != RepeatingUnit.WEEKS:
            raise ValueError(f"weekdays is only valid for unit 'weeks', not '{self.unit.value}'")
        if self.month_weekday is not None and self.unit != RepeatingUnit.MONTHS:
            raise ValueError(f"month_weekday is only valid for unit 'months', not '{self.unit.value}'")
        return self
