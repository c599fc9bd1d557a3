"""Conversion between stored `repeatingData` JSON and repetition models.

Stored data uses the flat camelCase shape:

    {"type": "custom", "unit": "weeks", "interval": 1, "weekdays": ["monday"],
     "endCondition": "until_date", "endUntilDate": "2025-12-01T00:00:00.000Z"}

Simple cadences may store only the end-condition keys.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime
from typing import Any, Optional

from pydantic import TypeAdapter, ValidationError

from taskrepeat.engine.calendar_math import to_utc
from taskrepeat.models.repeating import (
    CustomRepeatingPattern,
    EndAfterOccurrences,
    EndCondition,
    EndUntilDate,
    RepeatingPatternError,
    fold_end_fields,
)

logger = logging.getLogger(__name__)

_END_CONDITION_ADAPTER: TypeAdapter = TypeAdapter(EndCondition)


def _iso(value: datetime) -> str:
    return to_utc(value).isoformat().replace("+00:00", "Z")


def parse_custom_pattern(data: Mapping[str, Any]) -> CustomRepeatingPattern:
    """Validate stored custom pattern data.

    Raises:
        RepeatingPatternError: If the data is not a valid custom pattern
    """
    if not isinstance(data, Mapping):
        raise RepeatingPatternError(f"Custom repeating data must be an object, got {type(data).__name__}")
    try:
        return CustomRepeatingPattern.model_validate(dict(data))
    except ValidationError as e:
        logger.error(f"Invalid custom repeating data: {type(e).__name__}: {str(e)}")
        raise RepeatingPatternError(f"Invalid custom repeating pattern: {e}") from e


def parse_end_condition(data: Optional[Mapping[str, Any]]) -> Optional[EndCondition]:
    """Extract the end condition attached to a simple cadence.

    Returns None when there is no data or it declares no `endCondition`.

    Raises:
        RepeatingPatternError: If an end condition is declared but incomplete or unknown
    """
    if not data:
        return None
    if not isinstance(data, Mapping):
        raise RepeatingPatternError(f"Repeating data must be an object, got {type(data).__name__}")
    try:
        end = fold_end_fields(dict(data)).get("end")
        if end is None:
            return None
        return _END_CONDITION_ADAPTER.validate_python(end)
    except (ValidationError, ValueError) as e:
        logger.error(f"Invalid end condition data: {type(e).__name__}: {str(e)}")
        raise RepeatingPatternError(f"Invalid end condition: {e}") from e


def dump_end_condition(end: EndCondition) -> dict[str, Any]:
    """Flat camelCase form of an end condition."""
    out: dict[str, Any] = {"endCondition": end.end_condition}
    if isinstance(end, EndAfterOccurrences):
        out["endAfterOccurrences"] = end.end_after_occurrences
    elif isinstance(end, EndUntilDate):
        out["endUntilDate"] = _iso(end.end_until_date)
    return out


def dump_custom_pattern(pattern: CustomRepeatingPattern) -> dict[str, Any]:
    """Flat camelCase form of a custom pattern, as stored in `repeatingData`."""
    out: dict[str, Any] = {
        "type": pattern.type,
        "unit": pattern.unit.value,
        "interval": pattern.interval,
    }
    if pattern.weekdays is not None:
        out["weekdays"] = [day.value for day in pattern.weekdays]
    if pattern.month_weekday is not None:
        out["monthWeekday"] = {
            "weekday": pattern.month_weekday.weekday.value,
            "weekOfMonth": pattern.month_weekday.week_of_month,
        }
    out.update(dump_end_condition(pattern.end))
    return out
