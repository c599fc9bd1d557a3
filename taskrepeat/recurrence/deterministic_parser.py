"""Deterministic parser for repeating phrases in quick-add task text.

Turns "weekly Monday and Wednesday workout" into a title ("workout") plus a
repetition rule. It must be deterministic: same input -> same output (or same
structured error).
"""

from __future__ import annotations

from dataclasses import dataclass
import re
from typing import List, Optional

from taskrepeat.models.repeating import CustomRepeatingPattern, RepeatingCadence, RepeatingUnit, Weekday


class RepeatingParseError(ValueError):
    """Structured parse error that can be surfaced to the client."""

    def __init__(self, message: str, *, missing: Optional[list[str]] = None):
        super().__init__(message)
        self.missing = missing or []


@dataclass(frozen=True)
class ParsedRepeating:
    title: str
    repeating: Optional[RepeatingCadence]
    custom_pattern: Optional[CustomRepeatingPattern] = None


# Full names before abbreviations so alternation prefers the longest token.
_WEEKDAY_ALIASES: list[tuple[str, Weekday]] = [
    ("monday", Weekday.MONDAY),
    ("tuesday", Weekday.TUESDAY),
    ("wednesday", Weekday.WEDNESDAY),
    ("thursday", Weekday.THURSDAY),
    ("friday", Weekday.FRIDAY),
    ("saturday", Weekday.SATURDAY),
    ("sunday", Weekday.SUNDAY),
    ("mon", Weekday.MONDAY),
    ("tues", Weekday.TUESDAY),
    ("tue", Weekday.TUESDAY),
    ("weds", Weekday.WEDNESDAY),
    ("wed", Weekday.WEDNESDAY),
    ("thurs", Weekday.THURSDAY),
    ("thur", Weekday.THURSDAY),
    ("thu", Weekday.THURSDAY),
    ("fri", Weekday.FRIDAY),
    ("sat", Weekday.SATURDAY),
    ("sun", Weekday.SUNDAY),
]
_WEEKDAY_BY_ALIAS = dict(_WEEKDAY_ALIASES)
_DAY = "(?:" + "|".join(alias for alias, _ in _WEEKDAY_ALIASES) + ")"

_WEEKLY_WITH_DAYS_RE = re.compile(
    rf"\b(?:weekly|every\s+week)\s+({_DAY}(?:\s+and\s+{_DAY}|\s*,\s*{_DAY})*)\b",
    re.I,
)
_DAY_SEPARATOR_RE = re.compile(r"\s*,\s*|\s+and\s+", re.I)

_EVERY_N_RE = re.compile(r"\bevery\s+([1-9]\d*)\s+(days?|weeks?|months?|years?)\b", re.I)

_SIMPLE_KEYWORDS: list[tuple[re.Pattern, RepeatingCadence]] = [
    (re.compile(r"\b(?:daily|every\s+day)\b", re.I), RepeatingCadence.DAILY),
    (re.compile(r"\b(?:weekly|every\s+week)\b", re.I), RepeatingCadence.WEEKLY),
    (re.compile(r"\b(?:monthly|every\s+month)\b", re.I), RepeatingCadence.MONTHLY),
    (re.compile(r"\b(?:yearly|annually|every\s+year)\b", re.I), RepeatingCadence.YEARLY),
]

_UNIT_BY_PREFIX = {
    "day": RepeatingUnit.DAYS,
    "week": RepeatingUnit.WEEKS,
    "month": RepeatingUnit.MONTHS,
    "year": RepeatingUnit.YEARS,
}


def _remove_phrase(text: str, start: int, end: int) -> str:
    title = re.sub(r"\s+", " ", text[:start] + " " + text[end:]).strip()
    # A bare keyword stays as the title
    return title or text


def _extract_weekdays(days_text: str) -> List[Weekday]:
    """Map the matched day tokens to weekdays (deduped, first mention wins)."""
    out: List[Weekday] = []
    for token in _DAY_SEPARATOR_RE.split(days_text):
        day = _WEEKDAY_BY_ALIAS.get(token.strip().lower())
        if day is not None and day not in out:
            out.append(day)
    return out


def parse_repeating_phrase(text: str) -> ParsedRepeating:
    """Extract a repetition rule from task text.

    Supported patterns:
    - "weekly Monday exercise", "every week Mon, Wed and Fri gym" -> custom weekly on those days
    - "replace filters every 3 months" -> custom, interval 3
    - "daily exercise", "take vitamins every day" -> daily
    - "weekly report", "monthly budget review", "annually renew license" -> that cadence

    Keywords only match as whole words ("biweekly meeting" is not weekly).
    """
    raw = (text or "").strip()
    if not raw:
        raise RepeatingParseError("Task text is required", missing=["text"])

    m = _WEEKLY_WITH_DAYS_RE.search(raw)
    if m:
        weekdays = _extract_weekdays(m.group(1))
        if weekdays:
            pattern = CustomRepeatingPattern(unit=RepeatingUnit.WEEKS, interval=1, weekdays=weekdays)
            return ParsedRepeating(
                title=_remove_phrase(raw, m.start(), m.end()),
                repeating=RepeatingCadence.CUSTOM,
                custom_pattern=pattern,
            )

    m = _EVERY_N_RE.search(raw)
    if m:
        unit = _UNIT_BY_PREFIX[m.group(2).lower().rstrip("s")]
        pattern = CustomRepeatingPattern(unit=unit, interval=int(m.group(1)))
        return ParsedRepeating(
            title=_remove_phrase(raw, m.start(), m.end()),
            repeating=RepeatingCadence.CUSTOM,
            custom_pattern=pattern,
        )

    for pat, cadence in _SIMPLE_KEYWORDS:
        m = pat.search(raw)
        if m:
            return ParsedRepeating(title=_remove_phrase(raw, m.start(), m.end()), repeating=cadence)

    return ParsedRepeating(title=raw, repeating=None)
