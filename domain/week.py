"""
Week window helpers.

Weeks start on Monday. A week is identified by its Monday date, which is the
natural key of a user's meal plan.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import List, Optional, Union

from app.exceptions import ServiceValidationError
from domain.enums import DAYS_PER_WEEK

DateLike = Union[date, datetime, str]


def to_date(value: DateLike) -> date:
    """Coerce a date, datetime or ISO string into a ``date``.

    Strings must be a whole ISO date (``YYYY-MM-DD``) or ISO datetime; the
    time-of-day component of a datetime is dropped.

    Raises:
        ServiceValidationError: if the value is not a recognisable date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            if len(text) == 10:
                return date.fromisoformat(text)
            if text.endswith(("Z", "z")):
                text = text[:-1] + "+00:00"
            return datetime.fromisoformat(text).date()
        except ValueError:
            pass
    raise ServiceValidationError(
        f"Malformed date: {value!r}", code="INVALID_DATE", details={"value": str(value)}
    )


def start_of_week(value: DateLike) -> date:
    """Return the Monday beginning the week that contains ``value``.

    Normalizing an already-Monday date returns it unchanged.
    """
    d = to_date(value)
    return d - timedelta(days=d.weekday() % DAYS_PER_WEEK)


def shift_week(week_start: DateLike, weeks: int) -> date:
    """Move ``weeks`` weeks forward (or back when negative) and re-normalize."""
    return start_of_week(to_date(week_start) + timedelta(days=DAYS_PER_WEEK * weeks))


def week_days(week_start: DateLike) -> List[date]:
    """The seven dates of the week, Monday first."""
    monday = start_of_week(week_start)
    return [monday + timedelta(days=i) for i in range(DAYS_PER_WEEK)]


def week_end(week_start: DateLike) -> date:
    return start_of_week(week_start) + timedelta(days=DAYS_PER_WEEK - 1)


def resolve_week(anchor: Optional[DateLike] = None, offset: int = 0) -> date:
    """Normalize ``anchor`` (default: today) and step ``offset`` weeks from it."""
    monday = start_of_week(anchor if anchor is not None else date.today())
    return shift_week(monday, offset) if offset else monday
