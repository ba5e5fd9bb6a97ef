"""Next-occurrence arithmetic for recurrence patterns."""

from __future__ import annotations

from datetime import datetime, timedelta

from dateutil.relativedelta import relativedelta

from chatdo.models.recurrence import RecurrencePattern, RecurrenceUnit


def pattern_step(pattern: RecurrencePattern):
    """Return the offset one step of the pattern adds (timedelta or relativedelta)."""
    unit = RecurrenceUnit(pattern.unit)
    n = int(pattern.interval)
    if unit == RecurrenceUnit.DAYS:
        return timedelta(days=n)
    if unit == RecurrenceUnit.WEEKS:
        return timedelta(weeks=n)
    if unit == RecurrenceUnit.MONTHS:
        return relativedelta(months=n)
    return relativedelta(years=n)


def calculate_next_due_date(pattern: RecurrencePattern, anchor: datetime) -> datetime:
    """Add one interval of the pattern's unit to `anchor`.

    Days and weeks are exact elapsed time. Months and years are calendar steps
    clamped to the last valid day: 2024-01-31 + 1 month = 2024-02-29, and
    2024-02-29 + 1 year = 2025-02-28.
    """
    return anchor + pattern_step(pattern)
