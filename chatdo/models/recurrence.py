"""Recurrence models for chatdo.

Canonical internal representation for repeating tasks. Users describe repeats in
casual phrases ("twice a year"); the pattern below is what the engine steps by.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class RecurrenceFrequency(str, Enum):
    """Coarse label for a pattern. Not used for date math (see RecurrenceUnit)."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"
    CUSTOM = "custom"


class RecurrenceUnit(str, Enum):
    DAYS = "days"
    WEEKS = "weeks"
    MONTHS = "months"
    YEARS = "years"


class RecurrencePattern(BaseModel):
    """Normalized recurrence rule.

    Notes:
    - `interval` counts `unit`s between occurrences; `frequency` is informational.
    - `next_due_date` is a cached value derived from the owning task's due date.
    - `end_date` / `max_occurrences` bound occurrence generation when set.
    """

    frequency: RecurrenceFrequency
    interval: int = Field(1, ge=1, description="Every N units (days/weeks/months/years)")
    unit: RecurrenceUnit

    next_due_date: Optional[datetime] = None

    # Range
    end_date: Optional[datetime] = None
    max_occurrences: Optional[int] = Field(None, ge=1, description="Cap on generated occurrences")

    class Config:
        use_enum_values = True
