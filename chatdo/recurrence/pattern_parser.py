"""Deterministic parser for recurrence descriptions.

This module converts casual frequency text ("twice a year", "every 3 months")
into a RecurrencePattern. It must be deterministic: same input -> same output.
Phrases are searched anywhere in the text, in table order; the first hit wins.
"""

from __future__ import annotations

import logging
import re
from typing import Callable, List, Optional, Tuple

from pydantic import ValidationError

from chatdo.models.recurrence import RecurrenceFrequency, RecurrencePattern, RecurrenceUnit

logger = logging.getLogger(__name__)


def _fixed(frequency: RecurrenceFrequency, interval: int, unit: RecurrenceUnit) -> Callable[[re.Match], dict]:
    return lambda m: {"frequency": frequency, "interval": interval, "unit": unit}


def _every_n_months(m: re.Match) -> dict:
    return {
        "frequency": RecurrenceFrequency.MONTHLY,
        "interval": int(m.group(1)),
        "unit": RecurrenceUnit.MONTHS,
    }


RECURRENCE_RULES: List[Tuple[re.Pattern, Callable[[re.Match], dict]]] = [
    (re.compile(r"twice a year", re.I), _fixed(RecurrenceFrequency.CUSTOM, 6, RecurrenceUnit.MONTHS)),
    (re.compile(r"every (\d+) months?", re.I), _every_n_months),
    (re.compile(r"monthly|every month", re.I), _fixed(RecurrenceFrequency.MONTHLY, 1, RecurrenceUnit.MONTHS)),
    (re.compile(r"quarterly|every quarter", re.I), _fixed(RecurrenceFrequency.CUSTOM, 3, RecurrenceUnit.MONTHS)),
    (
        re.compile(r"annually|yearly|every year", re.I),
        _fixed(RecurrenceFrequency.YEARLY, 1, RecurrenceUnit.YEARS),
    ),
    (re.compile(r"weekly|every week", re.I), _fixed(RecurrenceFrequency.WEEKLY, 1, RecurrenceUnit.WEEKS)),
    (re.compile(r"daily|every day", re.I), _fixed(RecurrenceFrequency.DAILY, 1, RecurrenceUnit.DAYS)),
]


def parse_recurrence_pattern(text: Optional[str]) -> Optional[RecurrencePattern]:
    """Parse a frequency description into a RecurrencePattern.

    Supported phrases (checked in this order):
    - "twice a year" -> custom, every 6 months
    - "every N months" -> monthly, every N months
    - "monthly" / "every month" -> monthly, every month
    - "quarterly" / "every quarter" -> custom, every 3 months
    - "annually" / "yearly" / "every year" -> yearly, every year
    - "weekly" / "every week" -> weekly, every week
    - "daily" / "every day" -> daily, every day

    Returns None for unrecognized text, and for "every 0 months".
    """
    if not text:
        return None

    for pattern, build in RECURRENCE_RULES:
        m = pattern.search(text)
        if not m:
            continue
        try:
            return RecurrencePattern(**build(m))
        except ValidationError:
            logger.info(f"Recurrence phrase {m.group(0)!r} gives an invalid pattern; ignoring")
            return None

    logger.debug(f"No recurrence phrase recognized in {text!r}")
    return None
