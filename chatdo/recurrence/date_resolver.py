"""Resolve relative due-date phrases into concrete dates.

The vocabulary is fixed and small ("tomorrow", "this weekend", "friday", ...).
Rules are checked in order against the whole trimmed phrase and the first match
wins, so a later rule never sees a phrase an earlier one accepted. Anything the
table does not know is tried as an ISO-8601 date.

Resolution is a pure function of (text, now): callers inject the reference time.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional, Tuple

from dateutil.parser import isoparse
from dateutil.relativedelta import relativedelta

from chatdo.models.constants import SPRING_START, SUMMER_START

logger = logging.getLogger(__name__)

# Python weekday(): Monday=0 .. Sunday=6
WEEKDAY_NAMES = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]
SATURDAY = 5

Resolver = Callable[[re.Match, datetime], datetime]


def _start_of_day(dt: datetime) -> datetime:
    return dt.replace(hour=0, minute=0, second=0, microsecond=0)


def _days_after(days: int) -> Resolver:
    return lambda m, today: today + timedelta(days=days)


def _this_weekend(m: re.Match, today: datetime) -> datetime:
    # Saturday itself counts as "this weekend" (0 days out).
    return today + timedelta(days=(SATURDAY - today.weekday()) % 7)


def _one_month_later(m: re.Match, today: datetime) -> datetime:
    # Also used for "in N months": N is matched but not applied.
    return today + relativedelta(months=1)


def _fixed_day_this_year(month: int, day: int) -> Resolver:
    # Anchored to the reference year even when the date has already passed.
    return lambda m, today: today.replace(month=month, day=day)


def _next_weekday(m: re.Match, today: datetime) -> datetime:
    target = WEEKDAY_NAMES.index(m.group(1).lower())
    days_until = (target - today.weekday()) % 7 or 7
    return today + timedelta(days=days_until)


RELATIVE_DATE_RULES: List[Tuple[re.Pattern, Resolver]] = [
    (re.compile(r"today", re.I), _days_after(0)),
    (re.compile(r"tomorrow", re.I), _days_after(1)),
    (re.compile(r"this week", re.I), _days_after(7)),
    (re.compile(r"next week", re.I), _days_after(14)),
    (re.compile(r"this weekend", re.I), _this_weekend),
    (re.compile(r"next month", re.I), _one_month_later),
    (re.compile(r"in (\d+) months?", re.I), _one_month_later),
    (re.compile(r"before summer", re.I), _fixed_day_this_year(*SUMMER_START)),
    (re.compile(r"by spring", re.I), _fixed_day_this_year(*SPRING_START)),
    (re.compile(r"(" + "|".join(WEEKDAY_NAMES) + r")", re.I), _next_weekday),
]


def to_naive_utc(dt: datetime) -> datetime:
    """Drop a datetime's offset, keeping the instant (as UTC). Naive values pass through."""
    if dt.tzinfo is None:
        return dt
    # Scheduling is zone-naive; keep the instant, drop the offset.
    try:
        return dt.astimezone(timezone.utc).replace(tzinfo=None)
    except OverflowError as e:
        raise ValueError(f"{dt.isoformat()} has no UTC equivalent in range") from e


def _parse_iso(text: str) -> Optional[datetime]:
    try:
        return to_naive_utc(isoparse(text))
    except (ValueError, OverflowError) as e:
        logger.debug(f"Not an ISO date: {text!r} ({e})")
        return None


def resolve_relative_date(text: Optional[str], now: datetime) -> Optional[datetime]:
    """Resolve a due-date phrase against a reference time.

    Args:
        text: Phrase such as "tomorrow", "this weekend", "friday", or an ISO date
        now: Reference time; relative phrases resolve from its calendar day

    Returns:
        The resolved datetime (midnight for relative phrases), or None when the
        phrase is not recognized. None means "no due date", never an error.
    """
    phrase = (text or "").strip()
    if not phrase:
        return None

    today = _start_of_day(now)
    for pattern, resolver in RELATIVE_DATE_RULES:
        m = pattern.fullmatch(phrase)
        if m:
            try:
                resolved = resolver(m, today)
            except (ValueError, OverflowError) as e:
                logger.info(f"Could not resolve {phrase!r} from {today.date()}: {e}")
                return None
            logger.debug(f"Resolved {phrase!r} via {pattern.pattern!r} -> {resolved.date()}")
            return resolved

    return _parse_iso(phrase)
