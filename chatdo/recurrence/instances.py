"""Materialize a recurring task into a finite batch of concrete occurrences."""

from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import List, Optional

from chatdo.models.constants import DEFAULT_OCCURRENCE_COUNT
from chatdo.models.task import Occurrence, OccurrenceStatus, Task
from chatdo.recurrence.calculator import calculate_next_due_date

logger = logging.getLogger(__name__)


def _anchor_for(task: Task, now: Optional[datetime]) -> datetime:
    if task.due_date is not None:
        return task.due_date
    if now is not None:
        return now
    return task.created_at


def generate_occurrences(
    task: Task,
    count: int = DEFAULT_OCCURRENCE_COUNT,
    *,
    now: Optional[datetime] = None,
) -> List[Occurrence]:
    """Build the next `count` occurrences of a recurring task.

    Starting from the task's due date (or `now`, or the task's creation time when
    neither is given), the pattern is applied repeatedly; each occurrence anchors on
    the previous one. The batch is one-shot: call again with a later anchor to
    extend it.

    Args:
        task: Task to expand; non-recurring tasks yield an empty list
        count: Number of occurrences to produce
        now: Reference time used when the task has no due date

    Returns:
        Occurrences in strictly increasing date order, all `scheduled`. Fewer than
        `count` are returned only when the pattern sets max_occurrences or end_date,
        or when the next step would pass the last representable date.
    """
    pattern = task.recurrence_pattern
    if not task.is_recurring or pattern is None:
        return []

    if pattern.max_occurrences is not None:
        count = min(count, pattern.max_occurrences)

    occurrences: List[Occurrence] = []
    current = _anchor_for(task, now)
    for _ in range(max(count, 0)):
        try:
            current = calculate_next_due_date(pattern, current)
        except (ValueError, OverflowError):
            logger.info(f"Occurrences of task {task.id} stop at {current.date()}: calendar range exhausted")
            break
        if pattern.end_date is not None and current > pattern.end_date:
            break
        occurrences.append(
            Occurrence(
                id=str(uuid.uuid4()),
                parent_id=task.id,
                scheduled_date=current,
                status=OccurrenceStatus.SCHEDULED,
            )
        )
    return occurrences
