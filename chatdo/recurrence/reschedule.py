"""Move one occurrence of a recurring task, optionally dragging later ones along."""

from __future__ import annotations

import logging
from datetime import datetime

from chatdo.models.constants import DELAY_REASON_TEMPLATE
from chatdo.models.task import OccurrenceStatus, Task
from chatdo.recurrence.date_resolver import to_naive_utc

logger = logging.getLogger(__name__)


def reschedule_occurrence(
    task: Task,
    occurrence_id: str,
    new_date: datetime,
    propagate: bool = False,
) -> Task:
    """Return a copy of `task` with one occurrence moved to `new_date`.

    The moved occurrence becomes `delayed` with a reason citing its original date.
    With `propagate`, every later occurrence in the sequence shifts by the same
    delta and keeps its status. The sequence is not re-sorted, so a large backward
    move can leave later occurrences out of date order.

    The input task and its occurrence list are left untouched. An unknown
    `occurrence_id`, or a propagation that would push a date past the calendar
    range, returns the task as given. Offset-carrying dates are taken as UTC.
    """
    idx = task.find_occurrence_index(occurrence_id)
    if idx is None:
        logger.debug(f"Occurrence {occurrence_id} not found on task {task.id}; nothing to reschedule")
        return task

    new_date = to_naive_utc(new_date)
    target = task.occurrences[idx]
    original = target.scheduled_date
    delta = new_date - original

    occurrences = list(task.occurrences[:idx])
    occurrences.append(
        target.model_copy(
            update={
                "scheduled_date": new_date,
                "status": OccurrenceStatus.DELAYED.value,
                "delay_reason": DELAY_REASON_TEMPLATE.format(original=original),
            }
        )
    )
    try:
        for occ in task.occurrences[idx + 1:]:
            if propagate:
                occurrences.append(occ.model_copy(update={"scheduled_date": occ.scheduled_date + delta}))
            else:
                occurrences.append(occ.model_copy())
    except OverflowError:
        logger.info(f"Shifting occurrences of task {task.id} by {delta} leaves the calendar range; not rescheduled")
        return task

    logger.debug(
        f"Rescheduled occurrence {occurrence_id} of task {task.id} by {delta}"
        f" (propagate={propagate})"
    )
    return task.model_copy(update={"occurrences": occurrences})
