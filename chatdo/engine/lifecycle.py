"""Status transitions for tasks and their occurrences.

Every function returns a new Task and leaves its argument untouched. Occurrences
are never removed here; a cancelled occurrence stays in the sequence.
"""

import logging
from datetime import datetime
from typing import Any, Dict

from chatdo.models.task import OccurrenceStatus, Task, TaskStatus

logger = logging.getLogger(__name__)


def complete_task(task: Task, now: datetime) -> Task:
    """Mark a task completed at `now`."""
    return task.model_copy(update={"status": TaskStatus.COMPLETED.value, "completed_at": now})


def toggle_task_completion(task: Task, now: datetime) -> Task:
    """Flip a task between completed and pending.

    Reopening clears completed_at.
    """
    if task.status == TaskStatus.COMPLETED:
        return task.model_copy(update={"status": TaskStatus.PENDING.value, "completed_at": None})
    return complete_task(task, now)


def cancel_task(task: Task) -> Task:
    """Mark a task cancelled."""
    return task.model_copy(update={"status": TaskStatus.CANCELLED.value})


def _update_occurrence(task: Task, occurrence_id: str, changes: Dict[str, Any]) -> Task:
    idx = task.find_occurrence_index(occurrence_id)
    if idx is None:
        logger.debug(f"Occurrence {occurrence_id} not found on task {task.id}")
        return task
    occurrences = list(task.occurrences)
    occurrences[idx] = occurrences[idx].model_copy(update=changes)
    return task.model_copy(update={"occurrences": occurrences})


def complete_occurrence(task: Task, occurrence_id: str, now: datetime) -> Task:
    """Mark one occurrence completed at `now`. Unknown ids return the task as given."""
    return _update_occurrence(
        task,
        occurrence_id,
        {"status": OccurrenceStatus.COMPLETED.value, "actual_completed_date": now},
    )


def cancel_occurrence(task: Task, occurrence_id: str) -> Task:
    """Mark one occurrence cancelled. Unknown ids return the task as given."""
    return _update_occurrence(task, occurrence_id, {"status": OccurrenceStatus.CANCELLED.value})
