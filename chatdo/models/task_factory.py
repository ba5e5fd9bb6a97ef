"""Task creation factory for chatdo.

This module centralizes task creation so every task, whether built from a parsed
chat record or directly, gets consistent defaults and a consistent schedule.
"""

import logging
import uuid
from datetime import datetime
from typing import Optional, Dict, Any

from chatdo.models.constants import DEFAULT_OCCURRENCE_COUNT
from chatdo.models.parsed_input import ParsedTaskInput
from chatdo.models.task import Task, TaskStatus, TaskPriority
from chatdo.recurrence.calculator import calculate_next_due_date
from chatdo.recurrence.date_resolver import resolve_relative_date
from chatdo.recurrence.instances import generate_occurrences
from chatdo.recurrence.pattern_parser import parse_recurrence_pattern

logger = logging.getLogger(__name__)


def create_task_defaults() -> Dict[str, Any]:
    """Get default task values as a dictionary.

    Returns:
        Dictionary with default task field values
    """
    return {
        "priority": TaskPriority.MEDIUM,
        "status": TaskStatus.PENDING,
        "category": None,
        "due_date": None,
        "completed_at": None,
        "ai_suggestions": [],
        "is_recurring": False,
        "recurrence_pattern": None,
        "occurrences": [],
    }


def create_task_base(
    content: str,
    now: datetime,
    original_input: Optional[str] = None,
    priority: Optional[TaskPriority] = None,
    category: Optional[str] = None,
    due_date: Optional[datetime] = None,
    ai_suggestions: Optional[list] = None,
) -> Task:
    """Create a non-recurring task with defaults, allowing overrides.

    Args:
        content: Task display text (required)
        now: Creation time, recorded as created_at
        original_input: Provenance text (defaults to content)
        priority: Task priority (defaults to MEDIUM)
        category: Free-form category
        due_date: Concrete due date
        ai_suggestions: Assistant suggestions attached to the task

    Returns:
        Task object with defaults applied
    """
    defaults = create_task_defaults()

    return Task(
        id=str(uuid.uuid4()),
        content=content,
        original_input=original_input if original_input is not None else content,
        priority=priority if priority is not None else defaults["priority"],
        status=defaults["status"],
        category=category if category is not None else defaults["category"],
        due_date=due_date if due_date is not None else defaults["due_date"],
        created_at=now,
        completed_at=defaults["completed_at"],
        ai_suggestions=ai_suggestions if ai_suggestions is not None else defaults["ai_suggestions"],
        is_recurring=defaults["is_recurring"],
        recurrence_pattern=defaults["recurrence_pattern"],
        occurrences=defaults["occurrences"],
    )


def create_task_from_parsed(parsed: ParsedTaskInput, now: datetime) -> Task:
    """Turn a parsed chat record into a fully scheduled task.

    The due-date text is resolved against `now`; text that does not resolve leaves
    the task without a due date. When the record is recurring and its description
    parses, the task gets the pattern and a first batch of occurrences (anchored on
    the due date, or on `now` without one); the cached next due date is only set
    when there is a due date. A description that does not parse, or a schedule
    that runs past the last representable date, yields a plain non-recurring
    task. Nothing here raises.

    Args:
        parsed: Record from the language-model layer (not modified)
        now: Reference time for relative dates and created_at

    Returns:
        The new Task
    """
    due_date = None
    if parsed.due_date:
        due_date = resolve_relative_date(parsed.due_date, now)
        if due_date is None:
            logger.info(f"Could not resolve due date {parsed.due_date!r}; creating task without one")

    task = create_task_base(
        content=parsed.content,
        now=now,
        original_input=parsed.content,
        priority=parsed.priority,
        category=parsed.category,
        due_date=due_date,
    )

    if not (parsed.is_recurring and parsed.recurrence_description):
        return task

    pattern = parse_recurrence_pattern(parsed.recurrence_description)
    if pattern is None:
        logger.info(
            f"Unrecognized recurrence {parsed.recurrence_description!r}; creating non-recurring task"
        )
        return task

    try:
        if task.due_date is not None:
            pattern = pattern.model_copy(
                update={"next_due_date": calculate_next_due_date(pattern, task.due_date)}
            )
        recurring = task.model_copy(update={"is_recurring": True, "recurrence_pattern": pattern})
        occurrences = generate_occurrences(recurring, DEFAULT_OCCURRENCE_COUNT, now=now)
    except (ValueError, OverflowError) as e:
        # Schedule runs past the last representable date
        logger.info(f"Could not schedule recurrence {parsed.recurrence_description!r}: {e}; creating non-recurring task")
        return task

    return recurring.model_copy(update={"occurrences": occurrences})
