"""Data models for chatdo."""

from chatdo.models.recurrence import RecurrencePattern, RecurrenceFrequency, RecurrenceUnit
from chatdo.models.task import Task, TaskStatus, TaskPriority, Occurrence, OccurrenceStatus
from chatdo.models.parsed_input import ParsedTaskInput

__all__ = [
    "RecurrencePattern",
    "RecurrenceFrequency",
    "RecurrenceUnit",
    "Task",
    "TaskStatus",
    "TaskPriority",
    "Occurrence",
    "OccurrenceStatus",
    "ParsedTaskInput",
]
