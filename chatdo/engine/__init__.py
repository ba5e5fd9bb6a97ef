"""Task lifecycle engine for chatdo."""

from chatdo.engine.lifecycle import (
    complete_task,
    toggle_task_completion,
    cancel_task,
    complete_occurrence,
    cancel_occurrence,
)

__all__ = [
    "complete_task",
    "toggle_task_completion",
    "cancel_task",
    "complete_occurrence",
    "cancel_occurrence",
]
