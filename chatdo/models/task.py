"""Task data model for chatdo."""

from datetime import datetime
from typing import List, Optional
from enum import Enum
from pydantic import BaseModel, Field, model_validator

from chatdo.models.recurrence import RecurrencePattern


class TaskStatus(str, Enum):
    """Task status enumeration."""
    PENDING = "pending"
    COMPLETED = "completed"
    DELAYED = "delayed"
    CANCELLED = "cancelled"


class TaskPriority(str, Enum):
    """Task priority enumeration."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class OccurrenceStatus(str, Enum):
    """Occurrence status enumeration."""
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    DELAYED = "delayed"  # Moved off its computed date by a reschedule
    CANCELLED = "cancelled"


class Occurrence(BaseModel):
    """One materialized future instance of a recurring task."""

    id: str = Field(..., description="Unique occurrence identifier (UUID v4)")
    parent_id: str = Field(..., description="ID of the owning task")
    scheduled_date: datetime = Field(..., description="Date this occurrence is scheduled for")
    actual_completed_date: Optional[datetime] = Field(None, description="When the occurrence was completed")
    status: OccurrenceStatus = Field(OccurrenceStatus.SCHEDULED, description="Occurrence status")
    delay_reason: Optional[str] = Field(None, description="Why the occurrence was moved (set when delayed)")

    class Config:
        """Pydantic configuration."""
        use_enum_values = True


class Task(BaseModel):
    """Canonical Task model."""

    id: str = Field(..., description="Unique task identifier (UUID v4)")
    content: str = Field(..., description="Display text (editable)")
    original_input: str = Field(..., description="Text the task was created from (immutable provenance)")
    priority: TaskPriority = Field(TaskPriority.MEDIUM, description="Task priority")
    status: TaskStatus = Field(TaskStatus.PENDING, description="Task status")
    category: Optional[str] = Field(None, description="Free-form category suggested by the parser")
    due_date: Optional[datetime] = Field(None, description="Resolved due date")
    created_at: datetime = Field(..., description="Task creation timestamp")
    completed_at: Optional[datetime] = Field(None, description="Set when status transitions to completed")
    ai_suggestions: List[str] = Field(default_factory=list, description="Scheduling suggestions from the assistant")

    # Recurrence (optional)
    is_recurring: bool = Field(False, description="True iff recurrence_pattern is set")
    recurrence_pattern: Optional[RecurrencePattern] = Field(None, description="Normalized recurrence rule")
    occurrences: List[Occurrence] = Field(
        default_factory=list,
        description="Materialized future occurrences, ascending by scheduled_date at creation",
    )

    class Config:
        """Pydantic configuration."""
        use_enum_values = True

    @model_validator(mode="after")
    def _validate_recurrence(self):
        if self.is_recurring != (self.recurrence_pattern is not None):
            raise ValueError("is_recurring must be true exactly when recurrence_pattern is set")
        if self.occurrences and not self.is_recurring:
            raise ValueError("only recurring tasks can have occurrences")
        return self

    def find_occurrence_index(self, occurrence_id: str) -> Optional[int]:
        """Return the position of an occurrence in the sequence, or None."""
        for idx, occ in enumerate(self.occurrences):
            if occ.id == occurrence_id:
                return idx
        return None
