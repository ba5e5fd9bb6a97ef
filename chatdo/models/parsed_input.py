"""Loosely structured task record produced by the language-model layer.

Everything here is untrusted: the model may omit fields, invent priorities, or
use the nested `recurringPattern` shape. Validation stays lenient so a sloppy
record degrades into a plain task instead of being rejected.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from chatdo.models.task import TaskPriority


class ParsedTaskInput(BaseModel):
    """One task extracted from a user message."""

    content: str = Field(..., description="Task description")
    priority: TaskPriority = Field(TaskPriority.MEDIUM, description="Suggested priority")
    category: Optional[str] = Field(None, description="Suggested category")
    due_date: Optional[str] = Field(None, alias="dueDate", description="Relative phrase or ISO date string")
    is_recurring: bool = Field(False, alias="isRecurring")
    recurrence_description: Optional[str] = Field(
        None, alias="recurrenceDescription", description="Free-text frequency, e.g. 'twice a year'"
    )
    context: Optional[str] = None
    urgency: Optional[str] = None

    class Config:
        """Pydantic configuration."""
        populate_by_name = True
        use_enum_values = True
        extra = "ignore"

    @field_validator("priority", mode="before")
    @classmethod
    def _coerce_priority(cls, v: Any):
        if isinstance(v, TaskPriority):
            return v
        try:
            return TaskPriority(str(v or "").strip().lower())
        except ValueError:
            return TaskPriority.MEDIUM

    @field_validator("content", mode="before")
    @classmethod
    def _coerce_content(cls, v: Any):
        return "" if v is None else str(v).strip()

    @field_validator("due_date", "recurrence_description", "category", mode="before")
    @classmethod
    def _blank_to_none(cls, v: Any):
        if v is None:
            return None
        v = str(v).strip()
        return v or None

    @field_validator("is_recurring", mode="before")
    @classmethod
    def _coerce_is_recurring(cls, v: Any):
        return bool(v) if v is not None else False

    @model_validator(mode="before")
    @classmethod
    def _flatten_recurring_pattern(cls, data: Any):
        """Accept `{"recurringPattern": {"description": "twice a year", ...}}`.

        The nested description fills `recurrence_description` when that is absent.
        """
        if not isinstance(data, dict):
            return data
        data = dict(data)
        nested = data.pop("recurringPattern", None) or data.pop("recurring_pattern", None)
        has_flat = data.get("recurrenceDescription") or data.get("recurrence_description")
        if isinstance(nested, dict) and not has_flat:
            data["recurrence_description"] = nested.get("description")
        return data
