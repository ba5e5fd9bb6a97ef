"""Pytest fixtures and configuration for chatdo tests."""

import pytest
from datetime import datetime
from fastapi.testclient import TestClient
import uuid

from chatdo.models.recurrence import RecurrencePattern, RecurrenceFrequency, RecurrenceUnit
from chatdo.models.task import Task, TaskStatus, TaskPriority
from chatdo.recurrence.instances import generate_occurrences


# Wednesday
REFERENCE_NOW = datetime(2024, 5, 15, 14, 30, 0)


@pytest.fixture
def now():
    """Fixed reference clock (a Wednesday afternoon)."""
    return REFERENCE_NOW


@pytest.fixture
def sample_task_base(now):
    """Base task data for creating test tasks.

    Returns a dict with default task attributes that can be overridden.
    """
    return {
        "id": str(uuid.uuid4()),
        "content": "Test Task",
        "original_input": "Test Task",
        "priority": TaskPriority.MEDIUM,
        "status": TaskStatus.PENDING,
        "category": None,
        "due_date": None,
        "created_at": now,
        "completed_at": None,
        "ai_suggestions": [],
        "is_recurring": False,
        "recurrence_pattern": None,
        "occurrences": [],
    }


@pytest.fixture
def sample_task(sample_task_base):
    """Create a sample non-recurring Task for testing."""
    return Task(**sample_task_base)


@pytest.fixture
def semiannual_pattern():
    """Pattern produced by 'twice a year'."""
    return RecurrencePattern(frequency=RecurrenceFrequency.CUSTOM, interval=6, unit=RecurrenceUnit.MONTHS)


@pytest.fixture
def monthly_pattern():
    """Pattern produced by 'monthly'."""
    return RecurrencePattern(frequency=RecurrenceFrequency.MONTHLY, interval=1, unit=RecurrenceUnit.MONTHS)


@pytest.fixture
def recurring_task(sample_task_base, semiannual_pattern):
    """Recurring task due 2024-01-01, repeating every 6 months, without occurrences."""
    return Task(**{
        **sample_task_base,
        "content": "Visit the dentist",
        "due_date": datetime(2024, 1, 1),
        "is_recurring": True,
        "recurrence_pattern": semiannual_pattern,
    })


@pytest.fixture
def monthly_task_with_occurrences(sample_task_base, monthly_pattern):
    """Monthly task due 2024-01-01 with five occurrences: Feb 1 .. Jun 1 2024."""
    task = Task(**{
        **sample_task_base,
        "content": "Pay rent",
        "due_date": datetime(2024, 1, 1),
        "is_recurring": True,
        "recurrence_pattern": monthly_pattern,
    })
    return task.model_copy(update={"occurrences": generate_occurrences(task, 5)})


@pytest.fixture
def test_client():
    """Create a FastAPI test client."""
    from chatdo.api.app import app

    with TestClient(app) as client:
        yield client

    # Clean up dependency overrides
    app.dependency_overrides.clear()
