"""Pytest fixtures and configuration for taskrepeat tests."""

import pytest
from datetime import datetime, timezone
import uuid

from taskrepeat.models.repeating import AnchorMode, RepeatingCadence


@pytest.fixture(autouse=True)
def clear_default_repeat_from(monkeypatch):
    """Keep a developer's .env from changing the default anchor mode under test."""
    monkeypatch.delenv("TASKREPEAT_DEFAULT_REPEAT_FROM", raising=False)


@pytest.fixture
def sample_task_base():
    """Base repeating task data for creating test task states.

    Returns a dict with default attributes that can be overridden.
    """
    return {
        "id": str(uuid.uuid4()),
        "repeating": RepeatingCadence.DAILY,
        "repeating_data": None,
        "repeat_from": AnchorMode.COMPLETION_DATE,
        "occurrence_count": 0,
        "due_date_time": datetime(2025, 11, 1, 14, 30, tzinfo=timezone.utc),
        "is_all_day": False,
        "completed": False,
        "reminder_sent": True,
    }
