"""Repeating state of a task, as read from and written back to storage."""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from taskrepeat.config import get_default_anchor_mode
from taskrepeat.models.repeating import AnchorMode, RepeatingCadence


class RepeatingTaskState(BaseModel):
    """The fields of a task that the completion handler reads and updates."""

    id: str = Field(..., description="Task identifier")
    repeating: RepeatingCadence = Field(RepeatingCadence.NEVER, description="Cadence or 'custom'")
    repeating_data: Optional[Dict[str, Any]] = Field(
        None,
        description="Stored JSON: the custom pattern, or an end condition attached to a simple cadence",
    )
    repeat_from: AnchorMode = Field(default_factory=get_default_anchor_mode)
    occurrence_count: int = Field(0, ge=0)
    due_date_time: Optional[datetime] = Field(None, description="Current due instant (UTC)")
    is_all_day: bool = False
    completed: bool = False
    reminder_sent: bool = False
