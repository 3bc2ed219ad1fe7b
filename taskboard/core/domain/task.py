"""
Task Domain Models

Task records come from the backend's /tasks endpoints. The client only
enforces a non-empty title; everything else is the backend's business.

Wire format (backend JSON):
    {"taskId": 1, "taskTitle": "...", "taskDesc": "...",
     "taskStatus": "TODO", "date": "2024-05-01T10:00:00.000Z"}
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from ..exceptions import ValidationError


class TaskStatus(str, Enum):
    """Task status as the backend spells it"""
    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"

    @classmethod
    def parse(cls, value: Optional[str]) -> "TaskStatus":
        """Unknown or missing status falls back to TODO, like the dashboard does"""
        try:
            return cls(value)
        except ValueError:
            return cls.TODO


def parse_due_date(value: Any) -> Optional[datetime]:
    """Parse the backend's ISO-8601 date; unparseable values become None"""
    if not value:
        return None
    if isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return None


def format_due_date(value: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision and a trailing Z"""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


@dataclass
class Task:
    """
    Task entity

    Attributes:
        id: Backend ID (None for a task not created yet)
        title: Required, stored trimmed
        description: Optional free text
        status: TODO / IN_PROGRESS / DONE
        due_date: Optional due date
    """
    title: str
    id: Optional[int] = None
    description: str = ""
    status: TaskStatus = TaskStatus.TODO
    due_date: Optional[datetime] = None

    def __post_init__(self):
        self.title = (self.title or "").strip()
        if not self.title:
            raise ValidationError("Task title is required")
        self.description = (self.description or "").strip()
        if not isinstance(self.status, TaskStatus):
            self.status = TaskStatus.parse(self.status)

    @staticmethod
    def from_api(data: Dict[str, Any]) -> "Task":
        """Convert backend JSON to a Task"""
        return Task(
            id=data.get("taskId"),
            title=data.get("taskTitle") or "",
            description=data.get("taskDesc") or "",
            status=TaskStatus.parse(data.get("taskStatus")),
            due_date=parse_due_date(data.get("date"))
        )

    def to_api(self) -> Dict[str, Any]:
        """
        Convert to the backend's request body

        A task without due date is sent with the current time, matching
        what the task form has always done.
        """
        due = self.due_date or datetime.now(timezone.utc)
        return {
            "taskTitle": self.title,
            "taskDesc": self.description,
            "taskStatus": self.status.value,
            "date": format_due_date(due)
        }
