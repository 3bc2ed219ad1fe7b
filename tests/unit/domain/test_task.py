"""
Unit tests for Task Domain Models
"""
import pytest
from datetime import datetime, timezone

from taskboard.core.domain.task import (
    Task,
    TaskStatus,
    parse_due_date,
    format_due_date
)
from taskboard.core.exceptions import ValidationError


class TestTaskStatus:
    """Test TaskStatus enum"""

    def test_parse_known(self):
        assert TaskStatus.parse("DONE") == TaskStatus.DONE

    def test_parse_unknown_falls_back_to_todo(self):
        assert TaskStatus.parse("ARCHIVED") == TaskStatus.TODO
        assert TaskStatus.parse(None) == TaskStatus.TODO


class TestTask:
    """Test Task entity"""

    def test_title_required(self):
        with pytest.raises(ValidationError, match="Task title is required"):
            Task(title="   ")

    def test_title_and_description_trimmed(self):
        task = Task(title="  Buy milk  ", description="  2 litres ")
        assert task.title == "Buy milk"
        assert task.description == "2 litres"

    def test_string_status_coerced(self):
        task = Task(title="x", status="IN_PROGRESS")
        assert task.status == TaskStatus.IN_PROGRESS

    def test_from_api(self):
        task = Task.from_api({
            "taskId": 7,
            "taskTitle": "Write report",
            "taskDesc": "Q3 numbers",
            "taskStatus": "DONE",
            "date": "2024-05-01T10:00:00.000Z"
        })
        assert task.id == 7
        assert task.title == "Write report"
        assert task.description == "Q3 numbers"
        assert task.status == TaskStatus.DONE
        assert task.due_date == datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc)

    def test_from_api_missing_optional_fields(self):
        task = Task.from_api({"taskId": 1, "taskTitle": "Only title"})
        assert task.description == ""
        assert task.status == TaskStatus.TODO
        assert task.due_date is None

    def test_to_api(self):
        task = Task(
            title="Write report",
            description="Q3",
            status=TaskStatus.IN_PROGRESS,
            due_date=datetime(2024, 5, 1, 10, 30, tzinfo=timezone.utc)
        )
        assert task.to_api() == {
            "taskTitle": "Write report",
            "taskDesc": "Q3",
            "taskStatus": "IN_PROGRESS",
            "date": "2024-05-01T10:30:00.000Z"
        }

    def test_to_api_without_due_date_uses_now(self):
        before = datetime.now(timezone.utc).replace(microsecond=0)
        body = Task(title="x").to_api()
        sent = parse_due_date(body["date"])
        assert sent >= before


class TestDueDateHelpers:
    """Test date parse / format"""

    def test_parse_invalid_returns_none(self):
        assert parse_due_date("not a date") is None
        assert parse_due_date("") is None

    def test_format_naive_treated_as_utc(self):
        assert format_due_date(datetime(2024, 1, 2, 3, 4, 5, 678000)) == "2024-01-02T03:04:05.678Z"
