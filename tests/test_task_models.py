# tests/test_task_models.py

from __future__ import annotations

import pytest

from task_tracker.errors import DeserializationError, ValidationError
from task_tracker.tasks.task_models import Task, TaskStatus, task_from_record, task_to_record


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("TODO", TaskStatus.TODO),
        ("todo", TaskStatus.TODO),
        (" done ", TaskStatus.DONE),
        ("in_progress", TaskStatus.IN_PROGRESS),
        ("in-progress", TaskStatus.IN_PROGRESS),
        ("In Progress", TaskStatus.IN_PROGRESS),
        (TaskStatus.DONE, TaskStatus.DONE),
    ],
)
def test_status_parse_accepts_user_spellings(raw, expected) -> None:
    assert TaskStatus.parse(raw) is expected


@pytest.mark.parametrize("raw", ["", "ALL", "blocked", "finished"])
def test_status_parse_rejects_unknown(raw: str) -> None:
    with pytest.raises(ValidationError):
        TaskStatus.parse(raw)


def test_validation_error_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        TaskStatus.parse("nope")


def test_record_uses_documented_field_names() -> None:
    task = Task(
        id=3,
        name="n",
        description="d",
        status=TaskStatus.IN_PROGRESS,
        created_at="2026-10-18T09:30:00+02:00",
        updated_at="2026-10-18T10:00:00+02:00",
    )

    record = task_to_record(task)

    assert record == {
        "task_id": 3,
        "task_name": "n",
        "task_description": "d",
        "task_status": "IN_PROGRESS",
        "task_created_at": "2026-10-18T09:30:00+02:00",
        "task_updated_at": "2026-10-18T10:00:00+02:00",
    }
    assert task_from_record("3", record) == task


def test_record_rejects_boolean_id() -> None:
    record = {
        "task_id": True,
        "task_name": "n",
        "task_description": "",
        "task_status": "TODO",
        "task_created_at": "",
    }
    with pytest.raises(DeserializationError):
        task_from_record("1", record)


def test_record_rejects_non_string_updated_at() -> None:
    record = {
        "task_id": 1,
        "task_name": "n",
        "task_description": "",
        "task_status": "TODO",
        "task_created_at": "",
        "task_updated_at": 12345,
    }
    with pytest.raises(DeserializationError, match="task_updated_at"):
        task_from_record("1", record)


def test_matches_checks_name_and_description() -> None:
    task = Task(id=1, name="Buy Milk", description="At the Corner shop", status=TaskStatus.TODO, created_at="")

    assert task.matches("milk")
    assert task.matches("corner")
    assert task.matches("")
    assert not task.matches("bread")
