# src/task_tracker/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from ..errors import DeserializationError, ValidationError

# Pseudo-filter accepted by list operations (not a real status).
ALL = "ALL"


class TaskStatus(StrEnum):
    """
    Task lifecycle status.

    No guarded state machine: any status can be set from any other.
    """

    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"

    @classmethod
    def parse(cls, raw: str | TaskStatus) -> TaskStatus:
        """
        Accept user spellings: "done", "in-progress", "In Progress", ...

        Raises ValidationError for anything outside the fixed set.
        """
        if isinstance(raw, cls):
            return raw
        key = str(raw or "").strip().upper().replace("-", "_").replace(" ", "_")
        try:
            return cls(key)
        except ValueError:
            allowed = ", ".join(s.value for s in cls)
            raise ValidationError(f"invalid task status {raw!r} (expected one of: {allowed})") from None


@dataclass(slots=True)
class Task:
    id: int
    name: str
    description: str
    status: TaskStatus
    created_at: str
    # Empty until the first update or status change.
    updated_at: str = ""

    def matches(self, query: str) -> bool:
        q = query.lower()
        return q in self.name.lower() or q in self.description.lower()


# ---- JSON record codec ----

_FIELDS = (
    "task_id",
    "task_name",
    "task_description",
    "task_status",
    "task_created_at",
)


def task_to_record(task: Task) -> dict[str, Any]:
    return {
        "task_id": task.id,
        "task_name": task.name,
        "task_description": task.description,
        "task_status": task.status.value,
        "task_created_at": task.created_at,
        "task_updated_at": task.updated_at,
    }


def task_from_record(key: str, record: Any) -> Task:
    """Decode one persisted record; `key` is the mapping key it was stored under."""
    if not isinstance(record, dict):
        raise DeserializationError(f"task {key!r}: expected an object, got {type(record).__name__}")

    missing = [f for f in _FIELDS if f not in record]
    if missing:
        raise DeserializationError(f"task {key!r}: missing fields {', '.join(missing)}")

    task_id = record["task_id"]
    # bool is an int subclass; reject it explicitly.
    if not isinstance(task_id, int) or isinstance(task_id, bool) or task_id <= 0:
        raise DeserializationError(f"task {key!r}: task_id must be a positive integer")
    if str(task_id) != key:
        raise DeserializationError(f"task {key!r}: key does not match task_id {task_id}")

    for f in ("task_name", "task_description", "task_status", "task_created_at"):
        if not isinstance(record[f], str):
            raise DeserializationError(f"task {key!r}: {f} must be a string")

    updated_at = record.get("task_updated_at") or ""
    if not isinstance(updated_at, str):
        raise DeserializationError(f"task {key!r}: task_updated_at must be a string")

    try:
        status = TaskStatus(record["task_status"])
    except ValueError:
        raise DeserializationError(
            f"task {key!r}: unknown status {record['task_status']!r}"
        ) from None

    return Task(
        id=task_id,
        name=record["task_name"],
        description=record["task_description"],
        status=status,
        created_at=record["task_created_at"],
        updated_at=updated_at,
    )
