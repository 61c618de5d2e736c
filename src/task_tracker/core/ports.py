# src/task_tracker/core/ports.py

"""
Ports (interfaces) used by the CLI.

Command handlers depend on this Protocol instead of the concrete TaskStore,
so a store is passed in explicitly and tests can swap it.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol

from ..tasks.task_models import Task, TaskStatus


class TaskRepo(Protocol):
    def count_tasks(self) -> int: ...

    def get_task(self, task_id: int) -> Task | None: ...

    def add_task(self, name: str, description: str = "") -> int: ...

    def update_task(self, task_id: int, fields: Mapping[str, Any]) -> bool: ...

    def delete_task(self, task_id: int) -> bool: ...

    def mark_as(self, task_id: int, status: TaskStatus | str) -> bool: ...

    def list_all(self) -> list[Task]: ...

    def list_by_status(self, status: TaskStatus | str) -> list[Task]: ...

    def search_tasks(self, query: str) -> list[Task]: ...

    def clean_done_tasks(self) -> int: ...
