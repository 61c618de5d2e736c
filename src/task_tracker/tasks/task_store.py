# src/task_tracker/tasks/task_store.py

from __future__ import annotations

import contextlib
import json
import logging
import os
from collections.abc import Callable, Mapping
from dataclasses import replace
from datetime import datetime
from pathlib import Path
from typing import Any

from ..errors import DeserializationError, PersistenceError, ValidationError
from .task_models import ALL, Task, TaskStatus, task_from_record, task_to_record

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def _local_now() -> datetime:
    return datetime.now().astimezone()


class TaskStore:
    """
    JSON-file task store.

    The whole task mapping lives in memory and every mutation rewrites the
    whole file (temp file + os.replace, so a failed write never truncates it).

    Contract for mutations:
    - validation happens before anything changes
    - if the write fails, the in-memory change is rolled back and
      PersistenceError is raised (memory always matches disk)
    - ids are never reused; next_id only grows

    Single-process, single-caller. The file is assumed to be owned by this
    store; a concurrent external writer is not detected (last write wins).
    """

    def __init__(self, path: str | Path = "tasks.json", *, clock: Clock | None = None) -> None:
        self._path = Path(path)
        self._clock: Clock = clock or _local_now
        self._tasks: dict[int, Task] = {}
        self._next_id = 1
        self._load()
        logger.info("TaskStore ready path=%s total=%s next_id=%s", self._path, self.count_tasks(), self._next_id)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def next_id(self) -> int:
        return self._next_id

    # ---- low-level helpers ----

    def _now(self) -> str:
        # RFC 3339; naive datetimes are taken as local time.
        now = self._clock()
        if now.tzinfo is None:
            now = now.astimezone()
        return now.isoformat(timespec="seconds")

    def _load(self) -> None:
        try:
            raw = self._path.read_text("utf-8")
        except FileNotFoundError:
            logger.debug("No tasks file at %s; starting empty.", self._path)
            return
        except UnicodeDecodeError as exc:
            raise DeserializationError(f"tasks file {self._path} is not valid UTF-8: {exc}") from exc
        except OSError as exc:
            raise PersistenceError(f"failed to read tasks file {self._path}: {exc}") from exc

        if not raw.strip():
            logger.debug("Tasks file %s is empty; starting empty.", self._path)
            return

        try:
            data = json.loads(raw)
        except (json.JSONDecodeError, RecursionError) as exc:
            # RecursionError: pathologically nested content.
            raise DeserializationError(f"tasks file {self._path} is not valid JSON: {exc}") from exc

        if not isinstance(data, dict):
            raise DeserializationError(
                f"tasks file {self._path}: expected an object keyed by task id, got {type(data).__name__}"
            )

        tasks: dict[int, Task] = {}
        for key, record in data.items():
            task = task_from_record(key, record)
            tasks[task.id] = task

        self._tasks = tasks
        # Any counter stored elsewhere is ignored: max id + 1 is authoritative.
        self._next_id = max(tasks, default=0) + 1

    def _save(self) -> None:
        data = {str(tid): task_to_record(self._tasks[tid]) for tid in sorted(self._tasks)}
        payload = json.dumps(data, ensure_ascii=False, indent=2) + "\n"

        tmp = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(payload, "utf-8")
            os.replace(tmp, self._path)
        except OSError as exc:
            with contextlib.suppress(OSError):
                tmp.unlink(missing_ok=True)
            logger.exception("Failed to write tasks file %s", self._path)
            raise PersistenceError(f"failed to write tasks file {self._path}: {exc}") from exc

    def _commit(self, undo: Callable[[], None]) -> None:
        """Persist; on failure run `undo` so memory matches the file again."""
        try:
            self._save()
        except PersistenceError:
            undo()
            raise

    @staticmethod
    def _require_name(name: Any) -> str:
        if not isinstance(name, str) or not name.strip():
            raise ValidationError("task name must not be empty")
        return name

    @staticmethod
    def _require_description(description: Any) -> str:
        if not isinstance(description, str):
            raise ValidationError("task description must be a string")
        return description

    def _sorted(self, tasks: list[Task]) -> list[Task]:
        # Copies: callers must not be able to mutate stored records.
        return [replace(t) for t in sorted(tasks, key=lambda t: t.id)]

    # ---- public API ----

    def count_tasks(self) -> int:
        return len(self._tasks)

    def get_task(self, task_id: int) -> Task | None:
        task = self._tasks.get(task_id)
        return replace(task) if task is not None else None

    def add_task(self, name: str, description: str = "") -> int:
        name = self._require_name(name)
        description = self._require_description(description)

        task_id = self._next_id
        self._next_id += 1
        self._tasks[task_id] = Task(
            id=task_id,
            name=name,
            description=description,
            status=TaskStatus.TODO,
            created_at=self._now(),
        )
        # The consumed id is not handed back on failure.
        self._commit(undo=lambda: self._tasks.pop(task_id, None))

        logger.debug("Task added id=%s name=%r", task_id, name)
        return task_id

    def update_task(self, task_id: int, fields: Mapping[str, Any]) -> bool:
        """
        Partial update. Recognized keys: "name", "description".

        A present key overwrites, an absent key is left alone, unknown keys
        are ignored. Returns False if the task does not exist.
        """
        task = self._tasks.get(task_id)
        if task is None:
            return False

        changes: dict[str, str] = {}
        if "name" in fields:
            changes["name"] = self._require_name(fields["name"])
        if "description" in fields:
            changes["description"] = self._require_description(fields["description"])
        if not changes:
            return True

        before = replace(task)
        for attr, value in changes.items():
            setattr(task, attr, value)
        task.updated_at = self._now()
        self._commit(undo=lambda: self._tasks.__setitem__(task_id, before))

        logger.debug("Task updated id=%s fields=%s", task_id, sorted(changes))
        return True

    def delete_task(self, task_id: int) -> bool:
        task = self._tasks.pop(task_id, None)
        if task is None:
            return False

        self._commit(undo=lambda: self._tasks.__setitem__(task_id, task))

        logger.debug("Task deleted id=%s", task_id)
        return True

    def mark_as(self, task_id: int, status: TaskStatus | str) -> bool:
        """Set the status of a task. Any status is reachable from any other."""
        new_status = TaskStatus.parse(status)

        task = self._tasks.get(task_id)
        if task is None:
            return False

        before = replace(task)
        task.status = new_status
        task.updated_at = self._now()
        self._commit(undo=lambda: self._tasks.__setitem__(task_id, before))

        logger.debug("Task status id=%s %s -> %s", task_id, before.status, new_status)
        return True

    def mark_as_done(self, task_id: int) -> bool:
        return self.mark_as(task_id, TaskStatus.DONE)

    def mark_as_in_progress(self, task_id: int) -> bool:
        return self.mark_as(task_id, TaskStatus.IN_PROGRESS)

    def mark_as_todo(self, task_id: int) -> bool:
        return self.mark_as(task_id, TaskStatus.TODO)

    def list_all(self) -> list[Task]:
        return self._sorted(list(self._tasks.values()))

    def list_by_status(self, status: TaskStatus | str) -> list[Task]:
        """Tasks with the given status, by ascending id. "ALL" lists everything."""
        if not isinstance(status, TaskStatus) and str(status).strip().upper() == ALL:
            return self.list_all()
        wanted = TaskStatus.parse(status)
        return self._sorted([t for t in self._tasks.values() if t.status == wanted])

    def search_tasks(self, query: str) -> list[Task]:
        """Case-insensitive substring match on name or description."""
        return self._sorted([t for t in self._tasks.values() if t.matches(query)])

    def clean_done_tasks(self) -> int:
        """
        Remove every DONE task with a single write.

        All-or-nothing: if the write fails, every removed task is restored.
        Nothing to remove means no write at all.
        """
        done_ids = sorted(tid for tid, t in self._tasks.items() if t.status == TaskStatus.DONE)
        if not done_ids:
            return 0

        removed = {tid: self._tasks.pop(tid) for tid in done_ids}
        self._commit(undo=lambda: self._tasks.update(removed))

        logger.debug("Cleaned DONE tasks ids=%s", done_ids)
        return len(removed)
