# src/task_tracker/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root": it builds the one TaskStore a CLI
invocation works with, which is then passed explicitly to command handlers.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..config import get_settings
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    Path(settings.tasks_path).parent.mkdir(parents=True, exist_ok=True)


def create_task_store(*, settings=None, tasks_path: str | Path | None = None) -> TaskStore:
    """
    Create the TaskStore from the provided settings.

    `tasks_path` (the --file option) overrides settings.tasks_path.
    If settings is None, falls back to get_settings().
    Raises DeserializationError / PersistenceError if the file cannot be loaded.
    """
    if settings is None:
        settings = get_settings()

    path = Path(tasks_path) if tasks_path is not None else Path(settings.tasks_path)
    if tasks_path is None:
        _ensure_local_dirs(settings)

    logger.debug("Opening task store at %s", path)
    return TaskStore(path)
