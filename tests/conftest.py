# tests/conftest.py

from __future__ import annotations

import io
from pathlib import Path
from types import SimpleNamespace

import pytest
from rich.console import Console

from task_tracker.tasks.task_store import TaskStore

from .fakes import FakeClock


@pytest.fixture()
def tasks_path(tmp_path: Path) -> Path:
    return tmp_path / "tasks.json"


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def store(tasks_path: Path, clock: FakeClock) -> TaskStore:
    """Fresh store on a not-yet-existing file, with a fixed clock."""
    return TaskStore(tasks_path, clock=clock)


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with the CLI bootstrap.

    We intentionally use a SimpleNamespace rather than reading the real
    environment, to keep tests isolated and deterministic.
    """
    data_dir = tmp_path / "data"
    return SimpleNamespace(
        app_name="task-tracker-test",
        log_level="WARNING",
        log_to_file=False,
        data_dir=data_dir,
        tasks_path=data_dir / "tasks.json",
    )


@pytest.fixture()
def console() -> Console:
    """Plain-text console writing to memory; read back with console.file.getvalue()."""
    return Console(file=io.StringIO(), width=300, highlight=False)
