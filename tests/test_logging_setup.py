# tests/test_logging_setup.py

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from task_tracker.logging_setup import _ConsoleNoiseFilter, setup_logging


@pytest.fixture()
def restore_root_logging():
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    yield
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()
    for h in saved_handlers:
        root.addHandler(h)
    root.setLevel(saved_level)
    logging.captureWarnings(False)


def _record(name: str, level: int) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


def test_console_filter_keeps_own_logs_and_hides_third_party_noise() -> None:
    f = _ConsoleNoiseFilter()

    assert f.filter(_record("task_tracker.tasks.task_store", logging.DEBUG))
    assert not f.filter(_record("urllib3", logging.WARNING))
    assert f.filter(_record("urllib3", logging.ERROR))
    assert not f.filter(_record("py.warnings", logging.WARNING))


def test_setup_logging_writes_log_file(tmp_path: Path, restore_root_logging) -> None:
    setup_logging(log_dir=tmp_path / "logs", console_level=logging.ERROR)

    logging.getLogger("task_tracker.test").debug("hello file")
    for h in logging.getLogger().handlers:
        h.flush()

    log_file = tmp_path / "logs" / "task_tracker.log"
    assert "hello file" in log_file.read_text("utf-8")


def test_setup_logging_without_file(tmp_path: Path, restore_root_logging) -> None:
    setup_logging(log_dir=None)

    handlers = logging.getLogger().handlers
    assert len(handlers) == 1
    assert not isinstance(handlers[0], logging.FileHandler)
