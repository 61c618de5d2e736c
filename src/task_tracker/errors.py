# src/task_tracker/errors.py

"""
Error taxonomy.

"Not found" is not an error: update/delete/mark return False instead.
"""

from __future__ import annotations


class TaskTrackerError(Exception):
    """Base class for all errors surfaced by the task store."""


class ValidationError(TaskTrackerError, ValueError):
    """Bad input (e.g. blank task name). Raised before any mutation."""


class PersistenceError(TaskTrackerError):
    """The task file could not be read or written."""


class DeserializationError(TaskTrackerError):
    """The task file exists but its content is not a valid task mapping."""
