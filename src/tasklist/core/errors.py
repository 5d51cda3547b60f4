# src/tasklist/core/errors.py

from __future__ import annotations


class TasklistError(Exception):
    """Base class for tasklist errors."""


class StorageError(TasklistError):
    """Persisting the task list failed (disk full, locked database, ...)."""
