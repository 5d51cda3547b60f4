# src/tasklist/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..store.task_store import TaskStore


@dataclass
class AppState:
    # Settings object (config.Settings or a test double with the same attributes).
    settings: object

    store: TaskStore

    # View-owned, ephemeral: id of the task currently open in the edit form.
    editing_id: str | None = None
