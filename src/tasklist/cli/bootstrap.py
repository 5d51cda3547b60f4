# src/tasklist/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- picks the key-value slot (SQLite or in-memory) and builds the TaskStore,
- wires everything into an AppState owned by main().
"""

from __future__ import annotations

import logging

from ..config import STORAGE_MEMORY, get_settings
from ..core.ports import KeyValueSlot
from ..core.state import AppState
from ..storage import MemorySlot, SqliteSlot
from ..store.task_store import DEFAULT_STORAGE_KEY, TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.db_path.parent.mkdir(parents=True, exist_ok=True)


def create_slot(settings) -> KeyValueSlot:
    if getattr(settings, "storage", None) == STORAGE_MEMORY:
        logger.info("Using in-memory storage; tasks are not kept after exit.")
        return MemorySlot()
    return SqliteSlot(settings.db_path)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    store = TaskStore(
        create_slot(settings),
        storage_key=getattr(settings, "storage_key", DEFAULT_STORAGE_KEY),
    )
    return AppState(settings=settings, store=store)
