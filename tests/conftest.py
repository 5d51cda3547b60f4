# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from tasklist.core.state import AppState
from tasklist.storage import SqliteSlot
from tasklist.store.task_store import TaskStore

from .fakes import SequentialIds, TickingClock


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="tasklist-test",
        log_level="DEBUG",
        storage="sqlite",
        storage_key="todos",
        data_dir=tmp_path / "data",
        db_path=tmp_path / "data" / "tasklist.sqlite3",
        color=False,
    )


@pytest.fixture()
def slot(settings: SimpleNamespace) -> SqliteSlot:
    return SqliteSlot(settings.db_path)


@pytest.fixture()
def clock() -> TickingClock:
    return TickingClock()


@pytest.fixture()
def store(slot: SqliteSlot, clock: TickingClock) -> TaskStore:
    """
    Real SQLite-backed store with a deterministic clock.

    Ids stay random (uuid4) here; tests that need predictable ids build their own store.
    """
    return TaskStore(slot, clock=clock)


@pytest.fixture()
def ids() -> SequentialIds:
    return SequentialIds()


@pytest.fixture()
def state(settings: SimpleNamespace, slot: SqliteSlot, clock: TickingClock, ids: SequentialIds) -> AppState:
    return AppState(settings=settings, store=TaskStore(slot, clock=clock, id_factory=ids))
