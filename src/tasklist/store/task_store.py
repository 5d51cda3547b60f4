# src/tasklist/store/task_store.py

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any

from ..core.errors import StorageError
from ..core.models import (
    FilterDimension,
    FilterState,
    SortKey,
    StatusFilter,
    Task,
    TaskFields,
    new_task_id,
    task_from_dict,
    task_to_dict,
    utc_now,
)
from ..core.ports import KeyValueSlot
from .query import apply_filter, sort_tasks

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "todos"


class TaskStore:
    """
    Owns the task list, the current filter/sort state and the persistence round-trip.

    Persistence:
    - the whole list is serialized as JSON and written under one key after every mutation
    - on construction the key is read back; absent or corrupt data means "empty list"
    - write failures are logged and re-raised as StorageError (the in-memory change is kept)

    Filter and sort state live only in memory.
    """

    def __init__(
        self,
        slot: KeyValueSlot,
        *,
        storage_key: str = DEFAULT_STORAGE_KEY,
        clock: Callable[[], datetime] | None = None,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self._slot = slot
        self._key = storage_key
        self._clock = clock or utc_now
        self._new_id = id_factory or new_task_id

        self._tasks: list[Task] = []
        self._filter = FilterState()
        self._sort = SortKey.CREATED

        self._tasks = self._load()
        logger.info("TaskStore ready key=%s total=%d", self._key, len(self._tasks))

    # ---- persistence ----

    @staticmethod
    def serialize(tasks: list[Task]) -> str:
        return json.dumps([task_to_dict(t) for t in tasks], ensure_ascii=False)

    @staticmethod
    def deserialize(raw: str | None) -> list[Task]:
        """
        Parse a stored value. Returns [] for absent or unusable data.
        Individual records that cannot be parsed are skipped.
        """
        if not raw:
            return []
        try:
            data = json.loads(raw)
        except ValueError:
            logger.warning("Stored task list is not valid JSON; starting empty.")
            return []
        if not isinstance(data, list):
            logger.warning("Stored task list has unexpected type %s; starting empty.", type(data).__name__)
            return []

        out: list[Task] = []
        seen: set[str] = set()
        for i, item in enumerate(data):
            if not isinstance(item, dict):
                logger.warning("Skipping stored task #%d: not an object.", i)
                continue
            try:
                task = task_from_dict(item)
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping stored task #%d: %s", i, e)
                continue
            if task.id in seen:
                logger.warning("Skipping stored task #%d: duplicate id %s", i, task.id)
                continue
            seen.add(task.id)
            out.append(task)
        return out

    def _load(self) -> list[Task]:
        try:
            raw = self._slot.read(self._key)
        except Exception:
            logger.exception("Failed to read stored tasks key=%s; starting empty.", self._key)
            return []
        return self.deserialize(raw)

    def _save(self) -> None:
        payload = self.serialize(self._tasks)
        try:
            self._slot.write(self._key, payload)
        except StorageError:
            logger.exception("Failed to persist %d tasks key=%s", len(self._tasks), self._key)
            raise

    # ---- lookup helpers ----

    def _index_of(self, task_id: str) -> int:
        for i, t in enumerate(self._tasks):
            if t.id == task_id:
                return i
        return -1

    def _unique_id(self) -> str:
        existing = {t.id for t in self._tasks}
        tid = self._new_id()
        while tid in existing:
            logger.debug("Id collision on %s; regenerating.", tid)
            tid = self._new_id()
        return tid

    # ---- public API: mutations ----

    def add_task(self, fields: TaskFields) -> Task:
        """Append a new task (defaults applied, title not validated) and persist."""
        task = Task(
            id=self._unique_id(),
            completed=False,
            created_at=self._clock(),
            **fields.resolved(),
        )
        self._tasks.append(task)
        logger.debug(
            "Task added id=%s category=%s priority=%s due=%s",
            task.id,
            task.category,
            task.priority.value,
            task.due_date,
        )
        self._save()
        return task

    def update_task(self, task_id: str, fields: TaskFields) -> Task | None:
        """
        Overwrite every editable field of the task (omitted ones reset to defaults).

        id, completed and created_at are kept. Returns None for an unknown id.
        """
        idx = self._index_of(task_id)
        if idx == -1:
            logger.debug("update_task: id=%s not found", task_id)
            return None

        current = self._tasks[idx]
        updated = Task(
            id=current.id,
            completed=current.completed,
            created_at=current.created_at,
            **fields.resolved(),
        )
        self._tasks[idx] = updated
        logger.debug("Task updated id=%s", task_id)
        self._save()
        return updated

    def delete_task(self, task_id: str) -> bool:
        idx = self._index_of(task_id)
        if idx == -1:
            logger.debug("delete_task: id=%s not found", task_id)
            return False
        del self._tasks[idx]
        logger.debug("Task deleted id=%s", task_id)
        self._save()
        return True

    def toggle_complete(self, task_id: str) -> Task | None:
        idx = self._index_of(task_id)
        if idx == -1:
            logger.debug("toggle_complete: id=%s not found", task_id)
            return None
        task = self._tasks[idx]
        task.completed = not task.completed
        logger.debug("Task toggled id=%s completed=%s", task_id, task.completed)
        self._save()
        return task

    # ---- public API: queries ----

    def get_task(self, task_id: str) -> Task | None:
        idx = self._index_of(task_id)
        return None if idx == -1 else self._tasks[idx]

    def find_by_prefix(self, prefix: str) -> list[Task]:
        """Tasks whose id starts with prefix (used for abbreviated ids in the console)."""
        if not prefix:
            return []
        return [t for t in self._tasks if t.id.startswith(prefix)]

    def all_tasks(self) -> list[Task]:
        """Insertion order copy of the whole list."""
        return list(self._tasks)

    def count_tasks(self) -> int:
        return len(self._tasks)

    def list_categories(self) -> list[str]:
        return sorted({t.category for t in self._tasks})

    # ---- filter / sort state (not persisted) ----

    @property
    def filter_state(self) -> FilterState:
        return FilterState(category=self._filter.category, status=self._filter.status)

    @property
    def sort_key(self) -> SortKey:
        return self._sort

    def set_filter(self, dimension: FilterDimension | str, value: Any) -> None:
        """
        dimension "category": any category name, or "all"
        dimension "status": all / active / completed

        Raises ValueError for an unknown dimension or status value.
        """
        dim = FilterDimension(dimension)
        if dim == FilterDimension.CATEGORY:
            self._filter.category = str(value)
        else:
            self._filter.status = StatusFilter(value)
        logger.debug("Filter set %s=%s", dim.value, value)

    def set_sort(self, key: SortKey | str) -> None:
        """Raises ValueError for an unknown sort key."""
        self._sort = SortKey(key)
        logger.debug("Sort set %s", self._sort.value)

    def filtered_view(self) -> list[Task]:
        """Filtered and sorted copy; the stored order is never changed."""
        return sort_tasks(apply_filter(self._tasks, self._filter), self._sort)
