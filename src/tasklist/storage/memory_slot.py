# src/tasklist/storage/memory_slot.py

from __future__ import annotations


class MemorySlot:
    """
    In-process key-value slot.

    Used for ephemeral runs (TASKLIST_STORAGE=memory); nothing survives a restart.
    """

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def read(self, key: str) -> str | None:
        return self._data.get(key)

    def write(self, key: str, value: str) -> None:
        self._data[key] = value
