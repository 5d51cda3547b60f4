# src/tasklist/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The store depends on a Protocol instead of a concrete storage backend.
This keeps SQLite/in-memory slots swappable and makes testing easier.
"""

from typing import Protocol


class KeyValueSlot(Protocol):
    """
    Durable string slot addressed by key.

    read() returns None when nothing was stored under the key.
    write() replaces the value as a whole and raises StorageError on failure.
    """

    def read(self, key: str) -> str | None: ...

    def write(self, key: str, value: str) -> None: ...
