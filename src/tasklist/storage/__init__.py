"""
Key-value slots the task store persists into.

Components:
- sqlite_slot.py: durable SQLite table (default)
- memory_slot.py: in-process dict for ephemeral runs and tests
"""

from .memory_slot import MemorySlot
from .sqlite_slot import SqliteSlot

__all__ = ["MemorySlot", "SqliteSlot"]
