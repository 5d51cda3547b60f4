"""
Task store subsystem.

Components:
- task_store.py: in-memory task list + persistence round-trip into a key-value slot
- query.py: filter and sort helpers behind TaskStore.filtered_view()
"""

from .task_store import DEFAULT_STORAGE_KEY, TaskStore

__all__ = ["DEFAULT_STORAGE_KEY", "TaskStore"]
