# src/tasklist/store/query.py

from __future__ import annotations

from collections.abc import Iterable

from ..core.models import ALL, FilterState, SortKey, StatusFilter, Task


def apply_filter(tasks: Iterable[Task], state: FilterState) -> list[Task]:
    """
    Category filter first (exact match, "all" passes everything),
    then status filter (all / active / completed).
    """
    out = list(tasks)

    if state.category != ALL:
        out = [t for t in out if t.category == state.category]

    if state.status == StatusFilter.ACTIVE:
        out = [t for t in out if not t.completed]
    elif state.status == StatusFilter.COMPLETED:
        out = [t for t in out if t.completed]

    return out


def _due_key(task: Task) -> tuple[int, str]:
    # Undated tasks go after every dated one and compare equal to each other.
    if task.due_date is None:
        return (1, "")
    return (0, task.due_date.isoformat())


def sort_tasks(tasks: Iterable[Task], key: SortKey) -> list[Task]:
    """
    Return a new sorted list; the input order is never touched.

    - created: newest first
    - priority: high, medium, low
    - duedate: earliest first, undated last
    """
    if key == SortKey.PRIORITY:
        return sorted(tasks, key=lambda t: t.priority.rank)
    if key == SortKey.DUEDATE:
        return sorted(tasks, key=_due_key)
    return sorted(tasks, key=lambda t: t.created_at, reverse=True)
