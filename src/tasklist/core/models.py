# src/tasklist/core/models.py

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import StrEnum
from typing import Any

UNCATEGORIZED = "uncategorized"
ALL = "all"


class Priority(StrEnum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]

    @classmethod
    def parse(cls, raw: str | None) -> Priority:
        """Empty or unknown values resolve to MEDIUM."""
        if not raw:
            return cls.MEDIUM
        try:
            return cls(str(raw).strip().lower())
        except ValueError:
            return cls.MEDIUM


_PRIORITY_RANK: dict[Priority, int] = {
    Priority.HIGH: 0,
    Priority.MEDIUM: 1,
    Priority.LOW: 2,
}


class StatusFilter(StrEnum):
    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"


class SortKey(StrEnum):
    CREATED = "created"
    PRIORITY = "priority"
    DUEDATE = "duedate"


class FilterDimension(StrEnum):
    CATEGORY = "category"
    STATUS = "status"


def new_task_id() -> str:
    return uuid.uuid4().hex


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_due_date(raw: date | str | None) -> date | None:
    """
    Normalize a due date input.

    - None / "" -> no due date
    - date -> as is (datetimes are truncated to their calendar date)
    - "YYYY-MM-DD" -> parsed; anything else raises ValueError
    """
    if raw is None:
        return None
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    text = str(raw).strip()
    if not text:
        return None
    return date.fromisoformat(text)


@dataclass(slots=True)
class TaskFields:
    """
    Caller-supplied values for add/update.

    Every optional field may be left empty; the store resolves it to its default
    (the same rules apply to add and update).
    """

    title: str = ""
    description: str | None = None
    category: str | None = None
    priority: Priority | str | None = None
    due_date: date | str | None = None

    def resolved(self) -> dict[str, Any]:
        return {
            "title": "" if self.title is None else str(self.title),
            "description": self.description or "",
            "category": self.category or UNCATEGORIZED,
            "priority": Priority.parse(self.priority),
            "due_date": parse_due_date(self.due_date),
        }


@dataclass(slots=True)
class Task:
    id: str
    title: str
    description: str = ""
    category: str = UNCATEGORIZED
    priority: Priority = Priority.MEDIUM
    due_date: date | None = None
    completed: bool = False
    created_at: datetime = field(default_factory=utc_now)


@dataclass(slots=True)
class FilterState:
    category: str = ALL
    status: StatusFilter = StatusFilter.ALL


# ---- persisted record format ----


def task_to_dict(task: Task) -> dict[str, Any]:
    return {
        "id": task.id,
        "title": task.title,
        "description": task.description,
        "category": task.category,
        "priority": task.priority.value,
        "dueDate": task.due_date.isoformat() if task.due_date else None,
        "completed": task.completed,
        "createdAt": task.created_at.isoformat(),
    }


def _parse_created_at(raw: Any) -> datetime:
    if not isinstance(raw, str) or not raw:
        raise ValueError("createdAt is missing")
    # Older records carry a trailing "Z" instead of an offset.
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    dt = datetime.fromisoformat(raw)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def _parse_completed(raw: Any) -> bool:
    # "false" or 0 would be truthy under bool(); only real booleans are trusted.
    if not isinstance(raw, bool):
        raise ValueError(f"completed must be a boolean, got {raw!r}")
    return raw


def task_from_dict(raw: dict[str, Any]) -> Task:
    """
    Build a Task from a persisted record.

    Raises ValueError/TypeError/KeyError for records that cannot be trusted
    (missing id, unparseable dates); the caller decides whether to skip them.
    """
    task_id = raw["id"]
    if not isinstance(task_id, str) or not task_id:
        raise ValueError("id must be a non-empty string")

    return Task(
        id=task_id,
        title=str(raw.get("title") or ""),
        description=str(raw.get("description") or ""),
        category=str(raw.get("category") or UNCATEGORIZED),
        priority=Priority.parse(raw.get("priority")),
        due_date=parse_due_date(raw.get("dueDate")),
        completed=_parse_completed(raw.get("completed", False)),
        created_at=_parse_created_at(raw.get("createdAt")),
    )
