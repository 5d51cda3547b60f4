# src/tasklist/view/render.py

"""Text rendering for the task list.

Pure functions: they take tasks/categories and return lines, so the console
loop can redraw the whole list after every change.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date

from ..core.models import ALL, FilterState, Priority, SortKey, Task

RESET = "\033[0m"
BOLD = "\033[1m"
DIM = "\033[2m"
STRIKE = "\033[9m"
RED = "\033[31m"
YELLOW = "\033[33m"
GREEN = "\033[32m"
CYAN = "\033[36m"

PRIORITY_LABELS: dict[Priority, str] = {
    Priority.HIGH: "high",
    Priority.MEDIUM: "medium",
    Priority.LOW: "low",
}

PRIORITY_COLOR: dict[Priority, str] = {
    Priority.HIGH: RED,
    Priority.MEDIUM: YELLOW,
    Priority.LOW: GREEN,
}

ID_WIDTH = 8
EMPTY_MESSAGE = "No tasks. Add one with /add <title>."


def style(text: str, *codes: str, enabled: bool = True) -> str:
    if not enabled or not codes:
        return text
    return "".join(codes) + text + RESET


def short_id(task_id: str) -> str:
    return task_id[:ID_WIDTH]


def format_due(due: date) -> str:
    return due.strftime("%Y/%m/%d")


def is_overdue(due: date | None, today: date, completed: bool = False) -> bool:
    """A task is overdue when its due date is strictly before today and it is still open."""
    if due is None or completed:
        return False
    return due < today


def priority_label(priority: Priority) -> str:
    return PRIORITY_LABELS.get(priority, str(priority))


def _sanitize(text: str) -> str:
    # Keep titles on one line and free of terminal control sequences.
    return "".join(ch if ch.isprintable() else " " for ch in text)


def render_task(task: Task, *, today: date, color: bool = True) -> list[str]:
    box = "[x]" if task.completed else "[ ]"
    title = _sanitize(task.title) or "<untitled>"
    title_styled = style(title, DIM, STRIKE, enabled=color) if task.completed else style(title, BOLD, enabled=color)

    lines = [f"{style(short_id(task.id), CYAN, enabled=color)} {box} {title_styled}"]

    indent = " " * (ID_WIDTH + 5)
    if task.description:
        lines.append(indent + _sanitize(task.description))

    meta = [
        f"#{_sanitize(task.category)}",
        style(f"priority: {priority_label(task.priority)}", PRIORITY_COLOR[task.priority], enabled=color),
    ]
    if task.due_date is not None:
        if is_overdue(task.due_date, today, task.completed):
            meta.append(style(f"overdue: {format_due(task.due_date)}", RED, BOLD, enabled=color))
        else:
            meta.append(f"due: {format_due(task.due_date)}")
    lines.append(indent + "  ".join(meta))
    return lines


def render_task_list(tasks: Sequence[Task], *, today: date, color: bool = True) -> list[str]:
    """Full list (or the empty-state message) followed by the task count."""
    if not tasks:
        lines = [style(EMPTY_MESSAGE, DIM, enabled=color)]
    else:
        lines = []
        for task in tasks:
            lines.extend(render_task(task, today=today, color=color))
    lines.append(f"{len(tasks)} task{'' if len(tasks) == 1 else 's'}")
    return lines


def category_options(categories: Iterable[str], current: str) -> list[tuple[str, bool]]:
    """
    Category selector: "all" followed by every known category.

    The current selection is kept when it still exists; otherwise "all" is shown
    as selected (the store filter itself is left as it is).
    """
    options = [ALL, *categories]
    selected = current if current in options else ALL
    return [(opt, opt == selected) for opt in options]


def render_header(filter_state: FilterState, sort_key: SortKey, categories: Iterable[str], *, color: bool = True) -> str:
    cats = " ".join(
        style(f"[{name}]", BOLD, enabled=color) if selected else name
        for name, selected in category_options(categories, filter_state.category)
    )
    return f"category: {cats} | status: {filter_state.status.value} | sort: {sort_key.value}"


def render_form(task: Task) -> list[str]:
    """Current values of a task, as shown when it is opened for editing."""
    return [
        f"Editing {short_id(task.id)}:",
        f"  title: {task.title}",
        f"  description: {task.description}",
        f"  category: {task.category}",
        f"  priority: {task.priority.value}",
        f"  due: {task.due_date.isoformat() if task.due_date else ''}",
        "Submit with /update <title> [description=..] [category=..] [priority=..] [due=YYYY-MM-DD],"
        " or /cancel. Fields left out are reset to their defaults.",
    ]
