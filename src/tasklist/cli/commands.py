# src/tasklist/cli/commands.py

from __future__ import annotations

import inspect
import logging
import shlex
from collections.abc import Callable
from dataclasses import dataclass
from typing import cast

from ..core.errors import StorageError
from ..core.models import ALL, FilterDimension, Priority, SortKey, StatusFilter, Task, TaskFields
from ..core.state import AppState
from ..view.render import render_form, short_id

ConfirmPrompt = Callable[[str], bool]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], ConfirmPrompt | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)

FIELD_ALIASES: dict[str, str] = {
    "description": "description",
    "desc": "description",
    "category": "category",
    "cat": "category",
    "priority": "priority",
    "prio": "priority",
    "due": "due_date",
    "duedate": "due_date",
}


@dataclass(slots=True)
class CommandReply:
    text: str
    # True when the task list (or its filter/sort) may have changed.
    redraw: bool = False


class CommandRegistry:
    """Slash-command registry used by the console view (/add, /done, /sort, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}
        self._redraw: set[str] = set()

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
        redraw: bool = False,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler
        if redraw:
            self._redraw.update([key, *(a.lower() for a in aliases)])

    def handle(
        self,
        state: AppState,
        line: str,
        confirm: ConfirmPrompt | None = None,
    ) -> CommandReply | None:
        """
        Handle a string like "/command args".
        Returns a reply or None if the line is not a command.
        """
        if not line.startswith("/"):
            return None

        try:
            parts = shlex.split(line[1:])
        except ValueError as e:
            return CommandReply(f"Cannot parse command: {e}.")
        if not parts:
            return CommandReply("Empty command. Use /help to list available commands.")

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return CommandReply(f"Unknown command: /{name}. Use /help to list available commands.")

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        try:
            if nparams >= 3:
                h3 = cast(CommandHandler3, handler)
                text = h3(state, args, confirm)
            else:
                h2 = cast(CommandHandler2, handler)
                text = h2(state, args)
        except StorageError as e:
            # The change is kept in memory; the next successful save persists it.
            logger.debug("Command /%s could not persist: %s", name, e)
            return CommandReply(f"Could not save tasks: {e}", redraw=name in self._redraw)

        return CommandReply(text, redraw=name in self._redraw)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  /exit - Quit.")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- argument helpers ----


def parse_task_fields(args: list[str]) -> TaskFields:
    """
    Split "/add" style arguments into form fields.

    key=value tokens with a known key become fields, everything else is the title:
      Buy milk category=Groceries priority=high due=2024-03-01
    """
    title_words: list[str] = []
    values: dict[str, str] = {}
    for token in args:
        key, sep, value = token.partition("=")
        field = FIELD_ALIASES.get(key.lower()) if sep else None
        if field is None:
            title_words.append(token)
        else:
            values[field] = value
    return TaskFields(title=" ".join(title_words), **values)


def resolve_task(state: AppState, raw_id: str) -> tuple[Task | None, str]:
    """Exact id first, then a unique id prefix. Returns (task, error_message)."""
    task = state.store.get_task(raw_id)
    if task is not None:
        return task, ""
    matches = state.store.find_by_prefix(raw_id)
    if not matches:
        return None, f"No task with id {raw_id}."
    if len(matches) > 1:
        ids = ", ".join(short_id(t.id) for t in matches)
        return None, f"Id {raw_id} is ambiguous: {ids}."
    return matches[0], ""


# ---- handlers ----


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str]) -> str:
    store = state.store
    flt = store.filter_state
    settings = state.settings
    editing = short_id(state.editing_id) if state.editing_id else "-"
    return (
        "Status:\n"
        f"  Tasks: {store.count_tasks()} ({len(store.filtered_view())} shown)\n"
        f"  Filter: category={flt.category} status={flt.status.value}\n"
        f"  Sort: {store.sort_key.value}\n"
        f"  Editing: {editing}\n"
        f"  Storage: {getattr(settings, 'storage', '?')} key={getattr(settings, 'storage_key', '?')}"
    )


def cmd_list(state: AppState, args: list[str]) -> str:
    return ""


def cmd_categories(state: AppState, args: list[str]) -> str:
    cats = state.store.list_categories()
    if not cats:
        return "No categories yet."
    return "Categories: " + ", ".join(cats)


def cmd_add(state: AppState, args: list[str]) -> str:
    """
    /add <title> [description=..] [category=..] [priority=high|medium|low] [due=YYYY-MM-DD]
    """
    try:
        task = state.store.add_task(parse_task_fields(args))
    except ValueError as e:
        return f"Invalid task fields: {e}."
    return f"Added {short_id(task.id)}."


def cmd_edit(state: AppState, args: list[str]) -> str:
    """/edit <id> -> open the task in the edit form."""
    if not args:
        return "Usage: /edit <id>"
    task, err = resolve_task(state, args[0])
    if task is None:
        return err
    state.editing_id = task.id
    return "\n".join(render_form(task))


def cmd_update(state: AppState, args: list[str]) -> str:
    """
    /update <title> [fields..] -> submit the edit form.

    Without an open edit form this behaves like /add.
    """
    editing_id = state.editing_id
    try:
        fields = parse_task_fields(args)
        if editing_id is None:
            task = state.store.add_task(fields)
            return f"Added {short_id(task.id)}."
        updated = state.store.update_task(editing_id, fields)
    except ValueError as e:
        return f"Invalid task fields: {e}."
    state.editing_id = None
    if updated is None:
        return f"Task {short_id(editing_id)} no longer exists."
    return f"Updated {short_id(updated.id)}."


def submit_form(state: AppState, line: str) -> CommandReply:
    """Plain (non-command) input: the text is the form, submitted like /update."""
    try:
        args = shlex.split(line)
    except ValueError:
        # Unbalanced quotes ("Mom's birthday") are fine in a plain title.
        args = line.split()
    try:
        text = cmd_update(state, args)
    except StorageError as e:
        logger.debug("Form submit could not persist: %s", e)
        text = f"Could not save tasks: {e}"
    return CommandReply(text, redraw=True)


def cmd_cancel(state: AppState, args: list[str]) -> str:
    if state.editing_id is None:
        return "Nothing is being edited."
    state.editing_id = None
    return "Edit cancelled."


def cmd_done(state: AppState, args: list[str]) -> str:
    """/done <id> -> toggle completion."""
    if not args:
        return "Usage: /done <id>"
    task, err = resolve_task(state, args[0])
    if task is None:
        return err
    toggled = state.store.toggle_complete(task.id)
    if toggled is None:
        return f"No task with id {args[0]}."
    return f"{short_id(toggled.id)} marked {'done' if toggled.completed else 'open'}."


def cmd_rm(state: AppState, args: list[str], confirm: ConfirmPrompt | None = None) -> str:
    """/rm <id> -> delete after confirmation."""
    if not args:
        return "Usage: /rm <id>"
    task, err = resolve_task(state, args[0])
    if task is None:
        return err
    if confirm is not None and not confirm(f"Delete task {short_id(task.id)} ({task.title})?"):
        return "Kept."
    if not state.store.delete_task(task.id):
        return f"No task with id {args[0]}."
    if state.editing_id == task.id:
        state.editing_id = None
    return f"Deleted {short_id(task.id)}."


def cmd_filter(state: AppState, args: list[str]) -> str:
    """
    /filter category <name|all>
    /filter status <all|active|completed>
    """
    usage = (
        "Usage:\n"
        "  /filter category <name|all>\n"
        f"  /filter status <{'|'.join(s.value for s in StatusFilter)}>"
    )
    if len(args) < 2:
        return usage
    try:
        dim = FilterDimension(args[0].lower())
    except ValueError:
        return usage
    if dim == FilterDimension.CATEGORY:
        value = " ".join(args[1:])
        # "all" is a keyword in any case; real category names keep their case.
        if value.lower() == ALL:
            value = ALL
    else:
        value = args[1].lower()
    try:
        state.store.set_filter(dim, value)
    except ValueError:
        return usage
    return f"Filter {dim.value} = {value}."


def cmd_sort(state: AppState, args: list[str]) -> str:
    usage = f"Usage: /sort <{'|'.join(k.value for k in SortKey)}>"
    if not args:
        return usage
    try:
        state.store.set_sort(args[0].lower())
    except ValueError:
        return usage
    return f"Sorted by {state.store.sort_key.value}."


_PRIORITIES = "|".join(p.value for p in Priority)

registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show counts, filter, sort and storage.")
registry.register("list", cmd_list, help_text="Redraw the task list.", aliases=["ls"], redraw=True)
registry.register("categories", cmd_categories, help_text="List known categories.", aliases=["cats"])
registry.register(
    "add",
    cmd_add,
    help_text=f"Add a task: /add <title> [description=..] [category=..] [priority={_PRIORITIES}] [due=YYYY-MM-DD].",
    aliases=["a"],
    redraw=True,
)
registry.register("edit", cmd_edit, help_text="Open a task for editing: /edit <id>.", aliases=["e"])
registry.register(
    "update",
    cmd_update,
    help_text="Submit the edit form: /update <title> [fields..] (omitted fields reset to defaults).",
    redraw=True,
)
registry.register("cancel", cmd_cancel, help_text="Leave the edit form.")
registry.register("done", cmd_done, help_text="Toggle completion: /done <id>.", aliases=["toggle", "x"], redraw=True)
registry.register("rm", cmd_rm, help_text="Delete a task (asks first): /rm <id>.", aliases=["delete", "del"], redraw=True)
registry.register(
    "filter", cmd_filter, help_text="Filter: /filter category <name|all> | /filter status <all|active|completed>.", redraw=True
)
registry.register("sort", cmd_sort, help_text="Sort: /sort created | priority | duedate.", redraw=True)
