# tests/test_commands.py

from __future__ import annotations

from datetime import date

from tasklist.cli.commands import CommandRegistry, parse_task_fields, registry, submit_form
from tasklist.core.models import Priority, SortKey, StatusFilter, UNCATEGORIZED
from tasklist.core.state import AppState
from tasklist.store.task_store import TaskStore

from .fakes import FakeSlot


def test_command_registry_routes_2_and_3_params(state: AppState) -> None:
    reg = CommandRegistry()
    called = {"h2": 0, "h3": 0}

    def h2(state, args):
        called["h2"] += 1
        return "h2"

    def h3(state, args, confirm):
        called["h3"] += 1
        assert confirm is not None and confirm("sure?")
        return "h3"

    reg.register("a", h2, "a")
    reg.register("b", h3, "b", redraw=True)

    assert reg.handle(state, "/a x").text == "h2"
    reply = reg.handle(state, "/b y", confirm=lambda _: True)
    assert reply.text == "h3"
    assert reply.redraw is True
    assert called == {"h2": 1, "h3": 1}


def test_command_registry_unknown_and_non_command(state: AppState) -> None:
    reg = CommandRegistry()
    assert reg.handle(state, "hello") is None
    assert "Unknown command" in reg.handle(state, "/nope").text
    assert "Empty command" in reg.handle(state, "/").text
    assert "Cannot parse" in reg.handle(state, '/add "unterminated').text


def test_parse_task_fields() -> None:
    fields = parse_task_fields(
        ["Buy", "milk", "cat=Groceries", "priority=high", "due=2024-03-01", "desc=2 litres", "a=b"]
    )
    assert fields.title == "Buy milk a=b"
    assert fields.category == "Groceries"
    assert fields.priority == "high"
    assert fields.due_date == "2024-03-01"
    assert fields.description == "2 litres"


def test_add_and_scenario_update_resets_description(state: AppState) -> None:
    reply = registry.handle(state, '/add "Buy milk" description="whole milk"')
    assert reply.redraw is True
    (task,) = state.store.all_tasks()
    assert task.category == UNCATEGORIZED
    assert task.priority == Priority.MEDIUM
    assert task.completed is False

    registry.handle(state, f"/edit {task.id}")
    assert state.editing_id == task.id

    reply = registry.handle(state, '/update "Buy bread" category=Groceries')
    assert reply.text.startswith("Updated")
    updated = state.store.get_task(task.id)
    assert updated.title == "Buy bread"
    assert updated.category == "Groceries"
    assert updated.description == ""
    assert state.editing_id is None


def test_add_with_bad_due_date(state: AppState) -> None:
    reply = registry.handle(state, "/add x due=tomorrow")
    assert "Invalid task fields" in reply.text
    assert state.store.count_tasks() == 0


def test_update_without_edit_form_adds(state: AppState) -> None:
    registry.handle(state, "/update standalone")
    assert [t.title for t in state.store.all_tasks()] == ["standalone"]


def test_edit_unknown_and_prefix_ids(state: AppState) -> None:
    assert "No task" in registry.handle(state, "/edit nope").text
    registry.handle(state, "/add one")
    registry.handle(state, "/add two")
    # SequentialIds: t0001, t0002
    assert "ambiguous" in registry.handle(state, "/edit t000").text
    assert "Editing t0002" in registry.handle(state, "/edit t0002").text
    assert state.editing_id == "t0002"
    assert registry.handle(state, "/cancel").text == "Edit cancelled."
    assert state.editing_id is None


def test_done_toggles(state: AppState) -> None:
    registry.handle(state, "/add a")
    assert "marked done" in registry.handle(state, "/done t0001").text
    assert state.store.get_task("t0001").completed is True
    assert "marked open" in registry.handle(state, "/x t0001").text
    assert "Usage" in registry.handle(state, "/done").text


def test_rm_respects_confirmation_and_clears_edit(state: AppState) -> None:
    registry.handle(state, "/add a")
    registry.handle(state, "/edit t0001")

    assert registry.handle(state, "/rm t0001", confirm=lambda _: False).text == "Kept."
    assert state.store.get_task("t0001") is not None

    reply = registry.handle(state, "/rm t0001", confirm=lambda _: True)
    assert reply.text == "Deleted t0001."
    assert state.store.get_task("t0001") is None
    assert state.editing_id is None


def test_filter_and_sort_commands(state: AppState) -> None:
    registry.handle(state, "/add a category=work")
    registry.handle(state, '/filter category "Side projects"')
    assert state.store.filter_state.category == "Side projects"
    registry.handle(state, "/filter status ACTIVE")
    assert state.store.filter_state.status == StatusFilter.ACTIVE
    assert "Usage" in registry.handle(state, "/filter status later").text
    assert "Usage" in registry.handle(state, "/filter colour red").text
    assert "Usage" in registry.handle(state, "/filter").text

    registry.handle(state, "/sort duedate")
    assert state.store.sort_key == SortKey.DUEDATE
    assert "Usage" in registry.handle(state, "/sort size").text
    assert state.store.sort_key == SortKey.DUEDATE


def test_categories_status_help(state: AppState) -> None:
    assert registry.handle(state, "/categories").text == "No categories yet."
    registry.handle(state, "/add a category=work")
    registry.handle(state, "/add b category=home")
    assert registry.handle(state, "/cats").text == "Categories: home, work"
    assert "Tasks: 2 (2 shown)" in registry.handle(state, "/status").text
    assert "/add" in registry.handle(state, "/help").text


def test_submit_form_plain_text(state: AppState) -> None:
    reply = submit_form(state, "Mom's birthday due=2024-05-12")
    assert reply.redraw is True
    (task,) = state.store.all_tasks()
    assert task.title == "Mom's birthday"
    assert task.due_date == date(2024, 5, 12)


def test_storage_failure_is_reported(settings) -> None:
    slot = FakeSlot()
    state = AppState(settings=settings, store=TaskStore(slot))
    slot.fail_writes = True
    reply = registry.handle(state, "/add a")
    assert "Could not save tasks" in reply.text
    assert state.store.count_tasks() == 1


def test_filter_category_all_is_case_insensitive(state: AppState) -> None:
    registry.handle(state, "/add a category=work")
    registry.handle(state, "/add b category=All")
    registry.handle(state, "/filter category work")
    assert len(state.store.filtered_view()) == 1

    registry.handle(state, "/filter category ALL")
    assert state.store.filter_state.category == "all"
    assert len(state.store.filtered_view()) == 2
