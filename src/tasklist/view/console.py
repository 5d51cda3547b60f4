# src/tasklist/view/console.py

from __future__ import annotations

import logging
import sys
from datetime import date

from ..cli.commands import registry as command_registry
from ..cli.commands import submit_form
from ..core.state import AppState
from .render import render_header, render_task_list

logger = logging.getLogger(__name__)

YES = {"y", "yes"}


def _color_enabled(state: AppState) -> bool:
    # Piped or redirected output gets plain text.
    if not getattr(state.settings, "color", False):
        return False
    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False


def _print_block(text: str) -> None:
    for line in text.splitlines():
        print(line)


def ask_confirm(question: str) -> bool:
    """y/N prompt; EOF or Ctrl+C count as "no"."""
    try:
        answer = input(f"{question} [y/N] ")
    except (EOFError, KeyboardInterrupt):
        print()
        return False
    return answer.strip().lower() in YES


def redraw(state: AppState, *, today: date | None = None) -> None:
    """Pull a fresh filtered view from the store and print the whole list."""
    store = state.store
    color = _color_enabled(state)
    today = today or date.today()

    print()
    print(render_header(store.filter_state, store.sort_key, store.list_categories(), color=color))
    for line in render_task_list(store.filtered_view(), today=today, color=color):
        print(line)
    print()


def run_console_loop(state: AppState) -> None:
    logger.info("Console view started (tasks=%d).", state.store.count_tasks())
    app_name = str(getattr(state.settings, "app_name", "tasklist"))
    print(f"[{app_name}] Type a title to add a task. Use /help for commands. Use /exit to quit.")
    redraw(state)

    while True:
        prompt = "edit> " if state.editing_id else "> "
        try:
            user_input = input(prompt).strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        # Commands (/add, /done, ...); plain text submits the form.
        try:
            reply = command_registry.handle(state, user_input, confirm=ask_confirm)
            if reply is None:
                reply = submit_form(state, user_input)
        except Exception:
            logger.exception("Command handler crashed.")
            print("Internal error while handling a command.")
            continue

        if reply.text:
            _print_block(reply.text)
        if reply.redraw:
            redraw(state)

    logger.info("Console view finished.")
