# src/taskline/connectors/console_connector.py

from __future__ import annotations

import logging
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..core.actions import Action, HideDialog, SetTaskDueString, ShowNotice
from ..core.state import AppState
from ..ui.dialogs import DueDateInputDialog
from ..ui.text_input import Key

logger = logging.getLogger(__name__)

CANCEL_INPUTS = ("/cancel", "\x1b")


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


def render_dialog(state: AppState) -> str | None:
    """Text for the open dialog (what a full TUI would draw), or None when closed."""
    match state.dialog.state:
        case DueDateInputDialog(title=title, hint=hint):
            return f"[{title}] {hint}"
        case _:
            return None


def feed_dialog_line(state: AppState, line: str) -> Action | None:
    """
    Console stand-in for per-key input: every character of the line is typed
    into the dialog, then ENTER. A cancel line maps to ESC.
    """
    if line.strip() in CANCEL_INPUTS:
        return state.dialog.handle_key(Key.ESC)
    for ch in line:
        state.dialog.handle_key(ch)
    return state.dialog.handle_key(Key.ENTER)


def dispatch_action(state: AppState, action: Action | None) -> str | None:
    """Route an action emitted by the dialog. Returns a line to print, if any."""
    match action:
        case SetTaskDueString():
            accepted = state.task_manager.submit(action)
            return "Updating due date..." if accepted else None
        case HideDialog():
            return "Cancelled."
        case _:
            return None


def print_notices(state: AppState) -> None:
    for action in state.task_manager.drain():
        match action:
            case ShowNotice(message=message, is_error=True):
                _print_ts(f"[ERROR] {message}")
            case ShowNotice(message=message):
                _print_ts(message)
            case _:
                logger.debug("Console: ignoring background action %r", action)


def run_console_loop(state: AppState) -> None:
    logger.info("Console connector started.")
    _print_ts("[CONSOLE] Use /help for commands, /tasks to list tasks. Use /exit to quit.\n")

    def emit(text: str) -> None:
        print(f"[{_ts_local()}] {text}", flush=True)

    while True:
        print_notices(state)

        prompt = render_dialog(state)
        if prompt:
            print(prompt)

        try:
            raw = input("due> " if state.dialog.is_open else ">>> ")
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if state.dialog.is_open:
            reply = dispatch_action(state, feed_dialog_line(state, raw))
            if reply:
                _print_ts(reply)
            continue

        user_input = raw.strip()
        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            cmd_response = command_registry.handle(state, user_input, emit=emit)
        except Exception:
            logger.exception("Command handler crashed.")
            cmd_response = "Internal error while handling a command."

        if cmd_response is None:
            cmd_response = "Commands start with '/'. Use /help to list available commands."
        _print_ts(cmd_response)

    logger.info("Console connector finished.")
