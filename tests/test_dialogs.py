# tests/test_dialogs.py

from __future__ import annotations

import pytest

from taskline.core.actions import HideDialog, SetTaskDueString, ShowDueDateDialog
from taskline.ui.dialogs import ClosedDialog, DialogComponent, DueDateInputDialog
from taskline.ui.text_input import Key


def type_text(dialog: DialogComponent, text: str) -> None:
    for ch in text:
        assert dialog.handle_key(ch) is None


def test_open_starts_with_empty_buffer() -> None:
    dialog = DialogComponent()
    dialog.update(ShowDueDateDialog(task_id="t1"))

    assert dialog.is_open
    assert isinstance(dialog.state, DueDateInputDialog)
    assert dialog.state.task_id == "t1"
    assert dialog.state.input.text == ""
    assert dialog.state.input.cursor == 0


def test_reopen_does_not_keep_previous_text() -> None:
    dialog = DialogComponent()
    dialog.open_due_date("t1")
    type_text(dialog, "next fri")
    dialog.handle_key(Key.ESC)

    dialog.open_due_date("t2")
    assert isinstance(dialog.state, DueDateInputDialog)
    assert dialog.state.task_id == "t2"
    assert dialog.state.input.text == ""
    assert dialog.state.input.cursor == 0


def test_backspace_edits_buffer() -> None:
    dialog = DialogComponent()
    dialog.open_due_date("t1")
    type_text(dialog, "fri")
    dialog.handle_key(Key.BACKSPACE)

    assert isinstance(dialog.state, DueDateInputDialog)
    assert dialog.state.input.text == "fr"
    assert dialog.state.input.cursor == 2


@pytest.mark.parametrize(
    ("typed", "expected"),
    [
        ("", "no date"),
        ("   ", "no date"),
        ("tmrw", "tomorrow"),
        ("next   fri", "next friday"),
        ("March 15", "March 15"),
    ],
)
def test_enter_emits_normalized_due_string(typed: str, expected: str) -> None:
    dialog = DialogComponent()
    dialog.open_due_date("t1")
    type_text(dialog, typed)

    action = dialog.handle_key(Key.ENTER)

    assert action == SetTaskDueString(task_id="t1", due_string=expected)
    assert isinstance(dialog.state, ClosedDialog)
    assert not dialog.is_open


def test_escape_cancels_without_residual_state() -> None:
    dialog = DialogComponent()
    dialog.open_due_date("t1")
    type_text(dialog, "tomorrow")

    action = dialog.handle_key(Key.ESC)

    assert action == HideDialog()
    assert isinstance(dialog.state, ClosedDialog)


def test_keys_ignored_when_closed() -> None:
    dialog = DialogComponent()
    assert dialog.handle_key("a") is None
    assert dialog.handle_key(Key.ENTER) is None
    assert dialog.handle_key(Key.ESC) is None
    assert isinstance(dialog.state, ClosedDialog)


def test_hide_dialog_action_closes() -> None:
    dialog = DialogComponent()
    dialog.open_due_date("t1")
    dialog.update(HideDialog())
    assert not dialog.is_open
