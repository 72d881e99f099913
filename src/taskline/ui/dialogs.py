# src/taskline/ui/dialogs.py

"""
Modal dialog automaton.

DialogState is a closed union: every dialog kind is its own dataclass, and
shared text editing lives in TextInput. DialogComponent owns the current state,
turns keys into edits, and emits Actions on submit/cancel. It never talks to the
task service; the emitted SetTaskDueString is executed elsewhere.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ..constants import UI_DUE_DATE_DIALOG_HINT, UI_DUE_DATE_DIALOG_TITLE
from ..core.actions import Action, HideDialog, SetTaskDueString, ShowDueDateDialog
from ..utils.dates import NO_DATE, normalize_due_string
from .text_input import Key, TextInput

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ClosedDialog:
    pass


@dataclass(slots=True)
class DueDateInputDialog:
    task_id: str
    input: TextInput = field(default_factory=TextInput)

    title: str = UI_DUE_DATE_DIALOG_TITLE
    hint: str = UI_DUE_DATE_DIALOG_HINT

    def submit(self) -> SetTaskDueString:
        normalized = normalize_due_string(self.input.text)
        return SetTaskDueString(task_id=self.task_id, due_string=normalized or NO_DATE)


DialogState = ClosedDialog | DueDateInputDialog


class DialogComponent:
    def __init__(self) -> None:
        self.state: DialogState = ClosedDialog()

    @property
    def is_open(self) -> bool:
        return not isinstance(self.state, ClosedDialog)

    def open_due_date(self, task_id: str) -> None:
        # Always a fresh buffer: nothing survives from a previous session.
        self.state = DueDateInputDialog(task_id=task_id)
        logger.debug("Dialog: due date input opened task_id=%s", task_id)

    def close(self) -> None:
        self.state = ClosedDialog()

    def update(self, action: Action) -> None:
        """Apply an inbound command from the dispatch layer."""
        match action:
            case ShowDueDateDialog(task_id=task_id):
                self.open_due_date(task_id)
            case HideDialog():
                self.close()
            case _:
                pass

    def handle_key(self, key: str) -> Action | None:
        """
        Feed one key (a printable character or a Key) to the open dialog.

        Returns the Action to dispatch (HideDialog on ESC, SetTaskDueString on ENTER),
        or None when the key only edited the buffer or no dialog is open.
        """
        match self.state:
            case DueDateInputDialog() as dialog:
                if key == Key.ESC:
                    self.close()
                    return HideDialog()
                if key == Key.ENTER:
                    action = dialog.submit()
                    dialog.input.clear()
                    self.close()
                    return action
                dialog.input.apply_edit_key(key)
                return None
            case _:
                return None
