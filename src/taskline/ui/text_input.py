# src/taskline/ui/text_input.py

from __future__ import annotations

from enum import StrEnum


class Key(StrEnum):
    """Named (non-printable) keys understood by the dialogs."""

    ENTER = "enter"
    ESC = "esc"
    BACKSPACE = "backspace"
    DELETE = "delete"
    LEFT = "left"
    RIGHT = "right"
    HOME = "home"
    END = "end"


class TextInput:
    """
    Single-line editable buffer with a cursor.

    Cursor is an offset in characters, always within 0..len(text).
    Every operation is a no-op at the boundary it would cross.
    """

    __slots__ = ("_chars", "_cursor")

    def __init__(self, text: str = "") -> None:
        self._chars: list[str] = list(text)
        self._cursor = len(self._chars)

    @property
    def text(self) -> str:
        return "".join(self._chars)

    @property
    def cursor(self) -> int:
        return self._cursor

    def insert(self, ch: str) -> None:
        self._chars.insert(self._cursor, ch)
        self._cursor += 1

    def backspace(self) -> None:
        if self._cursor == 0:
            return
        del self._chars[self._cursor - 1]
        self._cursor -= 1

    def delete(self) -> None:
        if self._cursor >= len(self._chars):
            return
        del self._chars[self._cursor]

    def move_left(self) -> None:
        if self._cursor > 0:
            self._cursor -= 1

    def move_right(self) -> None:
        if self._cursor < len(self._chars):
            self._cursor += 1

    def move_home(self) -> None:
        self._cursor = 0

    def move_end(self) -> None:
        self._cursor = len(self._chars)

    def clear(self) -> None:
        self._chars.clear()
        self._cursor = 0

    def apply_edit_key(self, key: str) -> bool:
        """Apply a printable character or an editing Key. Returns False if the key is not an edit."""
        if key == Key.BACKSPACE:
            self.backspace()
        elif key == Key.DELETE:
            self.delete()
        elif key == Key.LEFT:
            self.move_left()
        elif key == Key.RIGHT:
            self.move_right()
        elif key == Key.HOME:
            self.move_home()
        elif key == Key.END:
            self.move_end()
        elif len(key) == 1 and key.isprintable():
            self.insert(key)
        else:
            return False
        return True
