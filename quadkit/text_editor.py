"""Text editing state of an edit box: cursor, selection, clicks and undo history."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional, Protocol

DOUBLE_CLICK_TIME = 0.5


def _char_at(text: str, index: int, default: str) -> str:
    return text[index] if 0 <= index < len(text) else default


class _Command(Protocol):
    def apply(self, cursor: int, text: str) -> tuple[int, str]: ...

    def unapply(self, cursor: int, text: str) -> tuple[int, str]: ...


@dataclass(frozen=True)
class _InsertCharacter:
    character: str
    cursor: int

    def apply(self, cursor: int, text: str) -> tuple[int, str]:
        if self.cursor <= len(text):
            text = text[: self.cursor] + self.character + text[self.cursor :]
        return self.cursor + 1, text

    def unapply(self, cursor: int, text: str) -> tuple[int, str]:
        if self.cursor < len(text):
            text = text[: self.cursor] + text[self.cursor + 1 :]
        return self.cursor, text


@dataclass(frozen=True)
class _InsertString:
    data: str
    cursor: int

    def apply(self, cursor: int, text: str) -> tuple[int, str]:
        if self.cursor <= len(text):
            text = text[: self.cursor] + self.data + text[self.cursor :]
        return self.cursor + len(self.data), text

    def unapply(self, cursor: int, text: str) -> tuple[int, str]:
        if self.cursor < len(text):
            end = min(self.cursor + len(self.data), len(text))
            text = text[: self.cursor] + text[end:]
        return self.cursor, text


@dataclass(frozen=True)
class _DeleteCharacter:
    character: str
    cursor: int

    def apply(self, cursor: int, text: str) -> tuple[int, str]:
        if self.cursor < len(text):
            text = text[: self.cursor] + text[self.cursor + 1 :]
        return self.cursor, text

    def unapply(self, cursor: int, text: str) -> tuple[int, str]:
        if self.cursor <= len(text):
            text = text[: self.cursor] + self.character + text[self.cursor :]
        return self.cursor + 1, text


@dataclass(frozen=True)
class _DeleteRange:
    start: int
    end: int
    data: str

    def apply(self, cursor: int, text: str) -> tuple[int, str]:
        lo, hi = min(self.start, self.end), max(self.start, self.end)
        return lo, text[:lo] + text[hi:]

    def unapply(self, cursor: int, text: str) -> tuple[int, str]:
        lo = min(self.start, self.end)
        return lo, text[:lo] + self.data + text[lo:]


class ClickState(Enum):
    """What a held mouse button is currently selecting."""

    NONE = auto()
    SELECTING_CHARS = auto()
    SELECTING_WORDS = auto()
    SELECTING_LINES = auto()
    SELECTED = auto()


@dataclass
class EditboxState:
    """Cursor, selection and undo history for one edit box.

    Editing methods take the current text and return the edited text.
    ``click_range`` holds the anchor of a mouse selection: the start
    position while selecting characters, or the word or line being
    extended while selecting words or lines.
    """

    cursor: int = 0
    click_state: ClickState = ClickState.NONE
    click_range: tuple[int, int] = (0, 0)
    clicks_counter: int = 0
    current_click: int = 0
    last_click_time: float = 0.0
    last_click: int = 0
    selection: Optional[tuple[int, int]] = None
    _undo_stack: list[_Command] = field(default_factory=list, init=False, repr=False)
    _redo_stack: list[_Command] = field(default_factory=list, init=False, repr=False)

    def clamp_selection(self, text: str) -> None:
        """Keep the selection inside ``text`` after it changed elsewhere."""
        if self.selection is not None:
            start, end = self.selection
            self.selection = (min(start, len(text)), min(end, len(text)))

    def selected_text(self, text: str) -> Optional[str]:
        if self.selection is None:
            return None
        lo, hi = min(self.selection), max(self.selection)
        if hi > len(text):
            raise ValueError("selection lies outside the text")
        return text[lo:hi]

    def in_selected_range(self, cursor: int) -> bool:
        if self.selection is None:
            return False
        lo, hi = min(self.selection), max(self.selection)
        return lo <= cursor < hi

    def find_line_begin(self, text: str) -> int:
        """Distance from the cursor back to the start of its line."""
        position = self.cursor
        while position > 0 and _char_at(text, position - 1, "x") != "\n":
            position -= 1
        return self.cursor - position

    def find_line_end(self, text: str) -> int:
        """Distance from the cursor forward to the end of its line."""
        position = self.cursor
        while position < len(text) and _char_at(text, position, "x") != "\n":
            position += 1
        return position - self.cursor

    @staticmethod
    def word_delimiter(character: str) -> bool:
        return character in ' ();"'

    def find_word_begin(self, text: str, cursor: int) -> int:
        offset = 0
        while cursor > 0:
            current = _char_at(text, cursor - 1, " ")
            if self.word_delimiter(current) or current == "\n":
                break
            offset += 1
            cursor -= 1
        return offset

    def find_word_end(self, text: str, cursor: int) -> int:
        offset = 0
        space_skipping = False
        while cursor < len(text):
            current = _char_at(text, cursor, " ")
            if self.word_delimiter(current) or current == "\n":
                space_skipping = True
            if space_skipping and not self.word_delimiter(current):
                break
            cursor += 1
            offset += 1
        return offset

    def _run(self, command: _Command, text: str) -> str:
        self.cursor, text = command.apply(self.cursor, text)
        self._undo_stack.append(command)
        return text

    def insert_character(self, text: str, character: str) -> str:
        self._redo_stack.clear()
        self.selection = None
        return self._run(_InsertCharacter(character, self.cursor), text)

    def insert_string(self, text: str, string: str) -> str:
        self._redo_stack.clear()
        self.selection = None
        return self._run(_InsertString(string, self.cursor), text)

    def delete_selected(self, text: str) -> str:
        self._redo_stack.clear()
        if self.selection is not None:
            start, end = self.selection
            data = text[min(start, end) : max(start, end)]
            text = self._run(_DeleteRange(start, end, data), text)
        self.selection = None
        return text

    def delete_next_character(self, text: str) -> str:
        self._redo_stack.clear()
        if 0 <= self.cursor < len(text):
            text = self._run(_DeleteCharacter(text[self.cursor], self.cursor), text)
        return text

    def delete_current_character(self, text: str) -> str:
        if self.cursor > 0:
            self.cursor -= 1
            text = self.delete_next_character(text)
        return text

    def move_cursor_next_word(self, text: str, shift: bool) -> None:
        next_word = self.find_word_end(text, self.cursor + 1) + 1
        self.move_cursor(text, next_word, shift)

    def move_cursor_prev_word(self, text: str, shift: bool) -> None:
        if self.cursor > 1:
            prev_word = self.find_word_begin(text, self.cursor - 1) + 1
            self.move_cursor(text, -prev_word, shift)

    def move_cursor(self, text: str, dx: int, shift: bool) -> None:
        start_cursor = self.cursor
        end_cursor = start_cursor
        if 0 <= self.cursor + dx <= len(text):
            end_cursor = self.cursor + dx
            self.cursor = end_cursor

        if not shift:
            self.selection = None
        elif self.selection is None:
            self.selection = (start_cursor, end_cursor)
        else:
            self.selection = (self.selection[0], end_cursor)

    def move_cursor_within_line(self, text: str, dx: int, shift: bool) -> None:
        """Move right by up to ``dx`` characters without leaving the line."""
        if dx < 0:
            raise ValueError("moving left within a line is not supported")
        for _ in range(dx):
            if _char_at(text, self.cursor, "x") == "\n" or self.cursor == len(text):
                break
            self.move_cursor(text, 1, shift)

    def select_all(self, text: str) -> None:
        self.selection = (0, len(text))
        self.click_state = ClickState.NONE

    def deselect(self) -> None:
        self.click_state = ClickState.NONE
        self.selection = None

    def select_word(self, text: str) -> tuple[int, int]:
        to_begin = self.find_word_begin(text, self.cursor)
        to_end = self.find_word_end(text, self.cursor)
        self.selection = (self.cursor - to_begin, self.cursor + to_end)
        return self.selection

    def select_line(self, text: str) -> tuple[int, int]:
        to_begin = self.find_line_begin(text)
        to_end = self.find_line_end(text)
        self.selection = (self.cursor - to_begin, self.cursor + to_end)
        return self.selection

    def click_down(self, time: float, text: str, cursor: int) -> None:
        self.current_click = cursor

        if (
            self.last_click == self.current_click
            and time - self.last_click_time < DOUBLE_CLICK_TIME
        ):
            self.clicks_counter += 1
            phase = self.clicks_counter % 3
            if phase == 0:
                self.deselect()
            elif phase == 1:
                self.click_range = self.select_word(text)
                self.click_state = ClickState.SELECTING_WORDS
            else:
                self.click_range = self.select_line(text)
                self.click_state = ClickState.SELECTING_LINES
        else:
            self.clicks_counter = 0
            if self.click_state in (ClickState.NONE, ClickState.SELECTED):
                self.click_state = ClickState.SELECTING_CHARS
                self.click_range = (cursor, cursor)
                self.selection = (cursor, cursor)
            else:
                self.click_state = ClickState.NONE
                self.selection = None
                self.cursor = cursor

        self.last_click_time = time

    def click_move(self, text: str, cursor: int) -> None:
        self.cursor = cursor
        if self.cursor != self.last_click:
            self.clicks_counter = 0

        if self.click_state is ClickState.SELECTING_CHARS:
            self.selection = (self.click_range[0], cursor)
        elif self.click_state is ClickState.SELECTING_WORDS:
            start, end = self.click_range
            if cursor < start:
                word_begin = self.cursor - self.find_word_begin(text, self.cursor)
                self.selection = (word_begin, end)
                self.cursor = word_begin
            elif cursor > end:
                word_end = self.cursor + self.find_word_end(text, self.cursor)
                self.selection = (start, word_end)
                self.cursor = word_end
            else:
                self.selection = (start, end)
                self.cursor = end
        elif self.click_state is ClickState.SELECTING_LINES:
            start, end = self.click_range
            if cursor < start:
                line_begin = self.cursor - self.find_line_begin(text)
                line_end = self.cursor + self.find_line_end(text)
                self.selection = (line_begin, end)
                self.cursor = line_end
            elif cursor > end:
                line_end = self.cursor + self.find_line_end(text)
                self.selection = (start, line_end)
                self.cursor = line_end
            else:
                self.selection = (start, end)
                self.cursor = end

        self.last_click = cursor

    def click_up(self, text: str) -> None:
        self.click_state = ClickState.NONE
        if self.selection is not None:
            start, end = self.selection
            if start != end:
                self.click_state = ClickState.SELECTED
            else:
                self.selection = None

    def undo(self, text: str) -> str:
        if self._undo_stack:
            command = self._undo_stack.pop()
            self.cursor, text = command.unapply(self.cursor, text)
            self._redo_stack.append(command)
        return text

    def redo(self, text: str) -> str:
        if self._redo_stack:
            command = self._redo_stack.pop()
            self.cursor, text = command.apply(self.cursor, text)
            self._undo_stack.append(command)
        return text