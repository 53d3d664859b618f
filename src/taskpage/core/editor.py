# src/taskpage/core/editor.py

"""
Editing session over one page of text.

This is where the pieces meet: the page is kept as a single string with a
selection, lines are parsed on demand through a ParseCache, and every edit is
spliced back into the string with the line/offset helpers. A front end (the
console connector, or an editor widget) only ever talks to this class.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from ..items.models import Item
from ..items.mutation import WritableItem, as_writable, commit
from ..items.parser import ParseCache
from ..items.sorting import sort_page
from ..text.indentation import IndentMode, indent
from ..text.lines import cursor_in_line, lines_for_range, range_for_lines, split_lines
from ..text.lists import ContinueListResult, ContinueListRule, ListOutcome, continue_list, continue_list_rules

logger = logging.getLogger(__name__)


@dataclass
class EditorSession:
    text: str = ""
    cursor: int = 0
    # None means a collapsed selection (just the cursor).
    selection_end: int | None = None

    rules: list[ContinueListRule] = field(default_factory=continue_list_rules)
    cache: ParseCache = field(default_factory=ParseCache)

    # ---- reading ----

    @property
    def selection(self) -> tuple[int, int]:
        end = self.cursor if self.selection_end is None else self.selection_end
        return min(self.cursor, end), max(self.cursor, end)

    def lines(self) -> list[str]:
        return split_lines(self.text)

    def items(self) -> list[Item]:
        return [self.cache.parse(line, i) for i, line in enumerate(self.lines())]

    def item_at(self, index: int) -> Item:
        lines = self.lines()
        self._check_line(index, lines)
        return self.cache.parse(lines[index], index)

    def selected_lines(self) -> tuple[int, int]:
        start, end = self.selection
        return lines_for_range(self.text, start, end)

    def current_line(self) -> int:
        return lines_for_range(self.text, self.cursor)[0]

    # ---- cursor / selection ----

    @staticmethod
    def _check_line(index: int, lines: list[str]) -> None:
        if not 0 <= index < len(lines):
            raise ValueError(f"Line {index} is out of range (page has {len(lines)} lines)")

    def move_cursor(self, line: int, column: int | None = None) -> None:
        """Put the cursor on `line` at `column` (default: end of line)."""
        lines = self.lines()
        self._check_line(line, lines)
        start, _ = range_for_lines(lines, line)
        col = len(lines[line]) if column is None else max(0, min(column, len(lines[line])))
        self.cursor = start + col
        self.selection_end = None

    def select_lines(self, first: int, last: int | None = None) -> None:
        if last is None:
            last = first
        lines = self.lines()
        self._check_line(first, lines)
        self._check_line(last, lines)
        if last < first:
            first, last = last, first
        self.cursor, self.selection_end = range_for_lines(lines, first, last)

    # ---- editing ----

    def _replace(self, start: int, end: int, replacement: str) -> None:
        self.text = self.text[:start] + replacement + self.text[end:]

    def insert_text(self, value: str) -> None:
        """Replace the selection with `value` and put the cursor after it."""
        start, end = self.selection
        self._replace(start, end, value)
        self.cursor = start + len(value)
        self.selection_end = None

    def press_enter(self) -> ContinueListResult:
        """
        Break the line at the cursor, continuing a list if the line is one.

        Enter on an item that is only a marker clears that line instead.
        """
        if self.selection_end is not None:
            self.insert_text("")

        index = self.current_line()
        line_start, line_end = range_for_lines(self.text, index)
        line = self.text[line_start:line_end]
        column = cursor_in_line(self.text, self.cursor)

        result = continue_list(line, self.rules, column)

        if result.outcome == ListOutcome.ENDED:
            self._replace(line_start, line_end, "")
            self.cursor = line_start
        else:
            self._replace(line_start, line_end, f"{result.current}\n{result.next}")
            marker_len = len(result.next) - (len(line) - column)
            self.cursor = line_start + len(result.current) + 1 + marker_len

        self.selection_end = None
        logger.debug("Enter on line %s: %s", index, result.outcome)
        return result

    def indent_selection(self, mode: IndentMode | str = IndentMode.INDENT) -> tuple[int, int]:
        """Indent or outdent every selected line and select the result."""
        first, last = self.selected_lines()
        start, end = range_for_lines(self.text, first, last)
        block = "\n".join(indent(split_lines(self.text[start:end]), mode))
        self._replace(start, end, block)
        self.cursor, self.selection_end = start, start + len(block)
        return first, last

    def mutate_selected(self, factory: Callable[[WritableItem], Any]) -> int:
        """
        Apply `factory` to the item on every selected line.

        Returns the number of lines whose text changed. If `factory` raises,
        the page and its parsed items are left exactly as they were.
        """
        collapsed = self.selection_end is None
        column = cursor_in_line(self.text, self.cursor)
        first, last = self.selected_lines()
        lines = self.lines()

        items: list[Item] = []
        staged: list[WritableItem] = []
        for index in range(first, last + 1):
            item = self.cache.parse(lines[index], index)
            w = as_writable(item)
            factory(w)
            items.append(item)
            staged.append(w)

        # Every factory call succeeded; only now do the cached items change.
        new_lines: list[str] = []
        changed = 0
        for item, w in zip(items, staged):
            before = item.raw
            commit(item, w)
            if item.raw != before:
                changed += 1
            new_lines.append(item.raw)

        start, end = range_for_lines(lines, first, last)
        block = "\n".join(new_lines)
        self._replace(start, end, block)

        if collapsed:
            self.cursor = start + min(column, len(new_lines[0]))
        else:
            self.cursor, self.selection_end = start, start + len(block)
        return changed

    def sort(self) -> bool:
        """Sort the whole page. Returns True if the order changed."""
        items = self.items()
        ordered = sort_page(items)
        new_text = "\n".join(i.raw for i in ordered)
        if new_text == self.text:
            return False
        self.text = new_text
        self.cursor = 0
        self.selection_end = None
        return True

    def clear(self) -> None:
        self.text = ""
        self.cursor = 0
        self.selection_end = None
        self.cache.clear()
