# src/taskpage/text/lines.py

"""
Line and offset arithmetic for a text blob made of "\\n"-joined lines.

Selections are (from, to) character offsets as reported by an editor widget.
"""

from __future__ import annotations

from collections.abc import Sequence

TextOrLines = str | Sequence[str]


def split_lines(text: str) -> list[str]:
    """Split on "\\n" only; "\\r" is left alone."""
    return text.split("\n")


def split_at(text: str, index: int) -> tuple[str, str]:
    return text[:index], text[index:]


def _as_lines(value: TextOrLines) -> list[str]:
    if isinstance(value, str):
        return split_lines(value)
    return list(value)


def lines_for_range(value: TextOrLines, start: int, end: int | None = None) -> tuple[int, int]:
    """
    For a selection from `start` to `end`, return the indexes of the first and
    last selected line.

    A position belongs to a line if it lies between the line's first character
    and the position right after its last character, both inclusive. A
    position that matches no line resolves to line 0.
    """
    if end is None:
        end = start

    lines = _as_lines(value)
    cursor = 0
    start_line = -1
    end_line = -1

    for i, line in enumerate(lines):
        if start_line >= 0 and end_line >= 0:
            break
        line_start = cursor
        line_end = line_start + len(line)

        if start_line < 0 and line_start <= start <= line_end:
            start_line = i
        if end_line < 0 and line_start <= end <= line_end:
            end_line = i

        cursor += len(line) + 1

    return max(start_line, 0), max(end_line, 0)


def range_for_lines(value: TextOrLines, first: int, last: int | None = None) -> tuple[int, int]:
    """
    Character range covering lines `first` through `last`, including the line
    breaks between them but not the one after `last`.
    """
    if last is None:
        last = first

    lengths = [len(line) for line in _as_lines(value)]

    # Every line before `first` contributes its length plus one line break.
    start = sum(lengths[:first]) + first
    end = start + sum(lengths[first : last + 1]) + (last - first)
    return start, end


def cursor_in_line(text: str, cursor: int) -> int:
    """Offset of `cursor` from the start of the line it is on."""
    line_start = text.rfind("\n", 0, cursor) + 1
    return cursor - line_start
