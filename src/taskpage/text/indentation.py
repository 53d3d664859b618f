# src/taskpage/text/indentation.py

from __future__ import annotations

from collections.abc import Iterable
from enum import StrEnum

INDENT_UNIT = "\t"


class IndentMode(StrEnum):
    INDENT = "indent"
    OUTDENT = "outdent"


def indent(lines: Iterable[str], mode: IndentMode | str = IndentMode.INDENT) -> list[str]:
    """Add or remove one tab at the start of every line."""
    mode = IndentMode(mode)
    if mode == IndentMode.INDENT:
        return [INDENT_UNIT + line for line in lines]
    return [line[len(INDENT_UNIT) :] if line.startswith(INDENT_UNIT) else line for line in lines]
