# src/taskpage/text/lists.py

"""
List continuation: what a new line should start with when Enter is pressed
inside a list item, and when pressing Enter should end the list instead.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import Literal

from .lines import split_at

logger = logging.getLogger(__name__)

NextFn = Callable[[str], str]


@dataclass(frozen=True, slots=True)
class ContinueListRule:
    """
    `pattern` finds the list marker at the start of a line. `next` is either
    "same" (repeat the marker as matched) or a function that builds the
    continuation from the matched marker.
    """

    pattern: re.Pattern[str]
    next: Literal["same"] | NextFn = "same"

    def continuation(self, marker: str) -> str:
        if self.next == "same":
            return marker
        return self.next(marker)


class ListOutcome(StrEnum):
    CONTINUED = "continued"
    ENDED = "ended"
    NO_MATCH = "no_match"


@dataclass(frozen=True, slots=True)
class ContinueListResult:
    current: str  # the line up to the cursor
    next: str  # the newly created line
    outcome: ListOutcome
    match: str | None = None  # marker matched by the winning rule

    @property
    def did_continue(self) -> bool:
        return self.outcome == ListOutcome.CONTINUED

    @property
    def did_end(self) -> bool:
        return self.outcome == ListOutcome.ENDED


def _next_number(marker: str) -> str:
    return f"{int(marker.strip().split('.', 1)[0]) + 1}. "


def _fresh_task(marker: str) -> str:
    return re.sub(r"\[.\]", "[ ]", marker, count=1)


LIST_RULES: dict[str, ContinueListRule] = {
    "cancelled": ContinueListRule(re.compile(r"^\t*\[-\] ")),
    "task": ContinueListRule(re.compile(r"^\t*\[.\] "), _fresh_task),
    "unordered": ContinueListRule(re.compile(r"^\t*[-*] ")),
    "numbered": ContinueListRule(re.compile(r"^\t*\d+\. "), _next_number),
    "indent": ContinueListRule(re.compile(r"^\t+")),
}


def continue_list_rules(
    custom: Iterable[ContinueListRule] = (),
    extra_bullets: Sequence[str] = (),
) -> list[ContinueListRule]:
    """
    Built-in rules in precedence order, with caller rules slotted in after the
    task markers. `extra_bullets` adds single characters to the unordered set.
    """
    unordered = LIST_RULES["unordered"]
    if extra_bullets:
        chars = "".join(re.escape(b) for b in ("-", "*", *extra_bullets))
        unordered = ContinueListRule(re.compile(rf"^\t*[{chars}] "))

    return [
        LIST_RULES["cancelled"],
        LIST_RULES["task"],
        *custom,
        unordered,
        LIST_RULES["numbered"],
        LIST_RULES["indent"],
    ]


def continue_list(
    line: str,
    rules: Sequence[ContinueListRule],
    cursor: int | None = None,
) -> ContinueListResult:
    """
    Split `line` at `cursor` (default: end of line) and, if the line starts
    with a list marker, start the new line with the continuation marker.

    Pressing Enter at the end of an item that is nothing but its marker ends
    the list: both lines come back empty so the caller can drop the marker.
    """
    if cursor is None:
        cursor = len(line)

    rule: ContinueListRule | None = None
    match: re.Match[str] | None = None
    for r in rules:
        match = r.pattern.match(line)
        if match:
            rule = r
            break

    current, next_line = split_at(line, cursor)

    if rule is None or match is None:
        return ContinueListResult(current, next_line, ListOutcome.NO_MATCH)

    marker = match.group(0)
    if current == marker and cursor == len(line):
        logger.debug("List ended on marker %r", marker)
        return ContinueListResult("", "", ListOutcome.ENDED, marker)

    return ContinueListResult(
        current,
        rule.continuation(marker) + next_line,
        ListOutcome.CONTINUED,
        marker,
    )
