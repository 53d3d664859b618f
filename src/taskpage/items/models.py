# src/taskpage/items/models.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import StrEnum


class ItemType(StrEnum):
    NOTE = "note"
    HEADING = "heading"
    TASK = "task"


class TaskStatus(StrEnum):
    """
    Task status as written inside the `[ ]` marker.

    The character table below is a compatibility contract with existing pages:
    changing it means migrating every document.
    """

    INCOMPLETE = "incomplete"
    COMPLETED = "completed"
    IN_PROGRESS = "inProgress"
    IMPORTANT = "important"
    QUESTION = "question"

    @property
    def char(self) -> str:
        return STATUS_CHARS[self]

    @classmethod
    def from_char(cls, char: str) -> TaskStatus | None:
        return _CHAR_STATUSES.get(char)


STATUS_CHARS: dict[TaskStatus, str] = {
    TaskStatus.INCOMPLETE: " ",
    TaskStatus.COMPLETED: "x",
    TaskStatus.IN_PROGRESS: "/",
    TaskStatus.IMPORTANT: "!",
    TaskStatus.QUESTION: "?",
}

_CHAR_STATUSES: dict[str, TaskStatus] = {c: s for s, c in STATUS_CHARS.items()}


class TokenType(StrEnum):
    INDENT = "indent"
    HEADING = "heading"
    STATUS = "status"
    TEXT = "text"
    DUE_DATE = "dueDate"


@dataclass(slots=True)
class Token:
    type: TokenType
    match: str  # exact substring of raw
    text: str  # decoded value


@dataclass(slots=True)
class Item:
    """
    Parsed form of one page line.

    `raw` is authoritative: every other field can be re-derived from it with
    `parse(raw)`. `status` and `due_date` are only ever set on tasks.
    """

    raw: str
    type: ItemType = ItemType.NOTE
    status: TaskStatus | None = None
    due_date: date | None = None
    tokens: list[Token] = field(default_factory=list)

    def find_token(self, token_type: TokenType) -> Token | None:
        for t in self.tokens:
            if t.type == token_type:
                return t
        return None

    @property
    def is_task(self) -> bool:
        return self.type == ItemType.TASK
