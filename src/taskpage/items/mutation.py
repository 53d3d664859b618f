# src/taskpage/items/mutation.py

"""
Controlled write surface over parsed items.

Only `type`, `status` and `due_date` can be changed. Each setter patches `raw`
and re-derives `tokens` before it returns, so `parse(item.raw)` always agrees
with the item. Work happens on a deep copy; `mutate` copies the result back
onto the caller's item only after the factory has returned.
"""

from __future__ import annotations

import copy
import logging
import re
from collections.abc import Callable
from datetime import date, datetime
from typing import Any

from ..dates import format_date, to_date
from .models import Item, ItemType, TaskStatus, Token, TokenType
from .parser import parse, stringify

logger = logging.getLogger(__name__)

WRITABLE_FIELDS = ("type", "status", "due_date")

_STATUS_BOX_RE = re.compile(r"\[.\]")
_TRAILING_SPACE_RE = re.compile(r" ?$")


class UnsupportedMutationError(AttributeError):
    """Raised when code tries to write a field outside WRITABLE_FIELDS."""

    def __init__(self, field_name: str) -> None:
        super().__init__(f'Setting "{field_name}" is not currently supported')
        self.field_name = field_name


def _assign(target: Item, source: Item) -> None:
    target.raw = source.raw
    target.type = source.type
    target.status = source.status
    target.due_date = source.due_date
    target.tokens = source.tokens


def _token_offset(item: Item, token: Token) -> int:
    """Start of ``token`` in ``item.raw``; tokens tile the line in order."""
    offset = 0
    for t in item.tokens:
        if t is token:
            return offset
        offset += len(t.match)
    raise ValueError(f"token {token.type} does not belong to {item.raw!r}")


def _set_status(item: Item, new_status: TaskStatus | str) -> None:
    if item.type != ItemType.TASK:
        return

    status = TaskStatus(new_status)
    item.status = status

    token = item.find_token(TokenType.STATUS)
    if token is not None:
        token.match = _STATUS_BOX_RE.sub(f"[{status.char}]", token.match, count=1)
        token.text = status.char

    item.raw = stringify(item)


def _set_due_date(item: Item, new_due_date: date | datetime | None) -> None:
    if item.type != ItemType.TASK:
        return

    token = item.find_token(TokenType.DUE_DATE)
    new_date = to_date(new_due_date) if new_due_date is not None else None

    # No due date before, none after. A malformed date token also lands here
    # and is left alone for the user to fix.
    if item.due_date is None and new_date is None:
        return

    new_text = format_date(new_date) if new_date is not None else ""

    if token is None:
        # No due date before -> add
        new_raw = _TRAILING_SPACE_RE.sub(f" ->{new_text}", item.raw, count=1)
    else:
        start = _token_offset(item, token)
        end = start + len(token.match)
        if new_date is None:
            # Due date before, none after -> remove (the match carries its leading space)
            new_match = ""
        else:
            # Due date before and after -> replace
            new_match = token.match[: len(token.match) - len(token.text)] + new_text
        new_raw = item.raw[:start] + new_match + item.raw[end:]

    _assign(item, parse(new_raw))


def _set_type(item: Item, new_type: ItemType | str) -> None:
    kind = ItemType(new_type)
    if item.type == kind:
        return

    new_raw = item.raw

    # Strip the syntax of the old type
    if item.type == ItemType.TASK:
        new_raw = re.sub(r"^(\s*)\[.\] ", r"\1", new_raw, count=1)
    elif item.type == ItemType.HEADING:
        new_raw = re.sub(r"^# ", "", new_raw, count=1)

    # Add the syntax of the new type
    if kind == ItemType.TASK:
        new_raw = re.sub(r"^(\s*)", r"\1[ ] ", new_raw, count=1)
    elif kind == ItemType.HEADING:
        new_raw = f"# {new_raw.lstrip()}"

    _assign(item, parse(new_raw))
    item.status = TaskStatus.INCOMPLETE if kind == ItemType.TASK else None


class WritableItem:
    """
    Edit-time view over a private copy of an Item.

    Reading works for every field; writing is limited to `type`, `status` and
    `due_date`. `set(name, value)` is the generic entry point and rejects any
    other name with UnsupportedMutationError.
    """

    __slots__ = ("_item",)

    def __init__(self, item: Item) -> None:
        object.__setattr__(self, "_item", copy.deepcopy(item))

    def __repr__(self) -> str:
        return f"WritableItem({self._item!r})"

    def __setattr__(self, name: str, value: Any) -> None:
        # Properties run their own setters; every other name goes through set().
        if isinstance(getattr(type(self), name, None), property):
            object.__setattr__(self, name, value)
        else:
            self.set(name, value)

    # ---- read-only ----

    @property
    def raw(self) -> str:
        return self._item.raw

    @raw.setter
    def raw(self, value: str) -> None:
        raise UnsupportedMutationError("raw")

    @property
    def tokens(self) -> list[Token]:
        return self._item.tokens

    @tokens.setter
    def tokens(self, value: list[Token]) -> None:
        raise UnsupportedMutationError("tokens")

    # ---- writable ----

    @property
    def type(self) -> ItemType:
        return self._item.type

    @type.setter
    def type(self, value: ItemType | str) -> None:
        self.set_type(value)

    @property
    def status(self) -> TaskStatus | None:
        return self._item.status

    @status.setter
    def status(self, value: TaskStatus | str) -> None:
        self.set_status(value)

    @property
    def due_date(self) -> date | None:
        return self._item.due_date

    @due_date.setter
    def due_date(self, value: date | datetime | None) -> None:
        self.set_due_date(value)

    def set_type(self, value: ItemType | str) -> None:
        _set_type(self._item, value)

    def set_status(self, value: TaskStatus | str) -> None:
        _set_status(self._item, value)

    def set_due_date(self, value: date | datetime | None) -> None:
        _set_due_date(self._item, value)

    def set(self, field_name: str, value: Any) -> None:
        if field_name == "type":
            self.set_type(value)
        elif field_name == "status":
            self.set_status(value)
        elif field_name in ("due_date", "dueDate"):
            self.set_due_date(value)
        else:
            logger.debug("Rejected write to unsupported field %r", field_name)
            raise UnsupportedMutationError(field_name)

    def snapshot(self) -> Item:
        """An independent copy of the current state."""
        return copy.deepcopy(self._item)


def as_writable(item: Item) -> WritableItem:
    """Writable view over a copy of `item`; `item` itself is never touched."""
    return WritableItem(item)


def mutate(item: Item, factory: Callable[[WritableItem], Any]) -> Item:
    """
    Change `item` in place through a WritableItem.

    If `factory` raises, the exception propagates and `item` is unchanged.
    Returns `item` for convenience.
    """
    w = as_writable(item)
    factory(w)
    return commit(item, w)


def commit(item: Item, writable: WritableItem) -> Item:
    """Copy the state of `writable` onto `item`. Returns `item`."""
    _assign(item, writable.snapshot())
    return item
