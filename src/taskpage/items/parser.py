# src/taskpage/items/parser.py

"""
Line parser and serializer.

`parse` is total: anything that is not a heading or a task degrades to a note.
Headings and tasks get a token list that covers the whole line, which is what
lets the mutation layer patch `raw` in place instead of rebuilding it.
"""

from __future__ import annotations

import logging
import re
import threading
from collections import OrderedDict
from collections.abc import Hashable

from ..dates import parse_iso_date
from .models import Item, ItemType, TaskStatus, Token, TokenType

logger = logging.getLogger(__name__)

HEADING_RE = re.compile(r"^# ")
TASK_RE = re.compile(r"^(\s*)(\[(.)\] )")
DUE_DATE_RE = re.compile(r"\s?->(\d{4}-\d{2}-\d{2})(?!\d)")
LEADING_WS_RE = re.compile(r"^\s*")

DEFAULT_CACHE_SIZE = 512


def leading_whitespace(raw: str) -> str:
    """Indentation prefix of a line; this is how nesting depth is encoded."""
    m = LEADING_WS_RE.match(raw)
    return m.group(0) if m else ""


def _parse_heading(line: str) -> Item:
    tokens = [Token(TokenType.HEADING, "# ", "#")]
    rest = line[2:]
    if rest:
        tokens.append(Token(TokenType.TEXT, rest, rest))
    return Item(raw=line, type=ItemType.HEADING, tokens=tokens)


def _parse_task(line: str, m: re.Match[str], status: TaskStatus) -> Item:
    indent, marker, char = m.group(1), m.group(2), m.group(3)
    body = line[m.end() :]

    tokens: list[Token] = []
    if indent:
        tokens.append(Token(TokenType.INDENT, indent, indent))
    tokens.append(Token(TokenType.STATUS, marker, char))

    due_date = None
    dm = DUE_DATE_RE.search(body)
    if dm is None:
        if body:
            tokens.append(Token(TokenType.TEXT, body, body))
    else:
        before, after = body[: dm.start()], body[dm.end() :]
        if before:
            tokens.append(Token(TokenType.TEXT, before, before))
        date_text = dm.group(1)
        # A malformed date keeps its token so the text survives a round trip.
        due_date = parse_iso_date(date_text)
        tokens.append(Token(TokenType.DUE_DATE, dm.group(0), date_text))
        if after:
            tokens.append(Token(TokenType.TEXT, after, after))

    return Item(
        raw=line,
        type=ItemType.TASK,
        status=status,
        due_date=due_date,
        tokens=tokens,
    )


def parse(line: str) -> Item:
    """Parse a single line into an Item. Never raises."""
    if HEADING_RE.match(line):
        return _parse_heading(line)

    m = TASK_RE.match(line)
    if m:
        status = TaskStatus.from_char(m.group(3))
        if status is not None:
            return _parse_task(line, m, status)

    return Item(raw=line)


def stringify(item: Item) -> str:
    """
    Rebuild the line from an item's tokens.

    Lossless for anything `parse` produced. Notes carry no tokens; their raw
    text is the whole serialization.
    """
    if not item.tokens:
        return item.raw
    return "".join(t.match for t in item.tokens)


class ParseCache:
    """
    Bounded memo for `parse`, keyed by slot (usually a line index).

    A slot remembers the last line parsed for it. A new string for the slot
    replaces the entry; the least recently used slot is evicted once the cache
    is full. Lookup and update happen under one lock.
    """

    def __init__(self, max_entries: int = DEFAULT_CACHE_SIZE) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be >= 1")
        self._max_entries = max_entries
        self._entries: OrderedDict[Hashable, tuple[str, Item]] = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def parse(self, line: str, slot: Hashable = None) -> Item:
        with self._lock:
            entry = self._entries.get(slot)
            # The second check catches items that were mutated in place after
            # being handed out.
            if entry is not None and entry[0] == line and entry[1].raw == line:
                self._entries.move_to_end(slot)
                self.hits += 1
                return entry[1]

            item = parse(line)
            self._entries[slot] = (line, item)
            self._entries.move_to_end(slot)
            self.misses += 1

            while len(self._entries) > self._max_entries:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug("ParseCache evicted slot=%s", evicted)
            return item

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()


_default_cache = ParseCache()


def parse_with_memo(line: str, slot: Hashable = None) -> Item:
    """`parse` backed by a process-wide ParseCache."""
    return _default_cache.parse(line, slot)
