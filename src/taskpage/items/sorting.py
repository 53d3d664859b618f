# src/taskpage/items/sorting.py

from __future__ import annotations

from collections.abc import Sequence
from functools import cmp_to_key

from ..dates import to_date
from .models import Item, ItemType, TaskStatus
from .parser import leading_whitespace

STATUS_WEIGHTS: dict[TaskStatus, int] = {
    TaskStatus.IMPORTANT: 10000,
    TaskStatus.IN_PROGRESS: 1000,
    TaskStatus.INCOMPLETE: 100,
    TaskStatus.QUESTION: 10,
    TaskStatus.COMPLETED: 1,
}


def compare(a: Item, b: Item) -> int:
    """
    Order two items for a stable sort.

    1. Anything that is not a task compares equal to everything, so notes,
       headings and blank lines keep their place.
    2. Tasks with different leading whitespace compare equal. Nested tasks
       have to travel with their parent, which only works if depths are never
       mixed; use `sort_page` for whole pages.
    3. Tasks with a due date come before tasks without one, earlier days
       first.
    4. Then by status: important, in progress, incomplete, question,
       completed.

    This is not a total order. It relies on the caller's sort being stable,
    which `sorted` and `list.sort` guarantee.
    """
    if a.type != ItemType.TASK or b.type != ItemType.TASK:
        return 0

    if leading_whitespace(a.raw) != leading_whitespace(b.raw):
        return 0

    if a.due_date is not None and b.due_date is None:
        return -1
    if a.due_date is None and b.due_date is not None:
        return 1
    if a.due_date is not None and b.due_date is not None:
        diff = (to_date(a.due_date) - to_date(b.due_date)).days
        if diff != 0:
            return diff

    if a.status is None or b.status is None:
        return 0
    return STATUS_WEIGHTS[b.status] - STATUS_WEIGHTS[a.status]


def sort_items(items: Sequence[Item]) -> list[Item]:
    """Plain stable sort with `compare`. Does not keep children with parents."""
    return sorted(items, key=cmp_to_key(compare))


def _depth(item: Item) -> int:
    return len(leading_whitespace(item.raw))


def _blocks(items: Sequence[Item]) -> list[list[Item]]:
    """Group items into blocks: a head item plus every deeper item after it."""
    blocks: list[list[Item]] = []
    i = 0
    while i < len(items):
        head = items[i]
        depth = _depth(head)
        j = i + 1
        # Blank lines end a block; they have no depth to speak of.
        while j < len(items) and items[j].raw.strip() and _depth(items[j]) > depth:
            j += 1
        blocks.append(list(items[i:j]))
        i = j
    return blocks


def _sort_block_children(block: list[Item]) -> list[Item]:
    if len(block) == 1:
        return block
    return [block[0], *sort_page(block[1:])]


def sort_page(items: Sequence[Item]) -> list[Item]:
    """
    Sort a whole page, moving nested items together with their parent.

    Consecutive sibling tasks are sorted among themselves; any non-task line
    (note, heading, blank) stays where it is and separates the runs on either
    side of it. Children are sorted the same way, recursively.
    """
    out: list[Item] = []
    run: list[list[Item]] = []

    def flush() -> None:
        run.sort(key=cmp_to_key(lambda x, y: compare(x[0], y[0])))
        for b in run:
            out.extend(b)
        run.clear()

    for block in _blocks(items):
        block = _sort_block_children(block)
        head = block[0]
        if head.type != ItemType.TASK:
            flush()
            out.extend(block)
            continue
        if run and leading_whitespace(run[0][0].raw) != leading_whitespace(head.raw):
            flush()
        run.append(block)

    flush()
    return out
