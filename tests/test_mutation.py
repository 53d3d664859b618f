# tests/test_mutation.py

from __future__ import annotations

from datetime import date, datetime

import pytest

from taskpage.items.models import ItemType, TaskStatus, TokenType
from taskpage.items.mutation import UnsupportedMutationError, as_writable, mutate
from taskpage.items.parser import parse


def _set(name: str, value):
    def factory(item) -> None:
        setattr(item, name, value)

    return factory


def test_set_status_patches_marker() -> None:
    item = parse("[ ] write report")
    mutate(item, _set("status", TaskStatus.COMPLETED))
    assert item.raw == "[x] write report"
    assert item.status == TaskStatus.COMPLETED
    token = item.find_token(TokenType.STATUS)
    assert token is not None and token.text == "x"
    assert parse(item.raw) == item


def test_set_status_accepts_plain_string_and_keeps_indent() -> None:
    item = parse("\t\t[x] nested ->2024-03-01")
    mutate(item, _set("status", "important"))
    assert item.raw == "\t\t[!] nested ->2024-03-01"
    assert item.status == TaskStatus.IMPORTANT


def test_set_status_on_note_is_a_no_op() -> None:
    item = parse("a note")
    mutate(item, _set("status", TaskStatus.COMPLETED))
    assert item.raw == "a note"
    assert item.status is None


def test_set_status_rejects_unknown_value() -> None:
    item = parse("[ ] thing")
    with pytest.raises(ValueError):
        mutate(item, _set("status", "finished"))
    assert item.raw == "[ ] thing"


def test_add_due_date() -> None:
    item = parse("[ ] write report")
    mutate(item, _set("due_date", date(2024, 3, 1)))
    assert item.raw == "[ ] write report ->2024-03-01"
    assert item.due_date == date(2024, 3, 1)
    assert parse(item.raw) == item


def test_add_due_date_accepts_datetime() -> None:
    item = parse("[ ] write report")
    mutate(item, _set("due_date", datetime(2024, 3, 1, 18, 30)))
    assert item.raw == "[ ] write report ->2024-03-01"
    assert item.due_date == date(2024, 3, 1)


def test_add_due_date_reuses_trailing_space() -> None:
    item = parse("[ ] write report ")
    mutate(item, _set("due_date", date(2024, 3, 1)))
    assert item.raw == "[ ] write report ->2024-03-01"


def test_clear_due_date_restores_original() -> None:
    item = parse("[ ] write report")
    mutate(item, _set("due_date", date(2024, 3, 1)))
    mutate(item, _set("due_date", None))
    assert item.raw == "[ ] write report"
    assert item.due_date is None
    assert item.find_token(TokenType.DUE_DATE) is None


def test_due_date_on_empty_task_keeps_marker() -> None:
    item = parse("[ ] ")
    mutate(item, _set("due_date", date(2024, 3, 1)))
    assert item.raw == "[ ] ->2024-03-01"
    mutate(item, _set("due_date", None))
    assert item.raw == "[ ] "
    assert item.type == ItemType.TASK


def test_replace_due_date() -> None:
    item = parse("[ ] call ->2024-03-01 about it")
    mutate(item, _set("due_date", date(2024, 12, 24)))
    assert item.raw == "[ ] call ->2024-12-24 about it"
    assert item.due_date == date(2024, 12, 24)


def test_clear_due_date_skips_earlier_lookalike() -> None:
    item = parse("[ ] ref ->2024-03-015 ->2024-03-01")
    assert item.due_date == date(2024, 3, 1)
    mutate(item, _set("due_date", None))
    assert item.raw == "[ ] ref ->2024-03-015"
    assert item.due_date is None


def test_replace_due_date_skips_earlier_lookalike() -> None:
    item = parse("[ ] ref ->2024-03-015 ->2024-03-01")
    mutate(item, _set("due_date", date(2025, 1, 1)))
    assert item.raw == "[ ] ref ->2024-03-015 ->2025-01-01"
    assert item.due_date == date(2025, 1, 1)


def test_clear_due_date_when_none_is_a_no_op() -> None:
    item = parse("[ ] nothing due")
    mutate(item, _set("due_date", None))
    assert item.raw == "[ ] nothing due"


def test_malformed_due_date_survives_clear_and_is_replaced_by_set() -> None:
    item = parse("[ ] fix me ->2024-13-45")
    mutate(item, _set("due_date", None))
    assert item.raw == "[ ] fix me ->2024-13-45"

    mutate(item, _set("due_date", date(2024, 1, 15)))
    assert item.raw == "[ ] fix me ->2024-01-15"
    assert item.due_date == date(2024, 1, 15)


def test_due_date_on_note_is_a_no_op() -> None:
    item = parse("a note")
    mutate(item, _set("due_date", date(2024, 3, 1)))
    assert item.raw == "a note"


@pytest.mark.parametrize(
    ("raw", "new_type", "expected"),
    [
        ("buy milk", ItemType.TASK, "[ ] buy milk"),
        ("\tbuy milk", ItemType.TASK, "\t[ ] buy milk"),
        ("buy milk", ItemType.HEADING, "# buy milk"),
        ("\t[x] buy milk", ItemType.HEADING, "# buy milk"),
        ("\t[x] buy milk", ItemType.NOTE, "\tbuy milk"),
        ("# Groceries", ItemType.NOTE, "Groceries"),
        ("# Groceries", ItemType.TASK, "[ ] Groceries"),
        ("", ItemType.HEADING, "# "),
    ],
)
def test_set_type(raw: str, new_type: ItemType, expected: str) -> None:
    item = parse(raw)
    mutate(item, _set("type", new_type))
    assert item.raw == expected
    assert item.type == new_type
    expected_status = TaskStatus.INCOMPLETE if new_type == ItemType.TASK else None
    assert item.status == expected_status


def test_set_type_same_type_is_a_no_op() -> None:
    item = parse("[x] done")
    mutate(item, _set("type", "task"))
    assert item.raw == "[x] done"
    assert item.status == TaskStatus.COMPLETED


def test_several_writes_in_one_mutation() -> None:
    item = parse("buy milk")

    def factory(w) -> None:
        w.type = ItemType.TASK
        w.status = TaskStatus.IN_PROGRESS
        w.due_date = date(2024, 5, 6)

    mutate(item, factory)
    assert item.raw == "[/] buy milk ->2024-05-06"
    assert parse(item.raw) == item


def test_unsupported_field_leaves_item_untouched() -> None:
    item = parse("[ ] write report")
    original = parse("[ ] write report")

    def factory(w) -> None:
        w.status = TaskStatus.COMPLETED
        w.set("raw", "oops")

    with pytest.raises(UnsupportedMutationError) as exc:
        mutate(item, factory)
    assert '"raw"' in str(exc.value)
    assert item == original


def test_assigning_raw_or_tokens_directly_is_rejected() -> None:
    w = as_writable(parse("[ ] thing"))
    with pytest.raises(UnsupportedMutationError):
        w.raw = "x"
    with pytest.raises(UnsupportedMutationError):
        w.tokens = []


def test_unknown_attribute_is_rejected() -> None:
    w = as_writable(parse("[ ] thing"))
    with pytest.raises(UnsupportedMutationError) as exc:
        w.priority = 3  # type: ignore[attr-defined]
    assert exc.value.field_name == "priority"
    with pytest.raises(UnsupportedMutationError):
        w._item = parse("[x] other")
    assert w.raw == "[ ] thing"


def test_camel_case_due_date_attribute() -> None:
    item = parse("[ ] thing")
    mutate(item, _set("dueDate", date(2024, 3, 1)))
    assert item.raw == "[ ] thing ->2024-03-01"
    assert item.due_date == date(2024, 3, 1)


def test_set_dispatches_named_fields() -> None:
    w = as_writable(parse("[ ] thing"))
    w.set("status", "completed")
    w.set("dueDate", date(2024, 3, 1))
    assert w.raw == "[x] thing ->2024-03-01"


def test_as_writable_does_not_touch_original() -> None:
    item = parse("[ ] thing")
    w = as_writable(item)
    w.status = TaskStatus.COMPLETED
    assert w.raw == "[x] thing"
    assert item.raw == "[ ] thing"


def test_mutate_returns_same_item() -> None:
    item = parse("[ ] thing")
    assert mutate(item, _set("status", "completed")) is item
