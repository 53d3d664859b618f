# tests/test_sorting.py

from __future__ import annotations

from taskpage.items.parser import parse
from taskpage.items.sorting import compare, sort_items, sort_page


def _raws(items) -> list[str]:
    return [i.raw for i in items]


def test_dated_task_before_undated_regardless_of_status() -> None:
    a = parse("[ ] a ->2024-01-01")
    b = parse("[!] b")
    assert compare(a, b) < 0
    assert compare(b, a) > 0


def test_notes_and_headings_compare_equal_to_everything() -> None:
    task = parse("[!] task ->2024-01-01")
    note = parse("note")
    heading = parse("# heading")
    assert compare(note, task) == 0
    assert compare(task, note) == 0
    assert compare(heading, task) == 0
    assert compare(note, heading) == 0


def test_different_depths_compare_equal() -> None:
    a = parse("[ ] parent")
    b = parse("\t[!] child ->2024-01-01")
    assert compare(a, b) == 0
    assert compare(b, a) == 0


def test_earlier_due_date_first() -> None:
    a = parse("[x] a ->2024-01-01")
    b = parse("[!] b ->2024-02-01")
    assert compare(a, b) < 0
    assert compare(b, a) > 0


def test_status_weights_on_same_due_date() -> None:
    order = ["[!] a", "[/] b", "[ ] c", "[?] d", "[x] e"]
    items = [parse(f"{raw} ->2024-01-01") for raw in order]
    for earlier, later in zip(items, items[1:]):
        assert compare(earlier, later) < 0
        assert compare(later, earlier) > 0


def test_identical_status_and_date_compare_equal() -> None:
    assert compare(parse("[ ] a"), parse("[ ] b")) == 0
    assert compare(parse("[x] a ->2024-01-01"), parse("[x] b ->2024-01-01")) == 0


def test_sort_items_is_stable() -> None:
    items = [parse(r) for r in ["[ ] one", "[x] two", "[ ] three", "[!] four"]]
    assert _raws(sort_items(items)) == ["[!] four", "[ ] one", "[ ] three", "[x] two"]


def test_sort_page_moves_children_with_parent() -> None:
    page = [
        "# Today",
        "[x] done parent",
        "\t[ ] child of done",
        "\t[!] important child",
        "[ ] open parent ->2024-01-01",
        "\t[x] child of open",
    ]
    result = sort_page([parse(r) for r in page])
    assert _raws(result) == [
        "# Today",
        "[ ] open parent ->2024-01-01",
        "\t[x] child of open",
        "[x] done parent",
        "\t[!] important child",
        "\t[ ] child of done",
    ]


def test_sort_page_keeps_notes_and_blank_lines_in_place() -> None:
    page = [
        "[x] a",
        "[ ] b",
        "",
        "a note",
        "[x] c",
        "[!] d",
    ]
    result = sort_page([parse(r) for r in page])
    assert _raws(result) == ["[ ] b", "[x] a", "", "a note", "[!] d", "[x] c"]


def test_sort_page_is_idempotent() -> None:
    page = ["[x] a", "\t[ ] a1", "[!] b ->2024-03-01", "[ ] c"]
    once = sort_page([parse(r) for r in page])
    twice = sort_page(once)
    assert _raws(once) == _raws(twice)
