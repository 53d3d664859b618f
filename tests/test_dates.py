# tests/test_dates.py

from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from taskpage import dates


def test_relative_days() -> None:
    today = dates.today()
    assert dates.tomorrow() - today == timedelta(days=1)
    assert dates.next_week() - today == timedelta(days=7)


def test_parse_iso_date() -> None:
    assert dates.parse_iso_date("2024-03-01") == date(2024, 3, 1)
    assert dates.parse_iso_date("2024-02-30") is None
    assert dates.parse_iso_date("2024-3-1") is None
    assert dates.parse_iso_date("soon") is None


def test_format_date_numeric_tokens() -> None:
    d = date(2024, 3, 1)
    assert dates.format_date(d) == "2024-03-01"
    assert dates.format_date(d, "D.M.YY") == "1.3.24"
    assert dates.format_date(datetime(2024, 3, 1, 23, 59), "YYYY-MM-DD") == "2024-03-01"


def test_format_date_names_follow_strftime() -> None:
    d = date(2024, 3, 1)
    assert dates.format_date(d, "dddd") == d.strftime("%A")
    assert dates.format_date(d, "ddd, D MMM") == f"{d.strftime('%a')}, 1 {d.strftime('%b')}"
    assert dates.format_date(d, "MMMM") == d.strftime("%B")


def test_resolve_keyword() -> None:
    assert dates.resolve_keyword("today") == dates.today()
    assert dates.resolve_keyword("Tomorrow") == dates.tomorrow()
    assert dates.resolve_keyword("next-week") == dates.next_week()
    assert dates.resolve_keyword("2024-03-01") == date(2024, 3, 1)
    with pytest.raises(ValueError):
        dates.resolve_keyword("someday")
