# src/taskpage/dates.py

"""
Date helpers shared by the parser, the mutation layer and the console.

Patterns use day.js-style tokens (`YYYY-MM-DD`, `ddd, D MMM`) because that is
the notation stored in settings. Month and weekday names come from the
process locale via strftime.
"""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta

ISO_PATTERN = "YYYY-MM-DD"

_ISO_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")

# Longest tokens first so "MMMM" is not consumed as two "MM".
_TOKEN_RE = re.compile(r"YYYY|YY|MMMM|MMM|MM|M|DD|D|dddd|ddd")


def today() -> date:
    return date.today()


def tomorrow() -> date:
    return today() + timedelta(days=1)


def next_week() -> date:
    return today() + timedelta(days=7)


def to_date(value: date | datetime) -> date:
    """Drop the time of day, if any."""
    if isinstance(value, datetime):
        return value.date()
    return value


def parse_iso_date(text: str) -> date | None:
    """
    Parse a strict `YYYY-MM-DD` string.

    Returns None for anything else, including well-formed strings naming a day
    that does not exist (2024-02-30).
    """
    m = _ISO_RE.match(text)
    if not m:
        return None
    try:
        return date(int(m.group(1)), int(m.group(2)), int(m.group(3)))
    except ValueError:
        return None


def format_date(value: date | datetime, pattern: str = ISO_PATTERN) -> str:
    d = to_date(value)

    def _sub(m: re.Match[str]) -> str:
        tok = m.group(0)
        if tok == "YYYY":
            return f"{d.year:04d}"
        if tok == "YY":
            return f"{d.year % 100:02d}"
        if tok == "MMMM":
            return d.strftime("%B")
        if tok == "MMM":
            return d.strftime("%b")
        if tok == "MM":
            return f"{d.month:02d}"
        if tok == "M":
            return str(d.month)
        if tok == "DD":
            return f"{d.day:02d}"
        if tok == "D":
            return str(d.day)
        if tok == "dddd":
            return d.strftime("%A")
        return d.strftime("%a")

    return _TOKEN_RE.sub(_sub, pattern)


def resolve_keyword(word: str) -> date:
    """
    Turn a console keyword into a date: today, tomorrow, nextweek or an ISO
    date. Raises ValueError for anything else.
    """
    key = word.strip().lower().replace("-", "").replace("_", "")
    if key == "today":
        return today()
    if key == "tomorrow":
        return tomorrow()
    if key == "nextweek":
        return next_week()
    parsed = parse_iso_date(word.strip())
    if parsed is None:
        raise ValueError(f"Not a date: {word!r}")
    return parsed
