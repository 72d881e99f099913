# src/taskline/utils/dates.py

"""
Due-date text helpers.

normalize_due_string() is the only preprocessing applied to user-typed due
expressions before they go to the remote resolver. It expands a fixed table of
abbreviations and tidies whitespace; it never tries to parse dates itself.
"""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta

NO_DATE = "no date"

DUE_ABBREVIATIONS: dict[str, str] = {
    "tmrw": "tomorrow",
    "tmr": "tomorrow",
    "tom": "tomorrow",
    "tmw": "tomorrow",
    "tod": "today",
    "tdy": "today",
    "yday": "yesterday",
    "yest": "yesterday",
    "mon": "monday",
    "tue": "tuesday",
    "tues": "tuesday",
    "wed": "wednesday",
    "thu": "thursday",
    "thur": "thursday",
    "thurs": "thursday",
    "fri": "friday",
    "sat": "saturday",
    "sun": "sunday",
}

_WHITESPACE_RE = re.compile(r"\s+")
# Whole-word tokens only: "3|pm" or "sunday" must never match "sun".
_WORD_RE = re.compile(r"(?<![\w|])[A-Za-z]+(?![\w|])")

_WEEKDAY_NAMES = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")


def _expand_token(match: re.Match[str]) -> str:
    token = match.group(0)
    return DUE_ABBREVIATIONS.get(token.lower(), token)


def normalize_due_string(text: str) -> str:
    """
    Canonicalize a user-typed due expression.

    - trims, and whitespace-only input becomes ""
    - expands known abbreviations case-insensitively, whole words only
      ("next fri" -> "next friday"); other words keep their casing
    - collapses whitespace runs to a single space

    Returns "" for empty input; callers map that to NO_DATE.
    """
    trimmed = text.strip()
    if not trimmed:
        return ""
    expanded = _WORD_RE.sub(_expand_token, trimmed)
    return _WHITESPACE_RE.sub(" ", expanded)


def format_ymd(d: date) -> str:
    return d.strftime("%Y-%m-%d")


def next_weekday(d: date, weekday: int) -> date:
    """Next date strictly after `d` falling on `weekday` (0=Monday); same weekday -> +7 days."""
    days_ahead = (weekday - d.weekday()) % 7
    if days_ahead == 0:
        days_ahead = 7
    return d + timedelta(days=days_ahead)


def format_today() -> str:
    return format_ymd(date.today())


def format_date_with_offset(days: int) -> str:
    return format_ymd(date.today() + timedelta(days=days))


def format_human_date(ymd: str, *, today: date | None = None) -> str:
    if today is None:
        today = date.today()
    try:
        d = date.fromisoformat(ymd[:10])
    except ValueError:
        return ymd

    delta = (d - today).days
    if delta == 0:
        return "today"
    if delta == 1:
        return "tomorrow"
    if delta == -1:
        return "yesterday"
    if 1 < delta < 7:
        return _WEEKDAY_NAMES[d.weekday()]
    if d.year == today.year:
        return d.strftime("%b %d")
    return d.strftime("%b %d %Y")


def format_human_datetime(value: str, *, today: date | None = None) -> str:
    try:
        dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return value
    return f"{format_human_date(format_ymd(dt.date()), today=today)} at {dt.strftime('%H:%M')}"
