"""
Date helpers for contact birthdays.

Birthdays arrive in whatever shape the client typed them ("01/12/1991",
"January 12, 1991", "1991-01-12") and are stored as plain dates.  The
upcoming-birthdays view only looks at month and day, so the birth year
never excludes a contact.
"""
from datetime import date, datetime, timedelta
from typing import Iterable, Optional

from dateutil import parser as date_parser

from app.core.config import settings


def parse_birthday(
    value: str,
    formats: Optional[Iterable[str]] = None,
    free_text: Optional[bool] = None,
) -> Optional[date]:
    """Parse a birthday string, returning None when it is not a date.

    The configured ``strptime`` formats are tried first, in order.  When
    none matches and free-text parsing is enabled, ``dateutil`` gets a
    go; a string it has to invent parts for (e.g. "12") is rejected.
    """
    text = value.strip()
    if not text:
        return None

    for fmt in formats if formats is not None else settings.BIRTHDAY_INPUT_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue

    if not (settings.BIRTHDAY_FREE_TEXT if free_text is None else free_text):
        return None

    # Two different defaults: a component dateutil filled in on its own
    # shows up as a disagreement between the two results.
    try:
        first = date_parser.parse(text, default=datetime(2000, 1, 1))
        second = date_parser.parse(text, default=datetime(2004, 2, 2))
    except (ValueError, OverflowError):
        return None
    if first.date() != second.date():
        return None
    return first.date()


def birthday_in_year(birthday: date, year: int) -> date:
    """The anniversary of ``birthday`` in ``year``; Feb 29 becomes Feb 28 off leap years."""
    try:
        return birthday.replace(year=year)
    except ValueError:
        return date(year, 2, 28)


def next_birthday(birthday: date, today: date) -> date:
    upcoming = birthday_in_year(birthday, today.year)
    if upcoming < today:
        upcoming = birthday_in_year(birthday, today.year + 1)
    return upcoming


def days_until_birthday(birthday: date, today: date) -> int:
    return (next_birthday(birthday, today) - today).days


def in_birthday_window(birthday: date, today: date, window_days: int) -> bool:
    """True when the next birthday falls between ``today`` and ``today + window_days``.

    Works by distance to the next occurrence, so a window running from
    Dec 28 into early January matches both December and January birthdays.
    """
    if window_days < 0:
        return False
    return next_birthday(birthday, today) <= today + timedelta(days=window_days)
