# exercise_tracker/validation.py

import re
from datetime import date, datetime
from typing import Optional

from exercise_tracker.errors import InvalidDateFormat

# Syntactic check only: "2020-19-39" passes, parse_date() rejects it later.
DATE_RE = re.compile(r"[0-9]{4}-[0-1][0-9]-[0-3][0-9]")
INT_RE = re.compile(r"[0-9]+")


def is_valid_date(value: Optional[str]) -> bool:
    if not value or not isinstance(value, str):
        return False
    return DATE_RE.fullmatch(value) is not None


def is_valid_int(value: Optional[str]) -> bool:
    if not value or not isinstance(value, str):
        return False
    return INT_RE.fullmatch(value) is not None


def parse_date(value: str) -> date:
    """Parse a yyyy-mm-dd string that already passed is_valid_date()."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise InvalidDateFormat()


def to_calendar_string(value: date) -> str:
    # e.g. "Mon Jan 01 2020"
    return value.strftime("%a %b %d %Y")
