"""Value coercion shared by the built-in rules.

Rules never raise on odd input: values that cannot be coerced produce None
(or NaN for numbers), which makes every comparison against them fail.
"""

import io
import math
from datetime import date, datetime
from typing import Any

from dateutil import parser as date_parser


def as_text(value: Any) -> str | None:
    """String form of a value, or None when there is no value at all."""
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join("" if item is None else str(as_text(item)) for item in value)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def as_number(value: Any) -> float:
    """Numeric form of a value; NaN when it is not a number.

    Booleans count as 0/1. Empty and whitespace-only strings are NaN.
    """
    if value is None:
        return math.nan
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        return float(value)
    try:
        text = str(value).strip()
        if not text:
            return math.nan
        return float(text)
    except (TypeError, ValueError):
        return math.nan


def as_date(value: Any) -> date | None:
    """Calendar date of a value; None when it is not a date.

    ``datetime`` values are truncated to their date. Strings are parsed with
    dateutil, which accepts ISO and most human formats.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return date_parser.parse(value).date()
    except (ValueError, OverflowError):
        return None


def count(value: Any) -> int | None:
    """Number of items in a collection value; None for unsized values."""
    if value is None or isinstance(value, (str, bytes)):
        return None
    try:
        return len(value)
    except TypeError:
        return None


def is_file(value: Any) -> bool:
    """True for open file objects and upload wrappers exposing ``read()``."""
    if isinstance(value, io.IOBase):
        return True
    return not isinstance(value, (str, bytes)) and callable(getattr(value, "read", None))


def is_file_list(value: Any) -> bool:
    """True for a non-empty list or tuple made only of files."""
    return isinstance(value, (list, tuple)) and bool(value) and all(
        is_file(item) for item in value
    )
