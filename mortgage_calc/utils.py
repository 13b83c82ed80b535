"""Utility functions for the mortgage calculator.

This module provides helpers for parsing user input into Python data types and
for handling dates: adding months, reading start dates given as ``YYYY-MM`` or
``YYYY-MM-DD`` and formatting/parsing the ``Mon YYYY`` labels used in exports.
"""

from __future__ import annotations

import calendar
from datetime import date, datetime
from decimal import Decimal, InvalidOperation, getcontext

getcontext().prec = 28  # increase decimal precision to avoid rounding errors

MONTH_LABEL_FORMAT = "%b %Y"


def parse_start_date(value: str) -> date:
    """Parse a ``YYYY-MM-DD`` or ``YYYY-MM`` string into a ``date``.

    A missing day component defaults to the first of the month.

    Raises
    ------
    ValueError
        If the string is not a valid date.
    """
    parts = value.strip().split("-")
    try:
        if len(parts) not in (2, 3):
            raise ValueError
        year = int(parts[0])
        month = int(parts[1])
        day = int(parts[2]) if len(parts) == 3 else 1
        return date(year, month, day)
    except ValueError as exc:
        raise ValueError(f"Invalid date string: {value}") from exc


def add_months(dt: date, months: int) -> date:
    """Return a new date a number of months after ``dt``.

    The day of the month is clamped to the last valid day if needed (e.g.,
    adding one month to Jan 31 yields Feb 28 or 29).
    """
    year = dt.year + (dt.month - 1 + months) // 12
    month = (dt.month - 1 + months) % 12 + 1
    day = min(dt.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def format_month(dt: date) -> str:
    """Format a date as ``Mon YYYY`` (``Feb 2025``)."""
    return dt.strftime(MONTH_LABEL_FORMAT)


def parse_month(label: str) -> date:
    """Inverse of :func:`format_month`; returns the first of the month."""
    try:
        return datetime.strptime(label.strip(), MONTH_LABEL_FORMAT).date()
    except ValueError as exc:
        raise ValueError(f"Invalid month label: {label}") from exc


def decimal_from_str(value: str) -> Decimal:
    """Convert a numeric string into a ``Decimal``.

    The function strips any commas and handles both integer and float-like
    strings. It raises ``ValueError`` if conversion fails or the value is not
    finite (``nan``, ``inf``).
    """
    try:
        cleaned = str(value).replace(",", "").strip()
        result = Decimal(cleaned)
    except InvalidOperation as exc:
        raise ValueError(f"Invalid numeric value: {value}") from exc
    if not result.is_finite():
        raise ValueError(f"Invalid numeric value: {value}")
    return result


def parse_amount(value: str) -> Decimal:
    """Parse a money amount with optional ``k``/``m`` suffixes.

    ``"280k"`` is 280 000, ``"1.2m"`` is 1 200 000 and ``"280,000"`` is
    accepted as well.
    """
    text = str(value).strip().lower().replace(",", "")
    factor = Decimal(1)
    if text.endswith("k"):
        factor = Decimal(1_000)
        text = text[:-1]
    elif text.endswith("m"):
        factor = Decimal(1_000_000)
        text = text[:-1]
    return decimal_from_str(text) * factor
