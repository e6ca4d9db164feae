"""Miscellaneous helper functions."""

from __future__ import annotations

import datetime as dt
import re
from decimal import Decimal
from typing import Optional

PURCHASE_DATE_FORMAT = "%Y-%m-%d"
PURCHASE_TIME_FORMAT = "%H:%M"

# Plain decimal literals only: no exponents, separators or padding.
_AMOUNT_RE = re.compile(r"[+-]?\d+(\.\d+)?", re.ASCII)
MAX_AMOUNT_LENGTH = 64
_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)
_TIME_RE = re.compile(r"\d{2}:\d{2}", re.ASCII)


def parse_amount(value: str | None) -> Optional[Decimal]:
    """Parse a monetary amount such as ``"35.35"`` into a :class:`Decimal`.

    Amounts are kept as decimals rather than floats so that checks like
    "is this a multiple of 0.25" are exact.  Only plain literals of at most
    ``MAX_AMOUNT_LENGTH`` characters are accepted; anything else (exponent
    notation, ``NaN``, ``1_000``, surrounding whitespace) returns ``None``.
    """
    if value is None or len(value) > MAX_AMOUNT_LENGTH:
        return None
    if not _AMOUNT_RE.fullmatch(value):
        return None
    return Decimal(value)


def parse_purchase_date(value: str | None) -> Optional[dt.date]:
    """Parse a ``YYYY-MM-DD`` date, returning ``None`` if it is not one."""
    if not value or not _DATE_RE.fullmatch(value):
        return None
    try:
        return dt.datetime.strptime(value, PURCHASE_DATE_FORMAT).date()
    except ValueError:
        return None


def parse_purchase_time(value: str | None) -> Optional[dt.time]:
    """Parse a 24-hour ``HH:MM`` time, returning ``None`` if it is not one."""
    if not value or not _TIME_RE.fullmatch(value):
        return None
    try:
        return dt.datetime.strptime(value, PURCHASE_TIME_FORMAT).time()
    except ValueError:
        return None
