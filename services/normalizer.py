"""
Field normalization shared by every row layout.
Each helper turns an optional form value into the exact string that lands in a sheet cell.
"""
from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any, Optional
from zoneinfo import ZoneInfo

DEFAULT_TIMEZONE = "America/New_York"
# es-ES locale rendering with two-digit fields: "16/10/2026, 14:05:09"
TIMESTAMP_FORMAT = "%d/%m/%Y, %H:%M:%S"
DATE_FORMAT = "%d/%m/%Y"
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_CURRENCY_CHARS = re.compile(r"[$,]")
# A comma followed by one or more further commas with only whitespace between them.
_EMPTY_SEGMENTS = re.compile(r",(?:\s*,)+\s*")
_TRAILING_SEPARATOR = re.compile(r",\s*$")


def cell(value: Any) -> Any:
    """Render an absent value as an empty cell."""
    return "" if value is None else value


def clean_currency(value: Any) -> Any:
    """Strip "$" and "," from a currency string; non-strings are returned unchanged."""
    if not isinstance(value, str):
        return value
    return _CURRENCY_CHARS.sub("", value).strip()


def currency_cell(value: Any) -> Any:
    cleaned = clean_currency(value)
    return "" if cleaned is None else cleaned


def compose_address(
    po_box: Optional[str] = None,
    street: Optional[str] = None,
    unit: Optional[str] = None,
    county: Optional[str] = None,
    city: Optional[str] = None,
    state: Optional[str] = None,
    postal_code: Optional[str] = None,
) -> str:
    """
    Single-cell postal address.
    A PO box wins over every other part. Otherwise the parts are joined with ", ",
    runs of empty segments collapse to one separator and a trailing separator is removed.
    """
    if po_box:
        return f"PO Box: {po_box}"
    joined = ", ".join(p or "" for p in (street, unit, county, city, state, postal_code))
    joined = _EMPTY_SEGMENTS.sub(", ", joined)
    joined = _TRAILING_SEPARATOR.sub("", joined)
    return joined.strip()


def _now(now: Optional[datetime], tz_name: str) -> datetime:
    tz = ZoneInfo(tz_name)
    if now is None:
        return datetime.now(tz)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(tz)


def format_timestamp(now: Optional[datetime] = None, tz_name: str = DEFAULT_TIMEZONE) -> str:
    """Audit timestamp for display. Not sortable as text; use parse_timestamp to order."""
    return _now(now, tz_name).strftime(TIMESTAMP_FORMAT)


def format_date(now: Optional[datetime] = None, tz_name: str = DEFAULT_TIMEZONE) -> str:
    return _now(now, tz_name).strftime(DATE_FORMAT)


def parse_timestamp(value: Any, tz_name: str = DEFAULT_TIMEZONE) -> datetime:
    """Inverse of format_timestamp (ISO-8601 also accepted). Unparsable input maps to the epoch."""
    if not isinstance(value, str) or not value.strip():
        return EPOCH
    text = value.strip()
    parsed: Optional[datetime] = None
    for fmt in (TIMESTAMP_FORMAT, "%d/%m/%Y %H:%M:%S", DATE_FORMAT):
        try:
            parsed = datetime.strptime(text, fmt)
            break
        except ValueError:
            continue
    if parsed is None:
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return EPOCH
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=ZoneInfo(tz_name))
    return parsed
