"""
Wire date codec.

Dates travel as {"__type": "Date", "iso": "2024-01-01T00:00:00.000Z"}.
Decoding also accepts the bare iso string (createdAt / updatedAt in object
payloads are sent that way).
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from kungfu import Result, Ok, Error

from parcel._types import ParseError

DATE_TYPE = "Date"
"""Value of the __type tag for dates."""

DATE_FORMAT = "yyyy-MM-dd'T'HH:mm:ss.SSS'Z'"

_ISO_RE = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})\.(\d{3})Z",
    re.ASCII,
)


# ═══════════════════════════════════════════════════════════════════════════════
# Formatting
# ═══════════════════════════════════════════════════════════════════════════════


def format_iso(value: datetime) -> str:
    """
    Render datetime in the wire format.

    Naive datetimes are taken as UTC, so they decode back as the aware
    UTC value of the same wall time. Sub-millisecond precision is dropped.
    Raises OverflowError when converting to UTC leaves the datetime range.
    """
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
        f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
        f".{value.microsecond // 1000:03d}Z"
    )


def parse_iso(text: str) -> Result[datetime, ParseError]:
    """Parse the wire format into an aware UTC datetime."""
    match = _ISO_RE.fullmatch(text)
    if match is None:
        return Error(ParseError.date_format(f"Expected {DATE_FORMAT}, got {text!r}"))

    year, month, day, hour, minute, second, millis = (int(g) for g in match.groups())
    try:
        return Ok(
            datetime(
                year, month, day, hour, minute, second,
                millis * 1000,
                tzinfo=timezone.utc,
            )
        )
    except ValueError as e:
        return Error(ParseError.date_format(f"Invalid date {text!r}: {e}"))


# ═══════════════════════════════════════════════════════════════════════════════
# Encode / Decode
# ═══════════════════════════════════════════════════════════════════════════════


def encode_date(value: datetime) -> dict[str, str]:
    """Always the tagged form."""
    return {"__type": DATE_TYPE, "iso": format_iso(value)}


def decode_date(value: Any) -> Result[datetime, ParseError]:
    """
    Decode a wire date.

    Tries the bare string first, then the tagged object's iso field.
    Anything else is a DATE_FORMAT error — never an exception.
    """
    if isinstance(value, str):
        return parse_iso(value)

    if isinstance(value, Mapping):
        tag = value.get("__type", DATE_TYPE)
        iso = value.get("iso")
        if tag == DATE_TYPE and isinstance(iso, str):
            return parse_iso(iso)

    return Error(ParseError.date_format(f"Not a date: {value!r}"))


# ═══════════════════════════════════════════════════════════════════════════════
# Date Strategy — installed process-wide via parcel.config
# ═══════════════════════════════════════════════════════════════════════════════

type DateEncoder = Callable[[datetime], Any]
type DateDecoder = Callable[[Any], Result[datetime, ParseError]]


@dataclass(frozen=True, slots=True)
class DateStrategy:
    """Both directions of the date codec, swapped together."""

    encode: DateEncoder
    decode: DateDecoder


WIRE_DATES = DateStrategy(encode=encode_date, decode=decode_date)


__all__ = (
    "DATE_TYPE",
    "DATE_FORMAT",
    "format_iso",
    "parse_iso",
    "encode_date",
    "decode_date",
    "DateEncoder",
    "DateDecoder",
    "DateStrategy",
    "WIRE_DATES",
)
