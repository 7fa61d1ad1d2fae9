"""Shared pieces for the per-category document decoders.

Documents come from a schemaless store and older app versions wrote
them with different shapes, so every decoder is a validating parse: it
returns a :class:`DecodeResult` holding either the typed entry or the
reason the document was dropped, and never raises.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class DecodeResult(Generic[T]):
    """Outcome of decoding one raw document."""

    entry: T | None = None
    reason: str | None = None  # drop reason when entry is None

    @property
    def ok(self) -> bool:
        return self.entry is not None

    @classmethod
    def kept(cls, entry: T) -> "DecodeResult[T]":
        return cls(entry=entry)

    @classmethod
    def dropped(cls, reason: str) -> "DecodeResult[T]":
        return cls(reason=reason)


def as_mapping(doc: Any) -> Mapping | None:
    """Return *doc* if it is a mapping, else None."""
    return doc if isinstance(doc, Mapping) else None


def is_number(value: Any) -> bool:
    """True for finite ints/floats.  Booleans are not numbers here."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def coerce_number(value: Any) -> float | None:
    """Coerce numbers and numeric strings to float; None if impossible."""
    if is_number(value):
        return float(value)
    if isinstance(value, str):
        try:
            parsed = float(value.strip())
        except ValueError:
            return None
        return parsed if math.isfinite(parsed) else None
    return None


def _to_local_naive(value: datetime) -> datetime:
    """Aware datetimes are shifted to local time; naive ones pass through."""
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


def _parse_iso(text: str) -> datetime | None:
    text = text.strip()
    if not text:
        return None
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.combine(date.fromisoformat(text[:10]), datetime.min.time())
    except ValueError:
        return None


def parse_instant(value: Any) -> datetime | None:
    """Resolve a stored timestamp to a local naive datetime.

    Accepts datetimes, dates (midnight), ISO-8601 strings, epoch seconds,
    and server-timestamp objects exposing ``to_datetime()``.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return _to_local_naive(value)
    if isinstance(value, date):
        return datetime.combine(value, datetime.min.time())
    if is_number(value):
        try:
            return datetime.fromtimestamp(value)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str):
        parsed = _parse_iso(value)
        return _to_local_naive(parsed) if parsed is not None else None
    to_datetime = getattr(value, "to_datetime", None)
    if callable(to_datetime):
        try:
            resolved = to_datetime()
        except Exception:  # foreign timestamp type; treat as unresolvable
            return None
        if isinstance(resolved, datetime):
            return _to_local_naive(resolved)
    return None


def parse_day(value: Any) -> date | None:
    """Resolve a stored calendar day.

    Date-only strings (``"2026-10-19"``) are taken literally, without any
    timezone shift.
    """
    if isinstance(value, datetime):
        return _to_local_naive(value).date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and len(value.strip()) == 10:
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            return None
    instant = parse_instant(value)
    return instant.date() if instant is not None else None


def parse_enum(enum_cls: type, value: Any) -> Any:
    """Look up *value* in *enum_cls*; None for anything unknown."""
    if value is None:
        return None
    try:
        return enum_cls(value)
    except ValueError:
        return None
