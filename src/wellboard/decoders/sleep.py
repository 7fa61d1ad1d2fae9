"""Sleep document decoder.

Kept only with a resolvable timestamp and a numeric, non-negative
``duration_minutes``.  Strings are not coerced here: the sleep form has
always written a number, so a string means a corrupted document.
"""

from __future__ import annotations

from typing import Any

from wellboard.decoders.base import DecodeResult, as_mapping, is_number, parse_enum, parse_instant
from wellboard.records import SleepEntry, SleepQuality


class SleepDecoder:
    """Decode ``sleepLogs`` documents into :class:`SleepEntry`."""

    @staticmethod
    def decode(doc: Any) -> DecodeResult[SleepEntry]:
        data = as_mapping(doc)
        if data is None:
            return DecodeResult.dropped("not a document")

        timestamp = parse_instant(data.get("timestamp"))
        if timestamp is None:
            return DecodeResult.dropped(f"unresolvable timestamp {data.get('timestamp')!r}")

        duration = data.get("duration_minutes")
        if not is_number(duration):
            return DecodeResult.dropped(f"non-numeric duration_minutes {duration!r}")
        if duration < 0:
            return DecodeResult.dropped(f"negative duration_minutes {duration!r}")

        return DecodeResult.kept(SleepEntry(
            timestamp=timestamp,
            duration_minutes=float(duration),
            quality=parse_enum(SleepQuality, data.get("quality")),
        ))
