"""Exercise document decoder.

Deliberately permissive: any non-null document is kept.  Missing or bad
fields are coerced instead of dropping the workout:

    activity_type     missing/blank  -> "Other"
    duration_minutes  non-numeric/<0 -> 0
    timestamp         unresolvable   -> None (outside every window)
"""

from __future__ import annotations

from typing import Any

from wellboard.decoders.base import DecodeResult, as_mapping, coerce_number, parse_instant
from wellboard.records import OTHER_ACTIVITY, ExerciseEntry


class ExerciseDecoder:
    """Decode ``exerciseLogs`` documents into :class:`ExerciseEntry`."""

    @staticmethod
    def decode(doc: Any) -> DecodeResult[ExerciseEntry]:
        data = as_mapping(doc)
        if data is None:
            return DecodeResult.dropped("not a document")

        activity = data.get("activity_type")
        activity = str(activity).strip() if activity is not None else ""

        duration = coerce_number(data.get("duration_minutes"))
        if duration is None or duration < 0:
            duration = 0.0

        note = data.get("quick_note")

        return DecodeResult.kept(ExerciseEntry(
            timestamp=parse_instant(data.get("timestamp")),
            activity_type=activity or OTHER_ACTIVITY,
            duration_minutes=duration,
            note=str(note) if note is not None else "",
        ))
