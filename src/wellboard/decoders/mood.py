"""Mood document decoder.

A mood document is kept only if it carries a non-null numeric score and
a parseable date.  The score must be a whole number in 1..10; numeric
strings such as ``"7"`` are accepted.
"""

from __future__ import annotations

from typing import Any

from wellboard.decoders.base import (
    DecodeResult,
    as_mapping,
    coerce_number,
    parse_day,
    parse_enum,
)
from wellboard.records import MAX_MOOD_SCORE, MIN_MOOD_SCORE, MoodEntry, MoodLabel


class MoodDecoder:
    """Decode ``entries`` documents into :class:`MoodEntry`."""

    @staticmethod
    def decode(doc: Any) -> DecodeResult[MoodEntry]:
        data = as_mapping(doc)
        if data is None:
            return DecodeResult.dropped("not a document")

        raw_score = data.get("mood_score")
        if raw_score is None:
            return DecodeResult.dropped("missing mood_score")
        score = coerce_number(raw_score)
        if score is None:
            return DecodeResult.dropped(f"non-numeric mood_score {raw_score!r}")
        if score != int(score):
            return DecodeResult.dropped(f"fractional mood_score {raw_score!r}")
        if not MIN_MOOD_SCORE <= score <= MAX_MOOD_SCORE:
            return DecodeResult.dropped(f"mood_score {raw_score!r} out of range")

        day = parse_day(data.get("date"))
        if day is None:
            return DecodeResult.dropped(f"unparseable date {data.get('date')!r}")

        return DecodeResult.kept(MoodEntry(
            date=day,
            score=int(score),
            label=parse_enum(MoodLabel, data.get("mood_label")),
        ))
