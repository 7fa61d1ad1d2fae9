"""Log normalizer: raw store documents -> typed entries.

Each category has a decoder whose ``decode`` returns a
:class:`~wellboard.decoders.base.DecodeResult`.  :func:`normalize` keeps
the successful entries in source order and silently drops the rest
(logged at DEBUG); a partially-invalid fetch never raises.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from wellboard.decoders.base import DecodeResult
from wellboard.decoders.exercise import ExerciseDecoder
from wellboard.decoders.mood import MoodDecoder
from wellboard.decoders.sleep import SleepDecoder
from wellboard.records import Category, Snapshot

logger = logging.getLogger(__name__)

DECODERS = {
    Category.MOOD: MoodDecoder,
    Category.SLEEP: SleepDecoder,
    Category.EXERCISE: ExerciseDecoder,
}


def decode_document(category: Category | str, doc: Any) -> DecodeResult:
    """Decode a single raw document of the given category."""
    return DECODERS[Category(category)].decode(doc)


def normalize(category: Category | str, docs: Iterable[Any]) -> list:
    """Decode a batch of raw documents, preserving source order."""
    category = Category(category)
    decoder = DECODERS[category]
    entries = []
    dropped = 0
    for index, doc in enumerate(docs or ()):
        result = decoder.decode(doc)
        if result.ok:
            entries.append(result.entry)
        else:
            dropped += 1
            logger.debug(f"Dropped {category.value} document #{index}: {result.reason}")
    if dropped:
        logger.info(f"Dropped {dropped} malformed {category.value} document(s), kept {len(entries)}")
    return entries


def normalize_snapshot(raw: Mapping[Category | str, Iterable[Any]]) -> Snapshot:
    """Normalize all three categories into a :class:`Snapshot`.

    Missing categories are treated as empty.
    """
    by_category = {Category(k): v for k, v in raw.items()}
    return Snapshot(
        mood=tuple(normalize(Category.MOOD, by_category.get(Category.MOOD, ()))),
        sleep=tuple(normalize(Category.SLEEP, by_category.get(Category.SLEEP, ()))),
        exercise=tuple(normalize(Category.EXERCISE, by_category.get(Category.EXERCISE, ()))),
    )


__all__ = [
    "DECODERS",
    "DecodeResult",
    "MoodDecoder",
    "SleepDecoder",
    "ExerciseDecoder",
    "decode_document",
    "normalize",
    "normalize_snapshot",
]
