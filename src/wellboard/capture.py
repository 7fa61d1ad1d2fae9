"""Capture a user's raw log documents to a JSONL file.

Each line holds one document exactly as the store returned it:

    {"category": "sleep", "captured_at": "...", "document": {...}}

Captures can be replayed offline with :mod:`wellboard.replay`.
"""

from __future__ import annotations

import json
import logging
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any

from wellboard.config import DEFAULT_FETCH_LIMIT
from wellboard.orchestrator import FETCH_ORDER
from wellboard.store.base import LogStore

logger = logging.getLogger(__name__)

CAPTURES_DIR = Path("captures")


def _json_default(value: Any) -> str:
    """Serialize datetimes as ISO strings and anything else (ObjectId...) as str."""
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def capture_line(category: str, document: dict, captured_at: str) -> str:
    """Encode one capture record as a JSON line."""
    record = {
        "category": category,
        "captured_at": captured_at,
        "document": document,
    }
    return json.dumps(record, default=_json_default)


async def capture(
    store: LogStore,
    user_id: str,
    output: str | None = None,
    limit: int = DEFAULT_FETCH_LIMIT,
) -> tuple[Path, int]:
    """Fetch every category for *user_id* and append them to a capture file.

    Args:
        store: Log store to read from.
        user_id: Whose logs to capture.
        output: Output file path. If None, auto-generates in captures/.
        limit: Most-recent documents per category.

    Returns:
        The capture path and the number of documents written.

    Raises:
        StoreUnavailable: if any category cannot be read.  Nothing is
            written in that case.
    """
    batches = []
    for category in FETCH_ORDER:
        docs = await store.fetch(category, user_id, limit)
        batches.append((category, docs))

    if output is None:
        ts = datetime.now().strftime("%Y%m%d_%H%M%S")
        output = str(CAPTURES_DIR / f"capture_{user_id}_{ts}.jsonl")

    outpath = Path(output)
    outpath.parent.mkdir(parents=True, exist_ok=True)
    now = datetime.now(timezone.utc).isoformat()
    count = 0

    with open(outpath, "a", encoding="utf-8") as f:
        for category, docs in batches:
            for doc in docs:
                f.write(capture_line(category.value, doc, now) + "\n")
                count += 1

    logger.info(f"Capture complete. {count} documents -> {outpath}")
    return outpath, count
