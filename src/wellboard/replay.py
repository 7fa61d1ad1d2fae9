"""Replay a JSONL capture through the analytics engine offline."""

from __future__ import annotations

import json
import logging
from datetime import date
from pathlib import Path

from wellboard.analytics.pipeline import recompute
from wellboard.analytics.summary import DashboardView
from wellboard.config import DEFAULT_WINDOW_DAYS
from wellboard.decoders import normalize_snapshot
from wellboard.records import Category, Snapshot

logger = logging.getLogger(__name__)


def load_capture(capture_path: str | Path) -> dict[Category, list]:
    """Read a capture file into raw documents per category, in file order.

    Blank lines, invalid JSON and unknown categories are skipped.

    Raises:
        FileNotFoundError: if the capture does not exist.
    """
    path = Path(capture_path)
    if not path.exists():
        raise FileNotFoundError(f"Capture not found: {path}")

    raw: dict[Category, list] = {c: [] for c in Category}
    skipped = 0

    with open(path, encoding="utf-8") as f:
        for line_num, line in enumerate(f, 1):
            line = line.strip()
            if not line:
                continue
            try:
                entry = json.loads(line)
                category = Category(entry["category"])
            except (json.JSONDecodeError, KeyError, TypeError, ValueError):
                logger.debug(f"[line {line_num}] Not a capture record, skipping")
                skipped += 1
                continue
            raw[category].append(entry.get("document"))

    total = sum(len(docs) for docs in raw.values())
    logger.info(f"Loaded {total} documents from {path.name} ({skipped} lines skipped)")
    return raw


def replay_snapshot(capture_path: str | Path) -> Snapshot:
    """Load and normalize a capture file."""
    return normalize_snapshot(load_capture(capture_path))


def replay_file(
    capture_path: str | Path,
    window_days: int = DEFAULT_WINDOW_DAYS,
    today: date | None = None,
    output_path: str | None = None,
) -> DashboardView:
    """Replay a capture file and compute its dashboard view.

    Args:
        capture_path: Path to the .jsonl capture file.
        window_days: Trailing window for KPIs and series.
        today: Reference day (default: today).
        output_path: Optional path to write the view as JSON.

    Returns:
        The computed DashboardView.
    """
    snapshot = replay_snapshot(capture_path)
    view = recompute(snapshot, window_days, today)

    if output_path:
        with open(output_path, "w", encoding="utf-8") as out:
            out.write(view.to_json())
        logger.info(f"Output written to {output_path}")

    return view
