"""Shared fixtures and helpers for the wellboard test suite."""

from __future__ import annotations

import json
from datetime import date, datetime, timedelta
from pathlib import Path

import pytest

from wellboard.records import ExerciseEntry, MoodEntry, SleepEntry, Snapshot

# Monday.  October 2026 starts on a Thursday and has 31 days.
TODAY = date(2026, 10, 19)


def days_ago(n: int, today: date = TODAY) -> date:
    return today - timedelta(days=n)


def at(day: date, hour: int = 8, minute: int = 0) -> datetime:
    return datetime(day.year, day.month, day.day, hour, minute)


# ---------------------------------------------------------------------------
# Raw document builders (field names as written by the logging forms)
# ---------------------------------------------------------------------------


def mood_doc(day: date | str, score=7, label: str | None = None) -> dict:
    doc = {"date": day.isoformat() if isinstance(day, date) else day, "mood_score": score}
    if label is not None:
        doc["mood_label"] = label
    return doc


def sleep_doc(timestamp, minutes=480, quality: str = "Good") -> dict:
    return {"timestamp": timestamp, "duration_minutes": minutes, "quality": quality}


def exercise_doc(timestamp, activity="Running", minutes=30, note: str = "") -> dict:
    return {
        "timestamp": timestamp,
        "activity_type": activity,
        "duration_minutes": minutes,
        "quick_note": note,
    }


# ---------------------------------------------------------------------------
# Typed entry builders
# ---------------------------------------------------------------------------


def mood(n_days_ago: int, score: int) -> MoodEntry:
    return MoodEntry(date=days_ago(n_days_ago), score=score)


def sleep(n_days_ago: int, minutes: float) -> SleepEntry:
    return SleepEntry(timestamp=at(days_ago(n_days_ago), 7), duration_minutes=minutes)


def exercise(n_days_ago: int, activity: str, minutes: float) -> ExerciseEntry:
    return ExerciseEntry(timestamp=at(days_ago(n_days_ago), 18), activity_type=activity,
                         duration_minutes=minutes)


# ---------------------------------------------------------------------------
# JSONL capture helpers
# ---------------------------------------------------------------------------


def write_capture(path: Path, records: list[tuple[str, dict]]) -> Path:
    """Write (category, document) pairs as a capture file."""
    with open(path, "w") as f:
        for category, doc in records:
            f.write(json.dumps({
                "category": category,
                "captured_at": "2026-10-19T12:00:00+00:00",
                "document": doc,
            }) + "\n")
    return path


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def sample_snapshot() -> Snapshot:
    """A few weeks of logs, newest first like the store returns them."""
    return Snapshot(
        mood=(mood(0, 9), mood(1, 9), mood(2, 8), mood(10, 4), mood(40, 2)),
        sleep=(sleep(0, 420), sleep(1, 480), sleep(20, 300), sleep(60, 600)),
        exercise=(
            exercise(0, "Running", 30),
            exercise(3, "Running", 20),
            exercise(5, "Yoga", 15),
            exercise(25, "Strength", 45),
            exercise(80, "Walking", 60),
        ),
    )
