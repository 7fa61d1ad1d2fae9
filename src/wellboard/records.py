"""Log categories and the typed entries the engine works on.

Raw documents are written by the logging forms with these field names:

    mood      {date, mood_score, mood_label}
    sleep     {timestamp, duration_minutes, quality}
    exercise  {timestamp, activity_type, duration_minutes, quick_note}

The store orders each category newest first by ``Category.order_field``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum


class Category(str, Enum):
    """The three raw log categories."""

    MOOD = "mood"
    SLEEP = "sleep"
    EXERCISE = "exercise"

    @property
    def collection(self) -> str:
        """Collection name used by the logging forms."""
        return _COLLECTIONS[self]

    @property
    def order_field(self) -> str:
        """Field the store sorts on (descending)."""
        return "date" if self is Category.MOOD else "timestamp"


_COLLECTIONS = {
    Category.MOOD: "entries",
    Category.SLEEP: "sleepLogs",
    Category.EXERCISE: "exerciseLogs",
}


class MoodLabel(str, Enum):
    """Display label attached to a mood score."""

    AWFUL = "Awful"
    BAD = "Bad"
    OKAY = "Okay"
    GOOD = "Good"
    GREAT = "Great"


class SleepQuality(str, Enum):
    """Quality options offered by the sleep form."""

    EXCELLENT = "Excellent"
    GOOD = "Good"
    FAIR = "Fair"
    POOR = "Poor"


# Activity types offered by the exercise form.  The field itself is
# free-form; anything missing falls back to OTHER_ACTIVITY.
ACTIVITY_TYPES = ("Running", "Strength", "Yoga", "Walking", "Other")
OTHER_ACTIVITY = "Other"

MIN_MOOD_SCORE = 1
MAX_MOOD_SCORE = 10


@dataclass(frozen=True)
class MoodEntry:
    """A single mood check-in."""

    date: date
    score: int
    label: MoodLabel | None = None

    def __repr__(self) -> str:
        label = f", {self.label.value}" if self.label else ""
        return f"MoodEntry({self.date.isoformat()}: {self.score}/10{label})"


@dataclass(frozen=True)
class SleepEntry:
    """A night of sleep."""

    timestamp: datetime
    duration_minutes: float
    quality: SleepQuality | None = None

    @property
    def duration_hours(self) -> float:
        return self.duration_minutes / 60.0

    def __repr__(self) -> str:
        quality = f", {self.quality.value}" if self.quality else ""
        return (
            f"SleepEntry({self.timestamp:%Y-%m-%d %H:%M}: "
            f"{self.duration_minutes:.0f}min{quality})"
        )


@dataclass(frozen=True)
class ExerciseEntry:
    """A logged workout.

    ``timestamp`` is ``None`` when the raw document carried nothing
    resolvable; such entries never fall inside a time window.
    """

    timestamp: datetime | None
    activity_type: str
    duration_minutes: float
    note: str = ""

    def __repr__(self) -> str:
        when = f"{self.timestamp:%Y-%m-%d %H:%M}" if self.timestamp else "?"
        return f"ExerciseEntry({when}: {self.activity_type} {self.duration_minutes:.0f}min)"


@dataclass(frozen=True)
class Snapshot:
    """Full normalized, unfiltered copy of one user's three log categories.

    Each tuple keeps the store's ordering (newest first).
    """

    mood: tuple[MoodEntry, ...] = ()
    sleep: tuple[SleepEntry, ...] = ()
    exercise: tuple[ExerciseEntry, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not (self.mood or self.sleep or self.exercise)

    def __repr__(self) -> str:
        return (
            f"Snapshot(mood={len(self.mood)}, sleep={len(self.sleep)}, "
            f"exercise={len(self.exercise)})"
        )


EMPTY_SNAPSHOT = Snapshot()
