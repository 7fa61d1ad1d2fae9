"""Trailing time-window filter.

``cutoff = start_of_day(today) - window_days``.  Entries whose date
(mood) or timestamp (sleep/exercise) is at or after the cutoff are kept;
the comparison is inclusive of the cutoff instant.  Pure: the same
inputs always produce the same output.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable, TypeVar

from wellboard.records import ExerciseEntry, MoodEntry, SleepEntry, Snapshot

E = TypeVar("E", MoodEntry, SleepEntry, ExerciseEntry)


@dataclass(frozen=True)
class FilteredView:
    """The three entry sets restricted to one window."""

    window_days: int
    cutoff: datetime
    mood: tuple[MoodEntry, ...] = ()
    sleep: tuple[SleepEntry, ...] = ()
    exercise: tuple[ExerciseEntry, ...] = ()

    def __repr__(self) -> str:
        return (
            f"FilteredView({self.window_days}d since {self.cutoff:%Y-%m-%d}: "
            f"mood={len(self.mood)}, sleep={len(self.sleep)}, "
            f"exercise={len(self.exercise)})"
        )


def validate_window(window_days: int) -> int:
    """Return *window_days* if it is a positive whole number of days."""
    if isinstance(window_days, bool) or not isinstance(window_days, int):
        raise ValueError(f"window must be a whole number of days, got {window_days!r}")
    if window_days <= 0:
        raise ValueError(f"window must be positive, got {window_days}")
    return window_days


def window_cutoff(window_days: int, today: date | None = None) -> datetime:
    """Start of the first day inside a *window_days* trailing window."""
    validate_window(window_days)
    today = today or date.today()
    return datetime.combine(today, datetime.min.time()) - timedelta(days=window_days)


def entry_instant(entry: MoodEntry | SleepEntry | ExerciseEntry) -> datetime | None:
    """The instant an entry is placed at on the time axis."""
    if isinstance(entry, MoodEntry):
        return datetime.combine(entry.date, datetime.min.time())
    return entry.timestamp


def filter_entries(entries: Iterable[E], cutoff: datetime) -> list[E]:
    """Keep entries at or after *cutoff*, in their original order."""
    kept: list[E] = []
    for entry in entries:
        instant = entry_instant(entry)
        if instant is not None and instant >= cutoff:
            kept.append(entry)
    return kept


def filter_window(
    entries: Iterable[E],
    window_days: int,
    today: date | None = None,
) -> list[E]:
    """Restrict one category's entries to a trailing window."""
    return filter_entries(entries, window_cutoff(window_days, today))


def filter_snapshot(
    snapshot: Snapshot,
    window_days: int,
    today: date | None = None,
) -> FilteredView:
    """Restrict all three categories of a snapshot to the same window."""
    cutoff = window_cutoff(window_days, today)
    return FilteredView(
        window_days=window_days,
        cutoff=cutoff,
        mood=tuple(filter_entries(snapshot.mood, cutoff)),
        sleep=tuple(filter_entries(snapshot.sleep, cutoff)),
        exercise=tuple(filter_entries(snapshot.exercise, cutoff)),
    )
