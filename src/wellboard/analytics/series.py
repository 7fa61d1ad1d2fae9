"""Chart-ready label/value series.

Every series keeps the order of the entries it was given (the store's
newest-first order); nothing is re-sorted.  Units differ on purpose:

    mood trend        raw score
    sleep trend       hours, one decimal
    activity summary  minutes (not hours, unlike the KPI total)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Sequence

from wellboard.analytics.window import FilteredView
from wellboard.records import ExerciseEntry, MoodEntry, SleepEntry

# Entries shown in the sleep history chart.
SLEEP_HISTORY_LIMIT = 30


def format_day(value: date | datetime) -> str:
    """Short month/day/year label, e.g. ``10/19/2026``."""
    return f"{value.month}/{value.day}/{value.year}"


def format_duration(minutes: float) -> str:
    """Whole hours and leftover minutes, e.g. ``7h 30m``."""
    total = int(minutes)
    return f"{total // 60}h {total % 60}m"


@dataclass
class LabeledSeries:
    """Parallel label and value lists for one chart."""

    name: str
    unit: str
    labels: list[str] = field(default_factory=list)
    values: list[float] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.labels)

    def pairs(self) -> list[tuple[str, float]]:
        return list(zip(self.labels, self.values))

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "unit": self.unit,
            "labels": list(self.labels),
            "values": list(self.values),
        }


@dataclass
class ChartSeries:
    """The three dashboard series for one window."""

    mood_trend: LabeledSeries
    sleep_trend: LabeledSeries
    activity_summary: LabeledSeries

    def to_dict(self) -> dict[str, Any]:
        return {
            "mood_trend": self.mood_trend.to_dict(),
            "sleep_trend": self.sleep_trend.to_dict(),
            "activity_summary": self.activity_summary.to_dict(),
        }


@dataclass
class SleepHistoryItem:
    """One row of the sleep history list."""

    label: str
    duration_minutes: float
    display: str
    quality: str | None = None


@dataclass
class SleepHistory:
    """Recent sleep entries in chronological order."""

    chart: LabeledSeries
    items: list[SleepHistoryItem] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "chart": self.chart.to_dict(),
            "items": [
                {
                    "label": i.label,
                    "duration_minutes": i.duration_minutes,
                    "display": i.display,
                    "quality": i.quality,
                }
                for i in self.items
            ],
        }


def mood_trend(entries: Sequence[MoodEntry]) -> LabeledSeries:
    series = LabeledSeries(name="Mood Score", unit="/10")
    for e in entries:
        series.labels.append(format_day(e.date))
        series.values.append(e.score)
    return series


def sleep_trend(entries: Sequence[SleepEntry]) -> LabeledSeries:
    series = LabeledSeries(name="Sleep (hrs)", unit="hrs")
    for e in entries:
        series.labels.append(format_day(e.timestamp))
        series.values.append(round(e.duration_minutes / 60.0, 1))
    return series


def activity_summary(entries: Sequence[ExerciseEntry]) -> LabeledSeries:
    """Summed minutes per activity type, categories in first-seen order."""
    totals: dict[str, float] = {}
    for e in entries:
        totals[e.activity_type] = totals.get(e.activity_type, 0.0) + e.duration_minutes
    return LabeledSeries(
        name="Duration (minutes)",
        unit="min",
        labels=list(totals.keys()),
        values=list(totals.values()),
    )


def build_series(view: FilteredView) -> ChartSeries:
    """Build all three window series from a filtered view."""
    return ChartSeries(
        mood_trend=mood_trend(view.mood),
        sleep_trend=sleep_trend(view.sleep),
        activity_summary=activity_summary(view.exercise),
    )


def sleep_history(
    entries: Sequence[SleepEntry],
    limit: int = SLEEP_HISTORY_LIMIT,
) -> SleepHistory:
    """The most recent *limit* sleep entries, oldest first.

    Expects *entries* newest first, as the store returns them.  Durations
    stay in minutes for this chart.
    """
    recent = list(entries[:limit])
    recent.reverse()

    chart = LabeledSeries(name="Duration (minutes)", unit="min")
    items: list[SleepHistoryItem] = []
    for e in recent:
        label = format_day(e.timestamp)
        chart.labels.append(label)
        chart.values.append(e.duration_minutes)
        items.append(SleepHistoryItem(
            label=label,
            duration_minutes=e.duration_minutes,
            display=format_duration(e.duration_minutes),
            quality=e.quality.value if e.quality else None,
        ))
    return SleepHistory(chart=chart, items=items)
