"""Dashboard view aggregator.

Pulls the window-scoped results (KPIs, series) and the snapshot-scoped
results (heatmap, insight, sleep history) into a single
:class:`DashboardView` that is JSON-serializable.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import date
from typing import Any

from wellboard.analytics.heatmap import HeatmapGrid
from wellboard.analytics.kpi import KpiSet
from wellboard.analytics.series import ChartSeries, SleepHistory
from wellboard.analytics.window import FilteredView


@dataclass
class DashboardView:
    """Everything the dashboard shows for one (snapshot, window) pair."""

    as_of: str  # ISO date the view was computed for
    window_days: int
    filtered: FilteredView
    kpis: KpiSet
    series: ChartSeries
    heatmap: HeatmapGrid
    insight: str
    sleep_history: SleepHistory | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dict (JSON-friendly)."""
        return {
            "as_of": self.as_of,
            "window_days": self.window_days,
            "counts": {
                "mood": len(self.filtered.mood),
                "sleep": len(self.filtered.sleep),
                "exercise": len(self.filtered.exercise),
            },
            "kpis": {
                "avg_mood": self.kpis.avg_mood,
                "avg_sleep_hours": self.kpis.avg_sleep_hours,
                "total_exercise_hours": self.kpis.total_exercise_hours,
                "top_activity": self.kpis.top_activity,
            },
            "series": self.series.to_dict(),
            "heatmap": self.heatmap.to_dict(),
            "insight": self.insight,
            "sleep_history": self.sleep_history.to_dict() if self.sleep_history else None,
        }

    def to_json(self, indent: int = 2) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    def __repr__(self) -> str:
        return (
            f"DashboardView({self.as_of}, {self.window_days}d: "
            f"mood={self.kpis.avg_mood}, "
            f"sleep={self.kpis.avg_sleep_hours}h, "
            f"exercise={self.kpis.total_exercise_hours}h)"
        )


def build_dashboard_view(
    day: date | str,
    filtered: FilteredView,
    kpis: KpiSet,
    series: ChartSeries,
    heatmap: HeatmapGrid,
    insight: str,
    sleep_history: SleepHistory | None = None,
) -> DashboardView:
    """Assemble a dashboard view from individual analytics results.

    Args:
        day: The date the view was computed for.
        filtered: Window-restricted entries.
        kpis: KPIs for the window.
        series: Chart series for the window.
        heatmap: Current-month heatmap.
        insight: Weekly insight message.
        sleep_history: Optional recent sleep history.

    Returns:
        A populated DashboardView.
    """
    return DashboardView(
        as_of=day if isinstance(day, str) else day.isoformat(),
        window_days=filtered.window_days,
        filtered=filtered,
        kpis=kpis,
        series=series,
        heatmap=heatmap,
        insight=insight,
        sleep_history=sleep_history,
    )
