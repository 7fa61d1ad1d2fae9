"""Recompute pipeline: snapshot + window -> dashboard view.

Two halves, so callers can refresh only what changed:

* :func:`compute_window_view` -- Filter, KPI and Series.  Re-run on every
  window change.
* :func:`compute_snapshot_view` -- Heatmap, Insight and sleep history.
  Depend on the snapshot only, never on the window.

:func:`recompute` runs both.  Everything here is synchronous and pure.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from wellboard.analytics.heatmap import HeatmapGrid, build_heatmap
from wellboard.analytics.insight import weekly_insight
from wellboard.analytics.kpi import KpiSet, compute_kpis
from wellboard.analytics.series import ChartSeries, SleepHistory, build_series, sleep_history
from wellboard.analytics.summary import DashboardView, build_dashboard_view
from wellboard.analytics.window import FilteredView, filter_snapshot, validate_window
from wellboard.config import DEFAULT_WINDOW_DAYS
from wellboard.records import Snapshot


@dataclass(frozen=True)
class WindowView:
    """Window-dependent results."""

    filtered: FilteredView
    kpis: KpiSet
    series: ChartSeries


@dataclass(frozen=True)
class SnapshotView:
    """Window-independent results."""

    heatmap: HeatmapGrid
    insight: str
    sleep_history: SleepHistory


def compute_window_view(
    snapshot: Snapshot,
    window_days: int = DEFAULT_WINDOW_DAYS,
    today: date | None = None,
) -> WindowView:
    """Filter the snapshot and derive KPIs and chart series."""
    validate_window(window_days)
    filtered = filter_snapshot(snapshot, window_days, today)
    return WindowView(
        filtered=filtered,
        kpis=compute_kpis(filtered),
        series=build_series(filtered),
    )


def compute_snapshot_view(snapshot: Snapshot, today: date | None = None) -> SnapshotView:
    """Derive the heatmap, weekly insight and sleep history."""
    return SnapshotView(
        heatmap=build_heatmap(snapshot.mood, today),
        insight=weekly_insight(snapshot.mood, today),
        sleep_history=sleep_history(snapshot.sleep),
    )


def assemble(window_view: WindowView, snapshot_view: SnapshotView, today: date) -> DashboardView:
    """Combine both halves into one dashboard view."""
    return build_dashboard_view(
        day=today,
        filtered=window_view.filtered,
        kpis=window_view.kpis,
        series=window_view.series,
        heatmap=snapshot_view.heatmap,
        insight=snapshot_view.insight,
        sleep_history=snapshot_view.sleep_history,
    )


def recompute(
    snapshot: Snapshot,
    window_days: int = DEFAULT_WINDOW_DAYS,
    today: date | None = None,
) -> DashboardView:
    """Run the full pipeline on a snapshot.

    Args:
        snapshot: Normalized, unfiltered entries for one user.
        window_days: Trailing window for KPIs and series.
        today: Reference day (default: today).

    Returns:
        A populated DashboardView.
    """
    today = today or date.today()
    return assemble(
        compute_window_view(snapshot, window_days, today),
        compute_snapshot_view(snapshot, today),
        today,
    )
