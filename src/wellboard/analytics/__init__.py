"""Analytics engine for the wellness dashboard.

Modules:
    window    -- Trailing time-window filter
    kpi       -- Mean / sum / mode KPIs
    heatmap   -- Current-month mood calendar
    insight   -- Weekly templated mood insight
    series    -- Chart-ready label/value series
    summary   -- Dashboard view aggregation
    pipeline  -- Pure recompute(snapshot, window)
"""

from wellboard.analytics.window import (
    FilteredView,
    filter_window,
    filter_snapshot,
    window_cutoff,
    validate_window,
)
from wellboard.analytics.kpi import (
    KpiSet,
    NO_DATA,
    compute_kpis,
    average_mood,
    average_sleep_hours,
    total_exercise_hours,
    top_activity,
)
from wellboard.analytics.heatmap import build_heatmap, mood_bucket, HeatmapGrid, HeatmapCell, MoodBucket
from wellboard.analytics.insight import weekly_insight, LOG_MORE_MESSAGE
from wellboard.analytics.series import build_series, sleep_history, ChartSeries, LabeledSeries, SleepHistory
from wellboard.analytics.summary import build_dashboard_view, DashboardView
from wellboard.analytics.pipeline import (
    recompute,
    compute_window_view,
    compute_snapshot_view,
    WindowView,
    SnapshotView,
)

__all__ = [
    # window
    "FilteredView",
    "filter_window",
    "filter_snapshot",
    "window_cutoff",
    "validate_window",
    # kpi
    "KpiSet",
    "NO_DATA",
    "compute_kpis",
    "average_mood",
    "average_sleep_hours",
    "total_exercise_hours",
    "top_activity",
    # heatmap
    "build_heatmap",
    "mood_bucket",
    "HeatmapGrid",
    "HeatmapCell",
    "MoodBucket",
    # insight
    "weekly_insight",
    "LOG_MORE_MESSAGE",
    # series
    "build_series",
    "sleep_history",
    "ChartSeries",
    "LabeledSeries",
    "SleepHistory",
    # summary
    "build_dashboard_view",
    "DashboardView",
    # pipeline
    "recompute",
    "compute_window_view",
    "compute_snapshot_view",
    "WindowView",
    "SnapshotView",
]
