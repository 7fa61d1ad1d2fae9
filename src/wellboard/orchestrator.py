"""Aggregation orchestrator.

Owns the in-memory snapshot for the current user and the derived
dashboard view.

State machine::

    idle --set_user/refresh--> fetching --all reads ok--> ready
                                   |
                                   +--any read failed--> error_degraded

A fetch issues the three category reads concurrently and waits for all
of them.  The refresh is all-or-nothing: if any read fails, the
previous snapshot is kept and a notice is recorded; the successful reads
are not partially applied.  A response that arrives after the user has
changed (or after a newer fetch started) is discarded.

Changing the window never fetches.  It re-runs Filter, KPI and Series
synchronously on the cached snapshot.  Heatmap, insight and sleep
history are recomputed only when the snapshot changes or the
reference day has rolled over.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Callable

from wellboard.analytics.pipeline import (
    SnapshotView,
    WindowView,
    assemble,
    compute_snapshot_view,
    compute_window_view,
)
from wellboard.analytics.summary import DashboardView
from wellboard.analytics.window import validate_window
from wellboard.config import DEFAULT_FETCH_LIMIT, DEFAULT_WINDOW_DAYS
from wellboard.decoders import normalize_snapshot
from wellboard.errors import StoreUnavailable
from wellboard.records import EMPTY_SNAPSHOT, Category, Snapshot
from wellboard.store.base import LogStore

logger = logging.getLogger(__name__)

FETCH_ORDER = (Category.MOOD, Category.SLEEP, Category.EXERCISE)

STORE_NOTICE = "Failed to load your dashboard data. Showing the last available view."


class OrchestratorState(str, Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    READY = "ready"
    ERROR_DEGRADED = "error_degraded"


@dataclass(frozen=True)
class Notice:
    """A non-fatal, user-visible message."""

    level: str  # "warning" or "error"
    message: str


class Orchestrator:
    """Fetch, normalize, and recompute the dashboard for one user at a time."""

    def __init__(
        self,
        store: LogStore,
        fetch_limit: int = DEFAULT_FETCH_LIMIT,
        window_days: int = DEFAULT_WINDOW_DAYS,
        clock: Callable[[], date] = date.today,
    ):
        """
        Initialize Orchestrator.

        Args:
            store: Log store reader
            fetch_limit: Most-recent documents read per category
            window_days: Initial dashboard window
            clock: Returns the reference day for window and calendar math
        """
        if fetch_limit <= 0:
            raise ValueError(f"fetch_limit must be positive, got {fetch_limit}")
        self._store = store
        self._fetch_limit = fetch_limit
        self._window_days = validate_window(window_days)
        self._clock = clock

        self._state = OrchestratorState.IDLE
        self._user_id: str | None = None
        self._snapshot: Snapshot = EMPTY_SNAPSHOT
        self._generation = 0
        self._notices: list[Notice] = []

        # Reference day both halves of the current view were computed for.
        self._as_of: date = self._clock()
        self._snapshot_view: SnapshotView = compute_snapshot_view(self._snapshot, self._as_of)
        self._window_view: WindowView = compute_window_view(self._snapshot, self._window_days, self._as_of)

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def state(self) -> OrchestratorState:
        return self._state

    @property
    def user_id(self) -> str | None:
        return self._user_id

    @property
    def snapshot(self) -> Snapshot:
        return self._snapshot

    @property
    def window_days(self) -> int:
        return self._window_days

    @property
    def notices(self) -> list[Notice]:
        return list(self._notices)

    def drain_notices(self) -> list[Notice]:
        """Return pending notices and clear them."""
        notices, self._notices = self._notices, []
        return notices

    @property
    def view(self) -> DashboardView:
        """The current dashboard view."""
        return assemble(self._window_view, self._snapshot_view, self._as_of)

    # ------------------------------------------------------------------
    # Triggers
    # ------------------------------------------------------------------

    async def set_user(self, user_id: str | None) -> DashboardView:
        """Identity change: switch user and fetch their logs.

        A different user starts from an empty snapshot so another user's
        data is never shown.  ``None`` signs out and returns to idle.
        """
        if user_id is None:
            logger.info("User cleared, returning to idle")
            self._user_id = None
            self._generation += 1
            self._state = OrchestratorState.IDLE
            self._replace_snapshot(EMPTY_SNAPSHOT)
            return self.view

        if user_id != self._user_id:
            self._user_id = user_id
            self._replace_snapshot(EMPTY_SNAPSHOT)
        await self._fetch(user_id)
        return self.view

    async def refresh(self) -> DashboardView:
        """Re-fetch the current user's logs (explicit user refresh)."""
        if self._user_id is None:
            logger.debug("Refresh requested with no user; nothing to fetch")
            return self.view
        await self._fetch(self._user_id)
        return self.view

    def set_window(self, window_days: int) -> DashboardView:
        """Window change: recompute Filter, KPI and Series in memory."""
        self._window_days = validate_window(window_days)
        today = self._clock()
        if today != self._as_of:
            # The day rolled over; keep heatmap and insight on the same day.
            self._as_of = today
            self._snapshot_view = compute_snapshot_view(self._snapshot, today)
        self._window_view = compute_window_view(self._snapshot, self._window_days, today)
        return self.view

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _replace_snapshot(self, snapshot: Snapshot) -> None:
        today = self._clock()
        self._as_of = today
        self._snapshot = snapshot
        self._snapshot_view = compute_snapshot_view(snapshot, today)
        self._window_view = compute_window_view(snapshot, self._window_days, today)

    async def _fetch(self, user_id: str) -> None:
        self._generation += 1
        generation = self._generation
        self._state = OrchestratorState.FETCHING
        logger.info(f"Fetching logs for {user_id} (limit {self._fetch_limit})")

        results = await asyncio.gather(
            *(self._store.fetch(c, user_id, self._fetch_limit) for c in FETCH_ORDER),
            return_exceptions=True,
        )

        if user_id != self._user_id or generation != self._generation:
            logger.info(f"Discarding stale fetch for {user_id}")
            return

        failed = False
        for category, result in zip(FETCH_ORDER, results):
            if isinstance(result, StoreUnavailable):
                logger.error(f"Error fetching {category.value} logs: {result}")
                failed = True
            elif isinstance(result, Exception):
                logger.error(f"Unexpected error fetching {category.value} logs",
                             exc_info=result)
                failed = True
            elif isinstance(result, BaseException):
                raise result

        if failed:
            self._state = OrchestratorState.ERROR_DEGRADED
            self._notices.append(Notice(level="warning", message=STORE_NOTICE))
            return

        snapshot = normalize_snapshot(dict(zip(FETCH_ORDER, results)))
        self._replace_snapshot(snapshot)
        self._state = OrchestratorState.READY
        logger.info(f"Dashboard ready for {user_id}: {snapshot!r}")
