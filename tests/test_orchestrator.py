"""Tests for wellboard.orchestrator -- fetch cycle and state machine."""

from __future__ import annotations

import asyncio
from datetime import date

import pytest

from wellboard.analytics.insight import LOG_MORE_MESSAGE
from wellboard.orchestrator import STORE_NOTICE, Orchestrator, OrchestratorState
from wellboard.records import Category, Snapshot
from wellboard.store import LogStore, MemoryLogStore

from tests.conftest import TODAY, at, days_ago, exercise_doc, mood_doc, sleep_doc


def _seed(store: MemoryLogStore, user_id: str, score: int = 9) -> None:
    store.add(user_id, Category.MOOD, [mood_doc(days_ago(0), score), mood_doc(days_ago(1), score)])
    store.add(user_id, Category.SLEEP, [sleep_doc(at(days_ago(0), 7), 420), sleep_doc(at(days_ago(1), 7), 480)])
    store.add(user_id, Category.EXERCISE, [
        exercise_doc(at(days_ago(0), 18), "Running", 30),
        exercise_doc(at(days_ago(20), 18), "Yoga", 60),
    ])


@pytest.fixture
def store() -> MemoryLogStore:
    store = MemoryLogStore()
    _seed(store, "alice", 9)
    _seed(store, "bob", 3)
    return store


def _orchestrator(store: LogStore, **kwargs) -> Orchestrator:
    return Orchestrator(store, clock=lambda: TODAY, **kwargs)


class GatedStore(LogStore):
    """Holds reads for one user until released."""

    def __init__(self, inner: LogStore, gated_user: str):
        self.inner = inner
        self.gated_user = gated_user
        self.release = asyncio.Event()

    async def fetch(self, category, user_id, limit):
        if user_id == self.gated_user:
            await self.release.wait()
        return await self.inner.fetch(category, user_id, limit)


class BrokenStore(LogStore):
    async def fetch(self, category, user_id, limit):
        raise RuntimeError("driver exploded")


class TestInitialState:
    def test_idle_with_empty_view(self, store):
        orch = _orchestrator(store)
        assert orch.state is OrchestratorState.IDLE
        assert orch.user_id is None
        assert orch.snapshot == Snapshot()
        assert orch.view.kpis.avg_mood == "N/A"
        assert store.calls == []

    def test_rejects_bad_limit_and_window(self, store):
        with pytest.raises(ValueError):
            _orchestrator(store, fetch_limit=0)
        with pytest.raises(ValueError):
            _orchestrator(store, window_days=0)


class TestSetUser:
    @pytest.mark.asyncio
    async def test_fetch_to_ready(self, store):
        orch = _orchestrator(store)
        view = await orch.set_user("alice")

        assert orch.state is OrchestratorState.READY
        assert orch.user_id == "alice"
        assert len(orch.snapshot.mood) == 2
        assert view.kpis.avg_mood == 9.0
        assert view.kpis.avg_sleep_hours == 7.5
        assert view.kpis.total_exercise_hours == 1.5
        assert "fantastic week" in view.insight
        assert orch.notices == []

    @pytest.mark.asyncio
    async def test_reads_every_category_with_limit(self, store):
        orch = _orchestrator(store, fetch_limit=10)
        await orch.set_user("alice")
        assert sorted(c.value for c, _, _ in store.calls) == ["exercise", "mood", "sleep"]
        assert all(user == "alice" and limit == 10 for _, user, limit in store.calls)

    @pytest.mark.asyncio
    async def test_clearing_user_returns_to_idle(self, store):
        orch = _orchestrator(store)
        await orch.set_user("alice")
        await orch.set_user(None)
        assert orch.state is OrchestratorState.IDLE
        assert orch.user_id is None
        assert orch.snapshot.is_empty

    @pytest.mark.asyncio
    async def test_switching_user_replaces_data(self, store):
        orch = _orchestrator(store)
        await orch.set_user("alice")
        view = await orch.set_user("bob")
        assert view.kpis.avg_mood == 3.0

    @pytest.mark.asyncio
    async def test_failed_switch_never_shows_previous_user(self, store):
        orch = _orchestrator(store)
        await orch.set_user("alice")
        store.fail.add(Category.MOOD)

        view = await orch.set_user("bob")

        assert orch.state is OrchestratorState.ERROR_DEGRADED
        assert orch.snapshot.is_empty
        assert view.kpis.avg_mood == "N/A"


class TestDegraded:
    @pytest.mark.asyncio
    async def test_failure_keeps_previous_snapshot(self, store):
        orch = _orchestrator(store)
        await orch.set_user("alice")
        before = orch.snapshot

        store.fail.add(Category.SLEEP)
        view = await orch.refresh()

        assert orch.state is OrchestratorState.ERROR_DEGRADED
        assert orch.snapshot is before
        assert view.kpis.avg_mood == 9.0
        assert [n.message for n in orch.drain_notices()] == [STORE_NOTICE]
        assert orch.notices == []

    @pytest.mark.asyncio
    async def test_no_partial_apply(self, store):
        orch = _orchestrator(store)
        await orch.set_user("alice")
        store.add("alice", Category.MOOD, [mood_doc(days_ago(2), 1)])
        store.fail.add(Category.EXERCISE)

        await orch.refresh()

        assert len(orch.snapshot.mood) == 2

    @pytest.mark.asyncio
    async def test_unexpected_error_degrades(self):
        orch = _orchestrator(BrokenStore())
        await orch.set_user("alice")
        assert orch.state is OrchestratorState.ERROR_DEGRADED
        assert len(orch.notices) == 1

    @pytest.mark.asyncio
    async def test_recovers_on_next_refresh(self, store):
        orch = _orchestrator(store)
        store.fail.add(Category.MOOD)
        await orch.set_user("alice")
        assert orch.state is OrchestratorState.ERROR_DEGRADED

        store.fail.clear()
        await orch.refresh()
        assert orch.state is OrchestratorState.READY
        assert len(orch.snapshot.mood) == 2


class TestRefresh:
    @pytest.mark.asyncio
    async def test_without_user_is_noop(self, store):
        orch = _orchestrator(store)
        await orch.refresh()
        assert store.calls == []
        assert orch.state is OrchestratorState.IDLE

    @pytest.mark.asyncio
    async def test_picks_up_new_documents(self, store):
        orch = _orchestrator(store)
        await orch.set_user("alice")
        store.add("alice", Category.EXERCISE, [exercise_doc(at(TODAY, 19), "Yoga", 30)])
        view = await orch.refresh()
        assert len(orch.snapshot.exercise) == 3
        assert view.series.activity_summary.pairs() == [("Yoga", 90.0), ("Running", 30.0)]


class TestSetWindow:
    @pytest.mark.asyncio
    async def test_does_not_fetch(self, store):
        orch = _orchestrator(store)
        await orch.set_user("alice")
        calls = len(store.calls)

        view = orch.set_window(7)

        assert len(store.calls) == calls
        assert orch.window_days == 7
        assert view.window_days == 7
        assert view.kpis.total_exercise_hours == 0.5

    @pytest.mark.asyncio
    async def test_window_independent_parts_unchanged(self, store):
        orch = _orchestrator(store)
        await orch.set_user("alice")
        month = orch.view
        week = orch.set_window(7)
        assert week.heatmap.to_dict() == month.heatmap.to_dict()
        assert week.insight == month.insight

    def test_invalid_window_keeps_current(self, store):
        orch = _orchestrator(store, window_days=30)
        with pytest.raises(ValueError):
            orch.set_window(-1)
        assert orch.window_days == 30


class TestReferenceDay:
    @pytest.mark.asyncio
    async def test_as_of_fixed_until_recompute(self, store):
        days = [TODAY]
        orch = Orchestrator(store, clock=lambda: days[0])
        await orch.set_user("alice")

        days[0] = date(2026, 11, 1)
        view = orch.view
        assert view.as_of == "2026-10-19"
        assert view.heatmap.month == 10

    @pytest.mark.asyncio
    async def test_set_window_after_rollover_moves_every_part(self, store):
        days = [TODAY]
        orch = Orchestrator(store, clock=lambda: days[0])
        await orch.set_user("alice")

        days[0] = date(2026, 11, 1)
        view = orch.set_window(7)
        assert view.as_of == "2026-11-01"
        assert view.heatmap.month == 11
        assert view.insight == LOG_MORE_MESSAGE

    @pytest.mark.asyncio
    async def test_refresh_uses_new_day(self, store):
        days = [TODAY]
        orch = Orchestrator(store, clock=lambda: days[0])
        await orch.set_user("alice")

        days[0] = date(2026, 10, 20)
        view = await orch.refresh()
        assert view.as_of == "2026-10-20"


class TestStaleResponses:
    @pytest.mark.asyncio
    async def test_response_for_previous_user_discarded(self, store):
        gated = GatedStore(store, gated_user="alice")
        orch = _orchestrator(gated)

        slow = asyncio.create_task(orch.set_user("alice"))
        await asyncio.sleep(0)
        await orch.set_user("bob")
        gated.release.set()
        await slow

        assert orch.user_id == "bob"
        assert orch.state is OrchestratorState.READY
        assert orch.view.kpis.avg_mood == 3.0

    @pytest.mark.asyncio
    async def test_older_fetch_for_same_user_discarded(self, store):
        gated = GatedStore(store, gated_user="alice")
        orch = _orchestrator(gated)

        first = asyncio.create_task(orch.set_user("alice"))
        await asyncio.sleep(0)
        store.add("alice", Category.MOOD, [mood_doc(days_ago(2), 1)])
        second = asyncio.create_task(orch.refresh())
        await asyncio.sleep(0)
        gated.release.set()
        await asyncio.gather(first, second)

        assert orch.state is OrchestratorState.READY
        assert len(orch.snapshot.mood) == 3
