"""CLI for the wellboard wellness analytics engine."""

import asyncio
from datetime import date, datetime

import click

from wellboard.config import WINDOW_CHOICES, get_settings
from wellboard.logging_setup import setup_logging


def _print_view(view) -> None:
    """Human-readable dashboard report."""
    kpis = view.kpis
    click.echo(f"\n{'=' * 60}")
    click.echo(f"  Dashboard: {view.as_of} (last {view.window_days} days)")
    click.echo(f"{'=' * 60}")
    mood = f"{kpis.avg_mood} / 10" if kpis.has_mood else kpis.avg_mood
    click.echo(f"  Avg. mood:       {mood}")
    click.echo(f"  Avg. sleep:      {kpis.avg_sleep_hours} hrs")
    click.echo(f"  Total activity:  {kpis.total_exercise_hours} hrs")
    click.echo(f"  Top activity:    {kpis.top_activity}")
    click.echo(f"{'-' * 60}")

    activity = view.series.activity_summary
    if len(activity):
        click.echo("  Activity summary (minutes):")
        for label, minutes in activity.pairs():
            click.echo(f"    {label:<14} {minutes:.0f}")

    click.echo(f"\n  {view.heatmap.title}")
    click.echo("   S  M  T  W  T  F  S")
    for week in view.heatmap.weeks():
        row = ""
        for cell in week:
            if cell is None:
                row += "   "
            elif cell.mood_score is None:
                row += "  ."
            else:
                row += f"{cell.mood_score:>3}"
        click.echo(row)

    click.echo(f"\n  Weekly insight: {view.insight}")
    click.echo(f"{'=' * 60}")


def _emit(view, as_json: bool, output: str | None) -> None:
    if as_json:
        click.echo(view.to_json())
    else:
        _print_view(view)
    if output:
        with open(output, "w", encoding="utf-8") as f:
            f.write(view.to_json())
        click.echo(f"\nView written to {output}")


@click.group()
@click.option("--log-level", default=None, help="Override LOG_LEVEL (DEBUG, INFO, ...).")
def main(log_level: str | None) -> None:
    """wellboard: mood, sleep and exercise analytics."""
    settings = get_settings()
    setup_logging(log_level or settings.LOG_LEVEL, settings.LOG_FILE)


@main.command()
@click.argument("user_id")
@click.option("--window", "-w", type=click.IntRange(min=1), default=None,
              help=f"Window in days (usually one of {', '.join(map(str, WINDOW_CHOICES))}).")
@click.option("--json", "as_json", is_flag=True, help="Print the view as JSON.")
@click.option("--output", "-o", default=None, help="Also write the view JSON to a file.")
def dashboard(user_id: str, window: int | None, as_json: bool, output: str | None) -> None:
    """Fetch a user's logs and show their dashboard."""
    from wellboard.orchestrator import Orchestrator, OrchestratorState
    from wellboard.store.mongo import MongoLogStore

    settings = get_settings()

    async def _dashboard():
        store = MongoLogStore.from_settings(settings)
        try:
            orch = Orchestrator(
                store,
                fetch_limit=settings.FETCH_LIMIT,
                window_days=window or settings.DEFAULT_WINDOW_DAYS,
            )
            view = await orch.set_user(user_id)
        finally:
            await store.close()
        return orch, view

    orch, view = asyncio.run(_dashboard())
    for notice in orch.drain_notices():
        click.echo(f"[{notice.level}] {notice.message}", err=True)
    _emit(view, as_json, output)
    if orch.state is OrchestratorState.ERROR_DEGRADED:
        raise SystemExit(1)


@main.command()
@click.argument("user_id")
@click.option("--output", "-o", default=None, help="Output file path.")
@click.option("--limit", "-n", type=click.IntRange(min=1), default=None,
              help="Documents per category (default FETCH_LIMIT).")
def capture(user_id: str, output: str | None, limit: int | None) -> None:
    """Capture a user's raw log documents to a JSONL file."""
    from wellboard.capture import capture as do_capture
    from wellboard.errors import StoreUnavailable
    from wellboard.store.mongo import MongoLogStore

    settings = get_settings()

    async def _capture():
        store = MongoLogStore.from_settings(settings)
        try:
            return await do_capture(store, user_id, output, limit or settings.FETCH_LIMIT)
        finally:
            await store.close()

    try:
        path, count = asyncio.run(_capture())
    except StoreUnavailable as e:
        raise click.ClickException(str(e))
    click.echo(f"{count} documents -> {path}")


@main.command()
@click.argument("file", type=click.Path(exists=True))
@click.option("--window", "-w", type=click.IntRange(min=1), default=None, help="Window in days.")
@click.option("--today", default=None, help="Reference day as YYYY-MM-DD (default: today).")
@click.option("--json", "as_json", is_flag=True, help="Print the view as JSON.")
@click.option("--output", "-o", default=None, help="Also write the view JSON to a file.")
def replay(file: str, window: int | None, today: str | None, as_json: bool, output: str | None) -> None:
    """Replay a capture file through the analytics engine."""
    from wellboard.replay import replay_file

    ref_day = None
    if today:
        try:
            ref_day = date.fromisoformat(today)
        except ValueError:
            raise click.BadParameter("expected YYYY-MM-DD", param_hint="--today")

    view = replay_file(file, window or get_settings().DEFAULT_WINDOW_DAYS, ref_day)
    _emit(view, as_json, output)


@main.group()
def comment() -> None:
    """Ask the comment service about a new log entry."""


@comment.command("sleep")
@click.option("--minutes", "-m", type=click.IntRange(min=1), required=True, help="Sleep duration in minutes.")
def comment_sleep(minutes: int) -> None:
    """Comment on a night of sleep."""
    from wellboard.comments import CommentClient, comment_or_fallback

    client = CommentClient.from_settings(get_settings())
    result = asyncio.run(comment_or_fallback(client.sleep_comment(minutes)))
    if result.notice:
        click.echo(f"[warning] {result.notice}", err=True)
    click.echo(result.text)


@comment.command("exercise")
@click.option("--activity", "-a", default="Running", help="Activity type.")
@click.option("--minutes", "-m", type=click.IntRange(min=1), required=True, help="Duration in minutes.")
@click.option("--note", "-n", default="", help="Quick note about the workout.")
def comment_exercise(activity: str, minutes: int, note: str) -> None:
    """Comment on a workout."""
    from wellboard.comments import CommentClient, comment_or_fallback

    client = CommentClient.from_settings(get_settings())
    request = client.exercise_comment(activity, minutes, note, when=datetime.now())
    result = asyncio.run(comment_or_fallback(request))
    if result.notice:
        click.echo(f"[warning] {result.notice}", err=True)
    click.echo(result.text)


if __name__ == "__main__":
    main()
