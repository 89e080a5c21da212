"""CLI command for daily, weekly and monthly reviews."""

from datetime import date
from typing import Optional

import typer
from rich.console import Console

from sentinel.cli.prompts import prompt_select_one
from sentinel.cli.runner import run
from sentinel.review import (
    ReviewInterval,
    day_interval,
    month_interval,
    reviewable_days,
    reviewable_months,
    reviewable_weeks,
    week_interval,
)

console = Console()


def _reviewable_day_intervals(session_index, task_index) -> list[ReviewInterval]:
    return [day_interval(day) for day in reviewable_days(session_index, task_index)]


def _week_label(interval: ReviewInterval) -> str:
    return f"Week from {interval.start:%a %b %d %Y} to {interval.end:%a %b %d %Y}"


def _month_label(interval: ReviewInterval) -> str:
    return f"{interval.start:%B %Y}"


def _day_label(interval: ReviewInterval) -> str:
    return f"{interval.start:%a %b %d %Y}"


def _pick(message: str, intervals: list[ReviewInterval], label) -> Optional[ReviewInterval]:
    if not intervals:
        return None
    by_label = {label(interval): interval for interval in intervals}
    return by_label[prompt_select_one(message, list(by_label))]


def review(
    week: bool = typer.Option(False, "--week", "-w", help="Review the week"),
    month: bool = typer.Option(False, "--month", "-m", help="Review the month"),
    interactive: bool = typer.Option(False, "--interactive", "-i", help="Select the specific day/week/month to review"),
    current: bool = typer.Option(False, "--current", "-c", help="Only the project of the ongoing session"),
    project_name: Optional[str] = typer.Option(None, "--project", "-p", help="Only a specific project"),
):
    """Review what you've done."""
    if week and month:
        console.print("[red]--week and --month cannot be used together[/red]")
        raise typer.Exit(1)
    if current and project_name:
        console.print("[red]--current and --project cannot be used together[/red]")
        raise typer.Exit(1)

    async def _review():
        from sentinel.config import get_settings
        from sentinel.indexing import load_session_index, load_task_index
        from sentinel.output.review import render_review
        from sentinel.repository import get_ongoing_session
        from sentinel.review import review_data

        name = project_name
        if current:
            session = await get_ongoing_session()
            name = session.project_name if session else None

        session_index = await load_session_index()
        task_index = await load_task_index()

        if month:
            make, label, options, message = month_interval, _month_label, reviewable_months, "Select the month"
        elif week:
            make, label, options, message = week_interval, _week_label, reviewable_weeks, "Select the week"
        else:
            make, label, message = day_interval, _day_label, "Select the day"
            options = _reviewable_day_intervals

        if interactive:
            interval = _pick(message, options(session_index, task_index), label)
            if interval is None:
                console.print("[yellow]Nothing recorded yet.[/yellow]")
                return
        else:
            interval = make(date.today())

        data = await review_data(interval, session_index, task_index)
        render_review(console, data, label(interval), name, get_settings().display.show_dates)

    run(_review())
