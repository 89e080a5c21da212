"""CLI commands for working sessions."""

import logging
from typing import Optional

import typer
from rich.console import Console

from sentinel.cli.prompts import prompt_text
from sentinel.cli.runner import run
from sentinel.output.review import render_session

logger = logging.getLogger(__name__)

app = typer.Typer(no_args_is_help=True)
console = Console()


@app.command("start")
def start_session(
    project_name: Optional[str] = typer.Option(None, "--project", "-p", help="The name of the project to work on"),
):
    """Start a working session."""

    async def _start():
        from sentinel.cli.project_cmd import resolve_project
        from sentinel.config import get_settings
        from sentinel.hooks import run_hook
        from sentinel.repository import create_session, get_ongoing_session

        if await get_ongoing_session() is not None:
            console.print("[yellow]There is an ongoing session. Did you forget to end it?[/yellow]")
            return

        project = await resolve_project(project_name)
        focus = prompt_text("What will be the focus of this session?")
        await create_session(project, focus)
        console.print("[green]Session Started![/green] Get to work!")

        if project.on_start and get_settings().hooks.enabled:
            if not await run_hook(project.on_start, cwd=project.working_dir):
                console.print(f"[yellow]On-start hook failed: {project.on_start}[/yellow]")

    run(_start())


@app.command("end")
def end_session_cmd():
    """End the ongoing working session."""

    async def _end():
        from sentinel.repository import end_session, get_ongoing_session

        session = await get_ongoing_session()
        if session is None:
            console.print("[yellow]There is no ongoing session. Did you forget to start it?[/yellow]")
            return

        session = await end_session(session)
        render_session(console, session, "Good job! Your session has been logged.")

    run(_end())


@app.command("recap")
def recap_session():
    """Show stats for the ongoing working session."""

    async def _recap():
        from sentinel.repository import get_ongoing_session

        session = await get_ongoing_session()
        if session is None:
            console.print("[yellow]There is no ongoing session. Did you forget to start it?[/yellow]")
            return

        render_session(console, session, f"Current Session ({session.project_name})")

    run(_recap())
