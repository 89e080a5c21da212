"""CLI commands for managing tasks."""

from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from sentinel.cli.prompts import prompt_multi_select, prompt_text
from sentinel.cli.runner import run
from sentinel.storage.models import INBOX
from sentinel.timeutil import format_datetime

app = typer.Typer(no_args_is_help=True)
console = Console()


async def _current_project_name() -> Optional[str]:
    from sentinel.repository import get_ongoing_session

    session = await get_ongoing_session()
    if session is None:
        console.print("[yellow]--current used without an ongoing session. The option will be ignored[/yellow]")
        return None
    return session.project_name


async def _scoped_tasks(project_name: Optional[str], inbox: bool, include_done: bool):
    from sentinel.repository import get_inbox_tasks, get_project_tasks, list_tasks

    if inbox:
        return await get_inbox_tasks(include_done)
    if project_name is not None:
        return await get_project_tasks(project_name, include_done)
    return await list_tasks(include_done)


@app.command("create")
def create_tasks(
    project_name: Optional[str] = typer.Option(None, "--project", "-p", help="The name of the project to add tasks to"),
    current: bool = typer.Option(False, "--current", "-c", help="Add tasks to the project of the ongoing session"),
    dump: bool = typer.Option(False, "--dump", "-d", help="Skip project selection and put tasks in the inbox"),
):
    """Add tasks, one per prompt, until an empty description."""
    if current and project_name:
        console.print("[red]--current and --project cannot be used together[/red]")
        raise typer.Exit(1)

    async def _create():
        from sentinel.cli.project_cmd import resolve_project
        from sentinel.repository import create_task

        name = await _current_project_name() if current else project_name
        project = None
        if not dump:
            project = await resolve_project(name)

        created = 0
        while description := prompt_text("Task description (leave empty to stop)").strip():
            await create_task(description, project)
            created += 1

        target = project.name if project else INBOX
        console.print(f"{created} task(s) added to [cyan]{escape(target)}[/cyan]")

    run(_create())


@app.command("list")
def list_tasks_cmd(
    project_name: Optional[str] = typer.Option(None, "--project", "-p", help="Only tasks of this project"),
    inbox: bool = typer.Option(False, "--inbox", help="Only tasks without a project"),
    show_all: bool = typer.Option(False, "--all", "-a", help="Include completed tasks"),
):
    """List tasks, newest first."""

    async def _list():
        return await _scoped_tasks(project_name, inbox, show_all)

    tasks = run(_list())
    if not tasks:
        console.print("[yellow]No tasks found.[/yellow]")
        return

    table = Table(title="Tasks")
    table.add_column("ID", style="dim")
    table.add_column("Description", style="cyan")
    table.add_column("Project")
    table.add_column("Created")
    table.add_column("Done", justify="center")

    for t in tasks:
        done = "[green]YES[/green]" if t.is_done else ""
        table.add_row(t.id[:8], escape(t.description), escape(t.group_key), format_datetime(t.created), done)

    console.print(table)


@app.command("complete")
def complete_tasks(
    project_name: Optional[str] = typer.Option(None, "--project", "-p", help="Only tasks of this project"),
    inbox: bool = typer.Option(False, "--inbox", help="Only tasks without a project"),
):
    """Mark tasks done (or not done) by selecting them."""

    async def _complete():
        from sentinel.repository import toggle_tasks

        tasks = await _scoped_tasks(project_name, inbox, include_done=True)
        if not tasks:
            console.print("[yellow]No tasks found.[/yellow]")
            return

        done = {t.id for t in tasks if t.is_done}
        selected = prompt_multi_select(
            "Select the completed tasks",
            [(f"{escape(t.description)} [dim]({escape(t.group_key)})[/dim]", t.id) for t in tasks],
            done,
        )
        changed = [t for t in tasks if (t.id in selected) != t.is_done]
        if not changed:
            console.print("Nothing changed.")
            return

        toggled = await toggle_tasks(changed)
        completed = sum(1 for t in toggled if t.is_done)
        console.print(f"[green]{completed} completed[/green], {len(toggled) - completed} reopened")

    run(_complete())
