"""CLI commands for managing projects."""

import os
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from sentinel.cli.prompts import prompt_select_one, prompt_text
from sentinel.cli.runner import run
from sentinel.storage.models import INBOX, Project

app = typer.Typer(no_args_is_help=True)
console = Console()

NEW_PROJECT_OPTION = "Create a new project"


def _check_name(name: str) -> None:
    if name.strip() == INBOX:
        console.print(f"[red]'{INBOX}' is reserved for tasks without a project[/red]")
        raise typer.Exit(1)


async def create_project_interactive(name: Optional[str] = None) -> Project:
    """Prompt for the details of a new project and save it."""
    from sentinel.storage.store import add_project

    if name is None:
        name = prompt_text("Project name")
    _check_name(name)

    cwd = os.getcwd()
    working_dir = prompt_text(f"Project working dir (empty for {cwd})") or cwd
    github = prompt_text("Github repo") or None

    return await add_project(Project(name=name, working_dir=working_dir, github=github))


async def resolve_project(name: Optional[str] = None) -> Project:
    """Return the project called ``name``.

    Without a name the user picks one (or creates one); an unknown name
    walks the user through creating it.
    """
    from sentinel.storage.store import get_project, list_projects

    if name is None:
        projects = await list_projects()
        choice = prompt_select_one("Select a project", [*(p.name for p in projects), NEW_PROJECT_OPTION])
        if choice != NEW_PROJECT_OPTION:
            return next(p for p in projects if p.name == choice)
        return await create_project_interactive()

    project = await get_project(name)
    if project is None:
        console.print(f"[yellow]Project '{escape(name)}' does not exist yet, creating it[/yellow]")
        return await create_project_interactive(name)
    return project


@app.command("list")
def list_projects_cmd():
    """List all projects."""

    async def _list():
        from sentinel.storage.store import list_projects

        return await list_projects()

    projects = run(_list())
    if not projects:
        console.print("[yellow]No projects found.[/yellow]")
        return

    table = Table(title="Projects")
    table.add_column("Name", style="cyan")
    table.add_column("Working Dir")
    table.add_column("Github")
    table.add_column("On Start", style="dim")

    for p in projects:
        table.add_row(escape(p.name), p.working_dir, p.github or "", escape(p.on_start or ""))

    console.print(table)


@app.command("add")
def add_project_cmd(
    name: str = typer.Argument(help="Project name"),
    working_dir: Optional[str] = typer.Option(None, "--dir", "-d", help="Working directory (default: cwd)"),
    github: Optional[str] = typer.Option(None, "--github", "-g", help="Github repo"),
    on_start: Optional[str] = typer.Option(None, "--on-start", help="Shell command run when a session starts"),
):
    """Register a project (or update an existing one)."""
    _check_name(name)

    async def _add():
        from sentinel.storage.store import add_project

        project = Project(
            name=name,
            working_dir=working_dir or os.getcwd(),
            github=github,
            on_start=on_start,
        )
        return await add_project(project)

    project = run(_add())
    console.print(f"Project [cyan]{escape(project.name)}[/cyan] saved ({project.working_dir})")
