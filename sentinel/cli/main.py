"""Sentinel CLI — main entry point using Typer."""

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from sentinel.cli.project_cmd import app as project_app
from sentinel.cli.review_cmd import review
from sentinel.cli.session_cmd import app as session_app
from sentinel.cli.task_cmd import app as task_app

app = typer.Typer(
    name="sentinel",
    help="An ever watching guardian of your productivity.",
    no_args_is_help=True,
)
console = Console()

# Register subcommands
app.add_typer(session_app, name="session", help="Start, end and recap working sessions")
app.add_typer(task_app, name="task", help="Manage tasks")
app.add_typer(project_app, name="project", help="Manage projects")
app.command("review")(review)


def _setup_logging(verbose: bool = False):
    from sentinel.config import get_settings

    level = logging.DEBUG if verbose else get_settings().general.log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(rich_tracebacks=True, show_time=False)],
    )


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Track working sessions, tasks and reviews."""
    _setup_logging(verbose)

    from sentinel.cli.runner import run
    from sentinel.storage.store import load_config

    run(load_config())


if __name__ == "__main__":
    app()
