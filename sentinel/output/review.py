"""Terminal rendering of sessions, tasks and reviews."""

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from sentinel.review import ReviewData, sum_duration
from sentinel.storage.models import Session, Task
from sentinel.timeutil import format_datetime, format_duration, session_duration


def session_tree(parent: Tree, session: Session, show_dates: bool = True) -> Tree:
    node = parent.add(f"[underline]{escape(session.focus) or '(no focus)'}[/underline]")
    if show_dates:
        node.add(f"[dim]Started on:[/dim] {format_datetime(session.session_start)}")
    node.add(f"[dim]Duration:[/dim] {format_duration(session_duration(session))}")
    return node


def task_tree(parent: Tree, task: Task, show_dates: bool = True) -> Tree:
    style = "strike" if task.is_done else "underline"
    node = parent.add(f"[{style}]{escape(task.description)}[/{style}]")
    if show_dates:
        node.add(f"[dim]Created on: {format_datetime(task.created)}[/dim]")
        if task.completed is not None:
            node.add(f"[dim]Completed on: {format_datetime(task.completed)}[/dim]")
    return node


def render_session(console: Console, session: Session, title: str) -> None:
    console.print(f"[bold]{title}[/bold]")
    console.print(f"Focus: [cyan]{escape(session.focus)}[/cyan]")
    console.print(f"Duration: {format_duration(session_duration(session))}")


def render_review(
    console: Console,
    review: ReviewData,
    title: str,
    project_name: Optional[str] = None,
    show_dates: bool = True,
) -> None:
    """Print a review; with ``project_name`` only that project's groups are shown."""
    if project_name is not None:
        review = review.for_project(project_name)

    console.print(f"[bold underline]{title}[/bold underline]")

    sessions = review.flat_sessions()
    tree = Tree(f"[bold underline]{len(sessions)} Sessions:[/bold underline]")
    for name, group in review.sessions.items():
        branch = tree if project_name is not None else tree.add(f"[bold]{escape(name)}:[/bold]")
        for session in group:
            session_tree(branch, session, show_dates)
        if project_name is None:
            branch.add(f"[dim]Project Total Duration:[/dim] {format_duration(sum_duration(group))}")
    console.print(tree)
    console.print(f"  [dim]Total duration:[/dim] [bold]{format_duration(sum_duration(sessions))}[/bold]")

    for label, groups in (
        ("Created Tasks", review.created_tasks),
        ("Completed Tasks", review.completed_tasks),
    ):
        count = sum(len(group) for group in groups.values())
        tree = Tree(f"[bold underline]{count} {label}:[/bold underline]")
        for name, group in groups.items():
            branch = tree if project_name is not None else tree.add(f"[bold]{escape(name)}:[/bold]")
            for task in group:
                task_tree(branch, task, show_dates)
        console.print(tree)
