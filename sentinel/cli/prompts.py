"""Interactive prompts used by the CLI commands."""

from typing import Sequence, TypeVar

from rich.console import Console
from rich.markup import escape
from rich.prompt import IntPrompt, Prompt

console = Console()

T = TypeVar("T")


def prompt_text(message: str, default: str = "") -> str:
    return Prompt.ask(message, default=default, show_default=bool(default), console=console)


def prompt_select_one(message: str, options: Sequence[str]) -> str:
    """Pick one of ``options`` by number."""
    console.print(f"[bold]{message}[/bold]")
    for number, option in enumerate(options, start=1):
        console.print(f"  [cyan]{number}[/cyan]) {escape(option)}")
    choice = IntPrompt.ask(
        "Choice",
        choices=[str(n) for n in range(1, len(options) + 1)],
        show_choices=False,
        console=console,
    )
    return options[choice - 1]


def parse_selection(answer: str, count: int) -> set[int]:
    """Parse ``"1, 3 4"`` into zero-based positions, ignoring anything out of range."""
    picked = set()
    for token in answer.replace(",", " ").split():
        if token.isdigit() and 1 <= int(token) <= count:
            picked.add(int(token) - 1)
    return picked


def prompt_multi_select(
    message: str,
    options: Sequence[tuple[str, T]],
    preselected: set[T],
) -> set[T]:
    """Pick any number of ``(label, value)`` options; preselected ones start checked.

    Labels are rendered as rich markup.
    """
    console.print(f"[bold]{message}[/bold]")
    current = []
    for number, (label, value) in enumerate(options, start=1):
        checked = value in preselected
        if checked:
            current.append(str(number))
        mark = "[green]x[/green]" if checked else " "
        console.print(f"  [{mark}] [cyan]{number}[/cyan]) {label}")

    answer = Prompt.ask(
        "Selected numbers (space or comma separated)",
        default=" ".join(current),
        show_default=bool(current),
        console=console,
    )
    return {options[position][1] for position in parse_selection(answer, len(options))}
