"""Run a command's coroutine and turn storage failures into CLI errors."""

import asyncio
import logging
from typing import Awaitable, TypeVar

import typer
from rich.console import Console
from rich.markup import escape

from sentinel.storage.documents import DocumentNotFoundError, MalformedDocumentError

logger = logging.getLogger(__name__)
console = Console(stderr=True)

T = TypeVar("T")


def run(coro: Awaitable[T]) -> T:
    try:
        return asyncio.run(coro)
    except DocumentNotFoundError as e:
        logger.debug("Missing document: %s", e.path)
        console.print(f"[red]Not found: {escape(str(e.path))}[/red]")
        raise typer.Exit(1)
    except MalformedDocumentError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)
