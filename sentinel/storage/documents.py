"""JSON document store — load/save of one JSON value per file.

Every access is awaited; the blocking file I/O runs in a worker thread so
callers stay on the event loop.
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class DocumentNotFoundError(FileNotFoundError):
    """No document exists at the requested path."""

    def __init__(self, path: Path):
        super().__init__(f"No document at {path}")
        self.path = path


class MalformedDocumentError(ValueError):
    """A non-empty document could not be parsed as JSON."""

    def __init__(self, path: Path, error: json.JSONDecodeError):
        super().__init__(f"Malformed JSON in {path}: {error}")
        self.path = path


def _read(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise DocumentNotFoundError(path) from None


def _write(path: Path, value: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(value, indent=2) + "\n", encoding="utf-8")


def _parse(path: Path, text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedDocumentError(path, e) from e


async def load_document(path: Path) -> Any:
    """Load the JSON value at ``path``.

    Raises:
        DocumentNotFoundError: the file does not exist.
        MalformedDocumentError: the file is not valid JSON.
    """
    text = await asyncio.to_thread(_read, path)
    return _parse(path, text)


async def load_with_default(path: Path, default: Any) -> Any:
    """Load the JSON value at ``path``, materializing ``default`` if absent.

    A missing file and a completely empty file both count as absent: the
    default is written to disk and returned. Any other parse failure
    propagates as MalformedDocumentError.
    """
    try:
        text = await asyncio.to_thread(_read, path)
    except DocumentNotFoundError:
        text = ""

    if not text.strip():
        logger.debug("Initializing %s with default", path)
        await save_document(path, default)
        return default

    return _parse(path, text)


async def save_document(path: Path, value: Any) -> None:
    """Write ``value`` as pretty-printed JSON, creating parent dirs."""
    await asyncio.to_thread(_write, path, value)
    logger.debug("Saved %s", path)
