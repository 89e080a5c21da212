"""Secondary indexes over tasks and sessions.

The index functions mutate an in-memory index and never touch disk; callers
wrap a batch of them in a single load/save via ``modify_task_index`` or
``modify_session_index``.

Task lists are newest-first (ids are prepended). Session lists are in
creation order (ids are appended) and sessions are never removed.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from sentinel.storage.documents import load_with_default, save_document
from sentinel.storage.models import Session, SessionIndex, Task, TaskIndex
from sentinel.storage.paths import DataPaths, get_paths
from sentinel.timeutil import day_key

logger = logging.getLogger(__name__)


def _prepend(buckets: dict[str, list[str]], key: str, item_id: str) -> None:
    buckets[key] = [item_id, *buckets.get(key, [])]


def _append(buckets: dict[str, list[str]], key: str, item_id: str) -> None:
    buckets[key] = [*buckets.get(key, []), item_id]


def _without(ids: list[str], item_id: str) -> list[str]:
    return [i for i in ids if i != item_id]


def _drop_from_buckets(buckets: dict[str, list[str]], item_id: str) -> dict[str, list[str]]:
    remaining = {key: _without(ids, item_id) for key, ids in buckets.items()}
    return {key: ids for key, ids in remaining.items() if ids}


# --- Tasks ---

def index_new_task(index: TaskIndex, task: Task) -> None:
    """Add ``task`` to every list its current fields place it in."""
    index.all = [task.id, *index.all]

    if task.project_name is None:
        index.inbox = [task.id, *index.inbox]
    else:
        _prepend(index.by_project, task.project_name, task.id)

    if not task.is_done:
        index.incomplete = [task.id, *index.incomplete]

    _prepend(index.by_creation_date, day_key(task.created), task.id)

    if task.completed is not None:
        _prepend(index.by_completion_date, day_key(task.completed), task.id)


def deindex_task(index: TaskIndex, task: Task) -> None:
    """Remove ``task.id`` from every list and bucket, wherever it was filed.

    Removal goes by value across all buckets, so it works even when the
    task's fields no longer match the buckets it was filed under.
    """
    index.all = _without(index.all, task.id)
    index.inbox = _without(index.inbox, task.id)
    index.incomplete = _without(index.incomplete, task.id)
    index.by_project = _drop_from_buckets(index.by_project, task.id)
    index.by_creation_date = _drop_from_buckets(index.by_creation_date, task.id)
    index.by_completion_date = _drop_from_buckets(index.by_completion_date, task.id)


def reindex_task(index: TaskIndex, task: Task) -> None:
    deindex_task(index, task)
    index_new_task(index, task)


async def load_task_index(paths: Optional[DataPaths] = None) -> TaskIndex:
    paths = paths or get_paths()
    return TaskIndex.model_validate(
        await load_with_default(paths.task_index, TaskIndex().dump_document())
    )


async def save_task_index(index: TaskIndex, paths: Optional[DataPaths] = None) -> None:
    paths = paths or get_paths()
    await save_document(paths.task_index, index.dump_document())


@asynccontextmanager
async def modify_task_index(paths: Optional[DataPaths] = None) -> AsyncIterator[TaskIndex]:
    """Load the task index once, yield it for mutation, save it once.

    Nothing is written if the body raises.
    """
    index = await load_task_index(paths)
    yield index
    await save_task_index(index, paths)
    logger.debug("Task index saved (%d tasks)", len(index.all))


# --- Sessions ---

def index_new_session(index: SessionIndex, session: Session) -> None:
    """Append ``session`` to the ordered list, its project and its start day."""
    index.ordered = [*index.ordered, session.id]
    _append(index.by_project, session.project_name, session.id)
    _append(index.by_date, day_key(session.session_start), session.id)


async def load_session_index(paths: Optional[DataPaths] = None) -> SessionIndex:
    paths = paths or get_paths()
    return SessionIndex.model_validate(
        await load_with_default(paths.session_index, SessionIndex().dump_document())
    )


async def save_session_index(index: SessionIndex, paths: Optional[DataPaths] = None) -> None:
    paths = paths or get_paths()
    await save_document(paths.session_index, index.dump_document())


@asynccontextmanager
async def modify_session_index(paths: Optional[DataPaths] = None) -> AsyncIterator[SessionIndex]:
    index = await load_session_index(paths)
    yield index
    await save_session_index(index, paths)
    logger.debug("Session index saved (%d sessions)", len(index.ordered))
