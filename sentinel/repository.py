"""Task and session records — one JSON document per record.

Writes go record first, index second. A crash in between leaves the index
behind the records; there is no rollback.
"""

import asyncio
import logging
import uuid
from typing import Optional, Union

from sentinel.indexing import (
    index_new_session,
    index_new_task,
    load_task_index,
    modify_session_index,
    modify_task_index,
    reindex_task,
)
from sentinel.storage.documents import DocumentNotFoundError, load_document, save_document
from sentinel.storage.models import Project, Session, Task
from sentinel.storage.paths import DataPaths, get_paths
from sentinel.storage.store import clear_ongoing_session_id, get_ongoing_session_id, set_ongoing_session_id
from sentinel.timeutil import now_ms

logger = logging.getLogger(__name__)


# --- Tasks ---

async def get_task(task_id: str, paths: Optional[DataPaths] = None) -> Task:
    paths = paths or get_paths()
    return Task.model_validate(await load_document(paths.task(task_id)))


async def save_task(task: Task, paths: Optional[DataPaths] = None) -> None:
    paths = paths or get_paths()
    await save_document(paths.task(task.id), task.dump_document())


async def hydrate_tasks(task_ids: list[str], paths: Optional[DataPaths] = None) -> list[Task]:
    """Resolve task ids to records, preserving order."""
    return list(await asyncio.gather(*(get_task(task_id, paths) for task_id in task_ids)))


async def create_task(
    description: str,
    project: Optional[Project] = None,
    paths: Optional[DataPaths] = None,
) -> Task:
    """Persist a new incomplete task and add it to the task index."""
    task = Task(
        id=str(uuid.uuid4()),
        description=description,
        is_done=False,
        created=now_ms(),
        project_name=project.name if project else None,
    )
    await save_task(task, paths)
    async with modify_task_index(paths) as index:
        index_new_task(index, task)

    logger.debug("Created task %s (%s)", task.id[:8], task.project_name or "inbox")
    return task


def _flip(task: Task, now: int) -> Task:
    is_done = not task.is_done
    return task.model_copy(update={"is_done": is_done, "completed": now if is_done else None})


async def toggle_tasks(tasks: list[Task], paths: Optional[DataPaths] = None) -> list[Task]:
    """Flip done state for a batch of tasks.

    All records are written first, then the index is loaded, reindexed in
    memory for every task, and saved once.
    """
    now = now_ms()
    toggled = [_flip(task, now) for task in tasks]
    for task in toggled:
        await save_task(task, paths)

    async with modify_task_index(paths) as index:
        for task in toggled:
            reindex_task(index, task)

    logger.debug("Toggled %d tasks", len(toggled))
    return toggled


async def toggle_task(task: Task, paths: Optional[DataPaths] = None) -> Task:
    (toggled,) = await toggle_tasks([task], paths)
    return toggled


async def get_project_tasks(
    project_name: str,
    include_done: bool = False,
    paths: Optional[DataPaths] = None,
) -> list[Task]:
    """Tasks filed under ``project_name``, newest first."""
    index = await load_task_index(paths)
    ids = index.by_project.get(project_name, [])
    if not include_done:
        incomplete = set(index.incomplete)
        ids = [i for i in ids if i in incomplete]
    return await hydrate_tasks(ids, paths)


async def get_inbox_tasks(include_done: bool = False, paths: Optional[DataPaths] = None) -> list[Task]:
    index = await load_task_index(paths)
    ids = index.inbox
    if not include_done:
        incomplete = set(index.incomplete)
        ids = [i for i in ids if i in incomplete]
    return await hydrate_tasks(ids, paths)


async def list_tasks(include_done: bool = False, paths: Optional[DataPaths] = None) -> list[Task]:
    index = await load_task_index(paths)
    return await hydrate_tasks(index.all if include_done else index.incomplete, paths)


# --- Sessions ---

async def get_session(session_id: str, paths: Optional[DataPaths] = None) -> Session:
    paths = paths or get_paths()
    return Session.model_validate(await load_document(paths.session(session_id)))


async def save_session(session: Session, paths: Optional[DataPaths] = None) -> None:
    paths = paths or get_paths()
    await save_document(paths.session(session.id), session.dump_document())


async def hydrate_sessions(session_ids: list[str], paths: Optional[DataPaths] = None) -> list[Session]:
    return list(await asyncio.gather(*(get_session(session_id, paths) for session_id in session_ids)))


async def get_ongoing_session(paths: Optional[DataPaths] = None) -> Optional[Session]:
    session_id = await get_ongoing_session_id(paths)
    if session_id is None:
        return None
    return await get_session(session_id, paths)


async def create_session(project: Project, focus: str, paths: Optional[DataPaths] = None) -> Session:
    """Start a session for ``project``.

    Does not check for an existing ongoing session; callers must check
    ``get_ongoing_session()`` first.
    """
    session = Session(
        id=str(uuid.uuid4()),
        project_name=project.name,
        focus=focus,
        session_start=now_ms(),
    )
    await save_session(session, paths)
    await set_ongoing_session_id(session.id, paths)
    async with modify_session_index(paths) as index:
        index_new_session(index, session)

    logger.info("Session started on %s: %s", project.name, focus)
    return session


async def end_session(session: Session, paths: Optional[DataPaths] = None) -> Session:
    """Stamp ``session_end`` on an ongoing session and clear the pointer."""
    ended = session.model_copy(update={"session_end": now_ms()})
    await save_session(ended, paths)
    await clear_ongoing_session_id(paths)

    logger.info("Session ended on %s", ended.project_name)
    return ended


async def get_by_id(record_id: str, paths: Optional[DataPaths] = None) -> Union[Task, Session]:
    """Look a record up in tasks, then sessions."""
    try:
        return await get_task(record_id, paths)
    except DocumentNotFoundError:
        return await get_session(record_id, paths)
