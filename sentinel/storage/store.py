"""Process-wide store document: project registry and the ongoing-session pointer.

Nothing here is cached between calls; every accessor loads store.json,
applies its change and writes the whole document back.
"""

import logging
from typing import Callable, Optional

from sentinel.storage.documents import load_with_default, save_document
from sentinel.storage.models import Config, Project, Store
from sentinel.storage.paths import DataPaths, get_paths

logger = logging.getLogger(__name__)

StorePatch = dict


async def load_config(paths: Optional[DataPaths] = None) -> Config:
    paths = paths or get_paths()
    return Config.model_validate(await load_with_default(paths.config, Config().dump_document()))


async def load_store(paths: Optional[DataPaths] = None) -> Store:
    paths = paths or get_paths()
    return Store.model_validate(await load_with_default(paths.store, Store().dump_document()))


async def save_store(store: Store, paths: Optional[DataPaths] = None) -> None:
    paths = paths or get_paths()
    await save_document(paths.store, store.dump_document())


async def update_store(
    modifier: Callable[[Store], Optional[StorePatch]],
    paths: Optional[DataPaths] = None,
) -> bool:
    """Apply ``modifier``'s patch to the current store and save it.

    ``modifier`` receives the freshly loaded store and returns a mapping of
    field name to new value, or None to leave the store untouched.

    Returns:
        True if the store was written.
    """
    store = await load_store(paths)
    patch = modifier(store)
    if patch is None:
        return False

    for field, value in patch.items():
        setattr(store, field, value)
    await save_store(store, paths)
    return True


async def set_store(paths: Optional[DataPaths] = None, **fields) -> None:
    """Overwrite the given store fields regardless of current state."""
    await update_store(lambda _store: fields, paths)


# --- Projects ---

async def get_project(name: str, paths: Optional[DataPaths] = None) -> Optional[Project]:
    store = await load_store(paths)
    return store.projects.get(name)


async def list_projects(paths: Optional[DataPaths] = None) -> list[Project]:
    store = await load_store(paths)
    return list(store.projects.values())


async def add_project(project: Project, paths: Optional[DataPaths] = None) -> Project:
    def _add(store: Store) -> StorePatch:
        return {"projects": {**store.projects, project.name: project}}

    await update_store(_add, paths)
    logger.debug("Saved project %s", project.name)
    return project


# --- Ongoing session pointer ---

async def get_ongoing_session_id(paths: Optional[DataPaths] = None) -> Optional[str]:
    store = await load_store(paths)
    return store.ongoing_session


async def set_ongoing_session_id(session_id: str, paths: Optional[DataPaths] = None) -> None:
    await set_store(paths, ongoing_session=session_id)


async def clear_ongoing_session_id(paths: Optional[DataPaths] = None) -> bool:
    """Clear the pointer; returns False when nothing was ongoing."""

    def _clear(store: Store) -> Optional[StorePatch]:
        if store.ongoing_session is None:
            return None
        return {"ongoing_session": None}

    return await update_store(_clear, paths)
