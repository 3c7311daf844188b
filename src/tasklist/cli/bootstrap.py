# src/tasklist/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires concrete implementations into AppState (storage/store/session),
- hydrates the task list before anything can mutate it.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..connectors.console_connector import ConsoleDeleteConfirmer
from ..core.ports import DeleteConfirmer, KeyValueStorage
from ..core.session import TaskListSession
from ..core.state import AppState
from ..storage.kv_store import SqliteKeyValueStore
from ..tasks.task_store import TaskListStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.storage_db_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(
    *,
    settings=None,
    storage: KeyValueStorage | None = None,
    confirmer: DeleteConfirmer | None = None,
) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings and collaborators injectable makes the app easier to test and
    avoids hidden global config reads. If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    if storage is None:
        _ensure_local_dirs(settings)
        storage = SqliteKeyValueStore(settings.storage_db_path)

    store = TaskListStore(storage, key=settings.storage_key)
    session = TaskListSession(store, confirmer or ConsoleDeleteConfirmer())

    return AppState(settings=settings, storage=storage, store=store, session=session)


async def start_app(state: AppState) -> AppState:
    """Hydrate the store. Must finish before the first intent is dispatched."""
    await state.store.hydrate()
    return state


async def shutdown_app(state: AppState) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    try:
        await state.store.flush()
    except Exception:
        logger.exception("Failed to flush pending task writes.")
