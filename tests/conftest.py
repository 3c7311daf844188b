# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from tasklist.core.session import TaskListSession
from tasklist.tasks.task_models import TaskIdGenerator
from tasklist.tasks.task_store import TaskListStore

from .fakes import FakeConfirmer, FakeKeyValueStorage

STORAGE_KEY = "my-todo"


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with bootstrap and the console connector.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="Todo App",
        log_level="INFO",
        console_enabled=False,
        data_dir=tmp_path / "data",
        storage_db_path=tmp_path / "data" / "storage.sqlite3",
        storage_key=STORAGE_KEY,
    )


@pytest.fixture()
def storage() -> FakeKeyValueStorage:
    return FakeKeyValueStorage()


@pytest.fixture()
def id_generator() -> TaskIdGenerator:
    # Frozen clock: every id collides on the timestamp and must be bumped.
    return TaskIdGenerator(clock=lambda: 1_700_000_000.0)


@pytest.fixture()
def store(storage: FakeKeyValueStorage, id_generator: TaskIdGenerator) -> TaskListStore:
    """Not hydrated yet; tests call `await store.hydrate()` themselves."""
    return TaskListStore(storage, key=STORAGE_KEY, id_generator=id_generator)


@pytest.fixture()
def confirmer() -> FakeConfirmer:
    return FakeConfirmer()


@pytest.fixture()
def session(store: TaskListStore, confirmer: FakeConfirmer) -> TaskListSession:
    return TaskListSession(store, confirmer)
