# src/tasklist/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..tasks.task_store import TaskListStore
from .ports import KeyValueStorage
from .session import TaskListSession


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: Any

    storage: KeyValueStorage
    store: TaskListStore
    session: TaskListSession
