# src/tasklist/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps the storage backend and the presentation layer swappable
and makes testing easier.
"""

from typing import Awaitable, Protocol

from ..tasks.task_models import Task


class KeyValueStorage(Protocol):
    """
    String key-value store holding the persisted snapshot.

    get_item returns None when the key was never written.
    set_item may raise; the caller logs and moves on.
    """

    def get_item(self, key: str) -> Awaitable[str | None]: ...

    def set_item(self, key: str, value: str) -> Awaitable[None]: ...


class DeleteConfirmer(Protocol):
    """
    Presentation-side port: ask the user whether a task should really be deleted.

    Returns True on "Delete", False on "Cancel".
    """

    def confirm_delete(self, task: Task, prompt: str) -> Awaitable[bool]: ...
