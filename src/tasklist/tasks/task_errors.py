# src/tasklist/tasks/task_errors.py

from __future__ import annotations


class TaskListError(Exception):
    """Base class for task list errors."""


class HydrationParseError(TaskListError, ValueError):
    """Persisted blob exists but cannot be decoded into tasks."""


class PersistenceWriteError(TaskListError, RuntimeError):
    """The key-value store rejected a snapshot write."""


class ReorderMismatchError(TaskListError, ValueError):
    """A reorder request is not a permutation of the current list."""


class StoreNotHydratedError(TaskListError, RuntimeError):
    """Mutation attempted before hydration, or hydration attempted twice."""
