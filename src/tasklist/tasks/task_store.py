# src/tasklist/tasks/task_store.py

from __future__ import annotations

import asyncio
import logging
from collections import Counter
from collections.abc import Sequence

from ..core.ports import KeyValueStorage
from .task_errors import (
    HydrationParseError,
    PersistenceWriteError,
    ReorderMismatchError,
    StoreNotHydratedError,
)
from .task_models import Task, TaskIdGenerator, TaskList, deserialize_tasks, serialize_tasks, task_ids

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "my-todo"


class TaskListStore:
    """
    Owner of the canonical task list.

    State model:
    - `tasks` is an immutable tuple; every mutation swaps in a new tuple
    - mutations are synchronous: the next read sees the new list

    Persistence:
    - every mutation schedules a full-snapshot write under one fixed key
    - writes are fire-and-forget asyncio tasks, never awaited by callers
    - writes may overlap; the last one to finish wins (eventual consistency)
    - a failed write is logged, not retried, and never rolls back memory
    - outside a running event loop no write is issued; this is logged like a failed write

    Mutations are refused until hydrate() has completed, so a late hydration
    can never overwrite a user's change.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        *,
        key: str = DEFAULT_STORAGE_KEY,
        id_generator: TaskIdGenerator | None = None,
    ) -> None:
        self._storage = storage
        self._key = key
        self._ids = id_generator or TaskIdGenerator()
        self._tasks: TaskList = ()
        self._hydrated = False
        self._pending_writes: set[asyncio.Task[None]] = set()

    @property
    def tasks(self) -> TaskList:
        return self._tasks

    @property
    def hydrated(self) -> bool:
        return self._hydrated

    @property
    def pending_writes(self) -> int:
        return len(self._pending_writes)

    # ---- hydration ----

    async def hydrate(self) -> TaskList:
        """
        Load the persisted snapshot once.

        Missing key -> empty list.
        Unreadable store or malformed blob -> empty list, logged.
        """
        if self._hydrated:
            raise StoreNotHydratedError("hydrate() may only run once")

        tasks: TaskList = ()
        try:
            blob = await self._storage.get_item(self._key)
        except Exception:
            logger.exception("Failed to read persisted tasks key=%s", self._key)
            blob = None

        if blob:
            try:
                tasks = deserialize_tasks(blob)
            except HydrationParseError as e:
                logger.warning("Discarding persisted tasks key=%s: %s", self._key, e)
                tasks = ()

        self._tasks = tasks
        self._ids.observe(task_ids(tasks))
        self._hydrated = True
        logger.info("TaskListStore hydrated key=%s total=%s", self._key, len(tasks))
        return tasks

    # ---- mutations ----

    def add(self, raw_title: str) -> Task | None:
        """Prepend a new task. Blank titles are ignored and return None."""
        self._require_hydrated()
        title = (raw_title or "").strip()
        if not title:
            return None

        task = Task(id=self._ids.next_id(), title=title, is_done=False)
        self._commit((task, *self._tasks))
        logger.debug("Task added id=%s", task.id)
        return task

    def toggle(self, task_id: int) -> TaskList:
        self._require_hydrated()
        if not any(t.id == task_id for t in self._tasks):
            return self._tasks

        updated = tuple(t.toggled() if t.id == task_id else t for t in self._tasks)
        self._commit(updated)
        logger.debug("Task toggled id=%s", task_id)
        return updated

    def delete(self, task_id: int) -> TaskList:
        """Remove a task unconditionally. Confirmation happens upstream."""
        self._require_hydrated()
        updated = tuple(t for t in self._tasks if t.id != task_id)
        if len(updated) == len(self._tasks):
            return self._tasks

        self._commit(updated)
        logger.debug("Task deleted id=%s", task_id)
        return updated

    def reorder(self, new_order: Sequence[Task]) -> TaskList:
        """
        Replace the canonical order with a permutation of the current tasks.

        Only ids are taken from `new_order`; task values come from the current
        list, so a stale snapshot cannot edit a title or a done flag.
        Raises ReorderMismatchError (list untouched, nothing written) if the ids
        are not exactly the current ids.
        """
        self._require_hydrated()
        new_ids = [t.id for t in new_order]
        if Counter(new_ids) != Counter(task_ids(self._tasks)):
            raise ReorderMismatchError(
                f"reorder must permute existing tasks: got {len(new_ids)} ids "
                f"for {len(self._tasks)} tasks"
            )

        by_id = {t.id: t for t in self._tasks}
        updated = tuple(by_id[i] for i in new_ids)
        self._commit(updated)
        logger.debug("Tasks reordered total=%s", len(updated))
        return updated

    # ---- persistence ----

    async def flush(self) -> None:
        """Wait for writes already in flight. Used on shutdown and in tests."""
        while self._pending_writes:
            await asyncio.gather(*list(self._pending_writes), return_exceptions=True)

    def _require_hydrated(self) -> None:
        if not self._hydrated:
            raise StoreNotHydratedError("task list is not hydrated yet")

    def _commit(self, tasks: TaskList) -> None:
        self._tasks = tasks
        self._schedule_write(serialize_tasks(tasks))

    def _schedule_write(self, blob: str) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.error("No running event loop; snapshot not persisted key=%s", self._key)
            return
        task = loop.create_task(self._write(blob))
        self._pending_writes.add(task)
        task.add_done_callback(self._pending_writes.discard)

    async def _write(self, blob: str) -> None:
        try:
            await self._storage.set_item(self._key, blob)
        except PersistenceWriteError:
            logger.exception("Failed to persist tasks key=%s", self._key)
        except Exception:
            logger.exception("Unexpected storage error while persisting tasks key=%s", self._key)
