# src/tasklist/core/session.py

"""
User-intent surface for the single task-list screen.

The session holds the search query and forwards intents to the store.
It is the only thing the presentation layer talks to:
- submit_new_task / toggle_task / delete_task / reorder_tasks mutate through the store
- request_delete_task asks a DeleteConfirmer first
- visible_tasks is the search projection the presentation renders
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ..tasks.task_models import Task, TaskList
from ..tasks.task_search import empty_message, merge_visible_order, project
from ..tasks.task_store import TaskListStore
from .ports import DeleteConfirmer

logger = logging.getLogger(__name__)


def delete_prompt(task: Task) -> str:
    return f'Are you sure you want to delete "{task.title}"?'


class TaskListSession:
    def __init__(self, store: TaskListStore, confirmer: DeleteConfirmer) -> None:
        self._store = store
        self._confirmer = confirmer
        self._query = ""

    @property
    def store(self) -> TaskListStore:
        return self._store

    @property
    def query(self) -> str:
        return self._query

    @property
    def visible_tasks(self) -> TaskList:
        # Recomputed on every read, so it always reflects the latest list and query.
        return project(self._store.tasks, self._query)

    @property
    def empty_message(self) -> str:
        return empty_message(self._query)

    def set_search_query(self, text: str) -> TaskList:
        self._query = text or ""
        return self.visible_tasks

    def submit_new_task(self, text: str) -> Task | None:
        return self._store.add(text)

    def toggle_task(self, task_id: int) -> TaskList:
        return self._store.toggle(task_id)

    def delete_task(self, task_id: int) -> TaskList:
        return self._store.delete(task_id)

    async def request_delete_task(self, task_id: int) -> bool:
        """
        Ask for confirmation, then delete.

        Returns True if the task was deleted. Unknown ids and "Cancel" return False.
        """
        task = self._find(task_id)
        if task is None:
            return False

        confirmed = await self._confirmer.confirm_delete(task, delete_prompt(task))
        if not confirmed:
            logger.debug("Delete cancelled id=%s", task_id)
            return False

        self.delete_task(task_id)
        return True

    def reorder_tasks(self, new_order: Sequence[Task]) -> TaskList:
        return self._store.reorder(new_order)

    def reorder_visible_tasks(self, new_visible_order: Sequence[Task]) -> TaskList:
        """
        Apply a drag result from the (possibly filtered) visible list.

        Hidden tasks keep their slots; only visible ones are permuted.
        """
        merged = merge_visible_order(self._store.tasks, new_visible_order)
        return self._store.reorder(merged)

    def move_task(self, task_id: int, to_index: int) -> TaskList:
        """Move a visible task to `to_index` within the visible list (clamped)."""
        visible = list(self.visible_tasks)
        src = next((i for i, t in enumerate(visible) if t.id == task_id), None)
        if src is None:
            return self._store.tasks

        dst = max(0, min(len(visible) - 1, to_index))
        if dst == src:
            return self._store.tasks

        visible.insert(dst, visible.pop(src))
        return self.reorder_visible_tasks(visible)

    def _find(self, task_id: int) -> Task | None:
        return next((t for t in self._store.tasks if t.id == task_id), None)
