# src/tasklist/tasks/task_search.py

from __future__ import annotations

"""
Search projection and order merging.

Both functions are pure: they never touch the store and always return new tuples.
"""

from collections.abc import Sequence

from .task_errors import ReorderMismatchError
from .task_models import Task, TaskList

EMPTY_LIST_MESSAGE = "No tasks yet. Add your first todo!"
NOTHING_FOUND_MESSAGE = "Hmm… nothing found. Try another keyword?"


def project(tasks: Sequence[Task], query: str) -> TaskList:
    """Tasks whose title contains `query` (case-insensitive), in canonical order."""
    if not query:
        return tuple(tasks)
    needle = query.lower()
    return tuple(t for t in tasks if needle in t.title.lower())


def empty_message(query: str) -> str:
    return NOTHING_FOUND_MESSAGE if query else EMPTY_LIST_MESSAGE


def merge_visible_order(canonical: Sequence[Task], visible_new: Sequence[Task]) -> TaskList:
    """
    Put a reordered subset back into the canonical list.

    The slots held by the visible tasks are refilled with `visible_new` in its
    order; tasks that are hidden by the filter keep their slots.
    Raises ReorderMismatchError if `visible_new` names an id that is not in
    `canonical` or repeats one.
    """
    new_ids = [t.id for t in visible_new]
    if len(set(new_ids)) != len(new_ids):
        raise ReorderMismatchError("visible order contains duplicate ids")

    by_id = {t.id: t for t in canonical}
    unknown = [i for i in new_ids if i not in by_id]
    if unknown:
        raise ReorderMismatchError(f"visible order contains unknown ids: {unknown}")

    moved = set(new_ids)
    incoming = iter(new_ids)
    out: list[Task] = []
    for t in canonical:
        if t.id in moved:
            out.append(by_id[next(incoming)])
        else:
            out.append(t)
    return tuple(out)
