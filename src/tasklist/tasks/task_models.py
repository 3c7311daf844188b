# src/tasklist/tasks/task_models.py

from __future__ import annotations

import json
import time
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, replace
from typing import Any

from .task_errors import HydrationParseError


@dataclass(frozen=True, slots=True)
class Task:
    id: int
    title: str
    is_done: bool = False

    def toggled(self) -> Task:
        return replace(self, is_done=not self.is_done)


# Canonical order is significant: index 0 is the top of the list.
TaskList = tuple[Task, ...]


def serialize_tasks(tasks: Iterable[Task]) -> str:
    """Encode tasks as the persisted JSON array of {id, title, isDone} records."""
    payload = [{"id": t.id, "title": t.title, "isDone": t.is_done} for t in tasks]
    return json.dumps(payload, ensure_ascii=False)


def _record_to_task(rec: Any) -> Task:
    if not isinstance(rec, dict):
        raise HydrationParseError(f"task record is not an object: {rec!r}")

    raw_id = rec.get("id")
    title = rec.get("title")
    is_done = rec.get("isDone", False)

    # bool is an int subclass; reject it as an id.
    if isinstance(raw_id, bool) or not isinstance(raw_id, int):
        raise HydrationParseError(f"task id must be an integer: {raw_id!r}")
    if not isinstance(title, str) or not title.strip():
        raise HydrationParseError(f"task {raw_id} has an empty or non-string title")
    if not isinstance(is_done, bool):
        raise HydrationParseError(f"task {raw_id} has a non-boolean isDone")

    return Task(id=raw_id, title=title, is_done=is_done)


def deserialize_tasks(blob: str) -> TaskList:
    """
    Decode a persisted blob into a TaskList.

    The format has no version field, so anything unexpected is a parse error:
    - invalid JSON or a non-array top level
    - records missing fields or with wrong types
    - duplicate ids
    """
    try:
        data = json.loads(blob)
    except (TypeError, ValueError, RecursionError) as e:
        raise HydrationParseError(f"persisted blob is not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise HydrationParseError("persisted blob is not a JSON array")

    tasks = tuple(_record_to_task(rec) for rec in data)

    seen: set[int] = set()
    for t in tasks:
        if t.id in seen:
            raise HydrationParseError(f"duplicate task id {t.id}")
        seen.add(t.id)

    return tasks


class TaskIdGenerator:
    """
    Timestamp-derived id source that never repeats.

    Ids are milliseconds since the epoch, bumped past the last issued id when
    the clock has not advanced (two adds in the same millisecond, clock going
    backwards). `observe` seeds the floor from hydrated ids.
    """

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._last_id = 0

    def observe(self, ids: Iterable[int]) -> None:
        for i in ids:
            if i > self._last_id:
                self._last_id = i

    def next_id(self) -> int:
        now_ms = int(self._clock() * 1000)
        new_id = max(now_ms, self._last_id + 1)
        self._last_id = new_id
        return new_id


def task_ids(tasks: Sequence[Task]) -> list[int]:
    return [t.id for t in tasks]
