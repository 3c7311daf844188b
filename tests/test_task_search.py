# tests/test_task_search.py

from __future__ import annotations

import pytest

from tasklist.tasks.task_errors import ReorderMismatchError
from tasklist.tasks.task_models import Task
from tasklist.tasks.task_search import (
    EMPTY_LIST_MESSAGE,
    NOTHING_FOUND_MESSAGE,
    empty_message,
    merge_visible_order,
    project,
)

TASKS = (
    Task(id=5, title="Buy MILK"),
    Task(id=4, title="Walk dog", is_done=True),
    Task(id=3, title="milkshake recipe"),
    Task(id=2, title="Call mom"),
    Task(id=1, title="Dog food"),
)


def test_empty_query_returns_full_list() -> None:
    assert project(TASKS, "") == TASKS
    assert project((), "") == ()


def test_query_is_case_insensitive_substring() -> None:
    assert [t.id for t in project(TASKS, "milk")] == [5, 3]
    assert [t.id for t in project(TASKS, "DOG")] == [4, 1]
    assert project(TASKS, "zzz") == ()


def test_projection_is_ordered_subsequence() -> None:
    result = project(TASKS, "o")
    positions = [TASKS.index(t) for t in result]

    assert positions == sorted(positions)
    assert all("o" in t.title.lower() for t in result)
    assert [t for t in TASKS if "o" in t.title.lower()] == list(result)


def test_projection_is_deterministic() -> None:
    assert project(TASKS, "m") == project(TASKS, "m")
    assert project(project(TASKS, "m"), "m") == project(TASKS, "m")


def test_empty_message_depends_on_query() -> None:
    assert empty_message("") == EMPTY_LIST_MESSAGE
    assert empty_message("milk") == NOTHING_FOUND_MESSAGE
    assert EMPTY_LIST_MESSAGE == "No tasks yet. Add your first todo!"
    assert NOTHING_FOUND_MESSAGE == "Hmm… nothing found. Try another keyword?"


def test_merge_visible_order_keeps_hidden_tasks_in_place() -> None:
    visible = project(TASKS, "dog")  # ids 4, 1
    merged = merge_visible_order(TASKS, [visible[1], visible[0]])

    assert [t.id for t in merged] == [5, 1, 3, 2, 4]


def test_merge_visible_order_with_full_list_is_plain_reorder() -> None:
    new_order = list(reversed(TASKS))
    assert merge_visible_order(TASKS, new_order) == tuple(new_order)


def test_merge_visible_order_rejects_unknown_or_duplicate_ids() -> None:
    with pytest.raises(ReorderMismatchError):
        merge_visible_order(TASKS, [Task(id=99, title="ghost")])
    with pytest.raises(ReorderMismatchError):
        merge_visible_order(TASKS, [TASKS[0], TASKS[0]])
