# tests/test_session.py

from __future__ import annotations

import json

import pytest

from tasklist.core.session import TaskListSession, delete_prompt
from tasklist.tasks.task_models import Task
from tasklist.tasks.task_search import NOTHING_FOUND_MESSAGE
from tasklist.tasks.task_store import TaskListStore

from .conftest import STORAGE_KEY
from .fakes import FakeConfirmer, FakeKeyValueStorage


def _titles(tasks) -> list[tuple[str, bool]]:
    return [(t.title, t.is_done) for t in tasks]


@pytest.mark.asyncio
async def test_buy_milk_walk_dog_scenario(session: TaskListSession, storage: FakeKeyValueStorage) -> None:
    await session.store.hydrate()
    assert session.visible_tasks == ()

    session.submit_new_task("Buy milk")
    assert _titles(session.store.tasks) == [("Buy milk", False)]

    session.submit_new_task("Walk dog")
    assert _titles(session.store.tasks) == [("Walk dog", False), ("Buy milk", False)]

    milk = session.store.tasks[1]
    session.toggle_task(milk.id)
    assert _titles(session.store.tasks) == [("Walk dog", False), ("Buy milk", True)]

    session.set_search_query("dog")
    assert _titles(session.visible_tasks) == [("Walk dog", False)]

    dog = session.visible_tasks[0]
    session.delete_task(dog.id)
    assert _titles(session.store.tasks) == [("Buy milk", True)]
    assert session.visible_tasks == ()
    assert session.empty_message == NOTHING_FOUND_MESSAGE

    await session.store.flush()
    assert json.loads(storage.data[STORAGE_KEY]) == [{"id": milk.id, "title": "Buy milk", "isDone": True}]


@pytest.mark.asyncio
async def test_query_survives_mutations(session: TaskListSession) -> None:
    await session.store.hydrate()
    session.set_search_query("milk")

    session.submit_new_task("oat MILK")
    session.submit_new_task("bread")

    assert session.query == "milk"
    assert _titles(session.visible_tasks) == [("oat MILK", False)]
    await session.store.flush()


@pytest.mark.asyncio
async def test_request_delete_asks_then_deletes(session: TaskListSession, confirmer: FakeConfirmer) -> None:
    await session.store.hydrate()
    task = session.submit_new_task("Walk dog")
    assert task is not None

    assert await session.request_delete_task(task.id) is True

    assert confirmer.prompts == ['Are you sure you want to delete "Walk dog"?']
    assert session.store.tasks == ()
    await session.store.flush()


@pytest.mark.asyncio
async def test_request_delete_cancelled_keeps_task(session: TaskListSession, confirmer: FakeConfirmer) -> None:
    await session.store.hydrate()
    task = session.submit_new_task("Walk dog")
    assert task is not None
    confirmer.answer = False

    assert await session.request_delete_task(task.id) is False
    assert session.store.tasks == (task,)
    await session.store.flush()


@pytest.mark.asyncio
async def test_request_delete_unknown_id_does_not_prompt(session: TaskListSession, confirmer: FakeConfirmer) -> None:
    await session.store.hydrate()

    assert await session.request_delete_task(404) is False
    assert confirmer.asked == []


def test_delete_prompt_quotes_title() -> None:
    assert delete_prompt(Task(id=1, title="x")) == 'Are you sure you want to delete "x"?'


@pytest.mark.asyncio
async def test_reorder_is_reflected_in_projection(session: TaskListSession) -> None:
    await session.store.hydrate()
    for title in ("a", "b", "c"):
        session.submit_new_task(title)

    session.reorder_tasks(list(reversed(session.store.tasks)))

    assert [t.title for t in session.visible_tasks] == ["a", "b", "c"]
    await session.store.flush()


@pytest.mark.asyncio
async def test_reorder_under_filter_keeps_hidden_tasks() -> None:
    seeded = [
        {"id": 4, "title": "milk", "isDone": False},
        {"id": 3, "title": "bread", "isDone": False},
        {"id": 2, "title": "soy milk", "isDone": False},
        {"id": 1, "title": "eggs", "isDone": False},
    ]
    storage = FakeKeyValueStorage({STORAGE_KEY: json.dumps(seeded)})
    session = TaskListSession(TaskListStore(storage, key=STORAGE_KEY), FakeConfirmer())
    await session.store.hydrate()
    session.set_search_query("milk")

    visible = session.visible_tasks
    session.reorder_visible_tasks([visible[1], visible[0]])

    assert [t.id for t in session.store.tasks] == [2, 3, 4, 1]
    assert [t.title for t in session.visible_tasks] == ["soy milk", "milk"]

    await session.store.flush()
    assert [r["id"] for r in json.loads(storage.data[STORAGE_KEY])] == [2, 3, 4, 1]


@pytest.mark.asyncio
async def test_move_task_within_visible_list(session: TaskListSession) -> None:
    await session.store.hydrate()
    for title in ("d", "c", "b", "a"):
        session.submit_new_task(title)
    assert [t.title for t in session.store.tasks] == ["a", "b", "c", "d"]

    a = session.store.tasks[0]
    session.move_task(a.id, 2)
    assert [t.title for t in session.store.tasks] == ["b", "c", "a", "d"]

    # Out-of-range targets clamp to the ends.
    session.move_task(a.id, 99)
    assert [t.title for t in session.store.tasks] == ["b", "c", "d", "a"]

    before = session.store.tasks
    assert session.move_task(12345, 0) == before
    await session.store.flush()
