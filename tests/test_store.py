"""Tests for the in-memory task store."""

from concurrent.futures import ThreadPoolExecutor
from uuid import uuid4

import pydantic
import pytest

from task_service.models import Task, TaskCreate, TaskUpdate
from task_service.store import SAMPLE_TASKS, TaskStore


def test_create_assigns_fresh_id(store: TaskStore) -> None:
    first = store.create(TaskCreate(title="One"))
    second = store.create(TaskCreate(title="Two"))
    assert first.id != second.id
    assert first.is_completed is False
    assert first.description == ""
    assert store.get(first.id) == first


def test_get_missing_returns_none(store: TaskStore) -> None:
    assert store.get(uuid4()) is None


def test_add_duplicate_id_is_noop(store: TaskStore) -> None:
    task = Task(id=uuid4(), title="Original")
    assert store.add(task) is True
    assert store.add(Task(id=task.id, title="Impostor")) is False
    assert store.get(task.id).title == "Original"
    assert len(store) == 1


def test_task_rejects_blank_title() -> None:
    with pytest.raises(pydantic.ValidationError):
        Task(id=uuid4(), title="   ")


def test_update_applies_only_supplied_fields(store: TaskStore) -> None:
    task = store.create(TaskCreate(title="Write report", description="Q3"))

    updated = store.update(task.id, TaskUpdate(is_completed=True))

    assert updated.model_dump() == {**task.model_dump(), "is_completed": True}
    assert store.get(task.id).is_completed is True
    assert store.get(task.id).description == "Q3"


def test_update_missing_returns_none(store: TaskStore) -> None:
    assert store.update(uuid4(), TaskUpdate(title="Nope")) is None


def test_update_never_stores_blank_title(store: TaskStore) -> None:
    task = store.create(TaskCreate(title="Keep"))
    with pytest.raises(pydantic.ValidationError):
        store.update(task.id, TaskUpdate(title=""))
    assert store.get(task.id) == task


def test_update_does_not_mutate_previous_snapshot(store: TaskStore) -> None:
    task = store.create(TaskCreate(title="Before"))
    store.update(task.id, TaskUpdate(title="After"))
    assert task.title == "Before"
    assert store.get(task.id).title == "After"


def test_delete(store: TaskStore) -> None:
    task = store.create(TaskCreate(title="Gone soon"))
    assert store.delete(task.id) is True
    assert store.get(task.id) is None
    assert store.delete(task.id) is False


def test_list_all_sorted(store: TaskStore) -> None:
    for title, done in [("b", True), ("d", False), ("a", True), ("c", False)]:
        task = store.create(TaskCreate(title=title))
        if done:
            store.update(task.id, TaskUpdate(is_completed=True))

    listed = [(t.is_completed, t.title) for t in store.list_all()]
    assert listed == [(False, "c"), (False, "d"), (True, "a"), (True, "b")]


def test_clear(store: TaskStore) -> None:
    store.create(TaskCreate(title="x"))
    store.clear()
    assert store.list_all() == []


def test_seed_samples(store: TaskStore) -> None:
    seeded = store.seed_samples()
    assert len(seeded) == len(SAMPLE_TASKS)
    assert [t.title for t in store.list_all()] == ["Complete the assignment", "Review the code"]


def test_concurrent_updates_on_distinct_ids(store: TaskStore) -> None:
    tasks = [store.create(TaskCreate(title=f"task-{i}")) for i in range(20)]

    def bump(index: int) -> None:
        task = tasks[index]
        for n in range(50):
            store.update(task.id, TaskUpdate(description=f"{index}-{n}"))
        store.update(task.id, TaskUpdate(is_completed=True))

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(bump, range(len(tasks))))

    for index, task in enumerate(tasks):
        final = store.get(task.id)
        assert final.title == f"task-{index}"
        assert final.description == f"{index}-49"
        assert final.is_completed is True


def test_concurrent_updates_on_same_id_stay_consistent(store: TaskStore) -> None:
    task = store.create(TaskCreate(title="shared"))
    payloads = [(f"title-{i}", f"desc-{i}") for i in range(200)]

    def write(pair: tuple[str, str]) -> None:
        title, description = pair
        store.update(task.id, TaskUpdate(title=title, description=description))

    with ThreadPoolExecutor(max_workers=16) as pool:
        list(pool.map(write, payloads))

    final = store.get(task.id)
    # Title and description must come from the same update.
    assert (final.title, final.description) in payloads
    assert final.title.split("-")[1] == final.description.split("-")[1]


def test_concurrent_create_and_delete(store: TaskStore) -> None:
    keep = [store.create(TaskCreate(title=f"keep-{i}")) for i in range(50)]
    drop = [store.create(TaskCreate(title=f"drop-{i}")) for i in range(50)]

    def churn(i: int) -> None:
        store.delete(drop[i].id)
        store.create(TaskCreate(title=f"new-{i}"))
        store.list_all()

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(churn, range(50)))

    listed = store.list_all()
    ids = [t.id for t in listed]
    assert len(ids) == len(set(ids)) == 100
    assert {t.id for t in keep} <= set(ids)
    assert not any(t.title.startswith("drop-") for t in listed)
