from __future__ import annotations

import json
from datetime import datetime, timezone

import pytest

from tasklist.domain.enums import Category
from tasklist.domain.errors import StorageError, ValidationError
from tasklist.services.task_store import NEXT_ID_KEY, TASKS_KEY, TaskStore

from .fakes import BrokenStorage, FakeStorage, FailingWritesStorage


def test_ids_are_unique_and_strictly_increasing(store: TaskStore) -> None:
    ids = [store.add(f"Task {n}").id for n in range(5)]
    store.remove(ids[-1])
    ids.append(store.add("After delete").id)

    assert ids == [1, 2, 3, 4, 5, 6]
    assert store.next_id == 7


@pytest.mark.parametrize("title", ["", "   ", "\t\n", None])
def test_add_rejects_blank_titles(store: TaskStore, storage: FakeStorage, title) -> None:
    with pytest.raises(ValidationError):
        store.add(title)

    assert store.get_all() == []
    assert store.next_id == 1
    assert storage.writes == 0


def test_add_trims_title_and_keeps_category(store: TaskStore) -> None:
    task = store.add("  Buy milk  ", "maison")

    assert task.title == "Buy milk"
    assert task.category == Category.MAISON
    assert task.completed is False
    assert task.created_at.tzinfo is not None


def test_add_defaults_to_divers(store: TaskStore) -> None:
    assert store.add("Something").category == Category.DIVERS
    assert store.add("Other", "unknown").category == Category.DIVERS


def test_insertion_order_is_preserved(store: TaskStore) -> None:
    for title in ("b", "a", "c"):
        store.add(title)

    assert [task.title for task in store.get_all()] == ["b", "a", "c"]


def test_unknown_ids_are_noops(store: TaskStore, storage: FakeStorage) -> None:
    store.add("Keep me", "travail")
    before = store.get_all()
    writes = storage.writes

    store.remove(9999)
    store.toggle_completion(9999)
    store.set_category(9999, "maison")

    assert store.get_all() == before
    # remove persists even without a match; toggle and set_category do not
    assert storage.writes == writes + 1


def test_get_all_returns_a_snapshot(store: TaskStore) -> None:
    store.add("First")
    snapshot = store.get_all()
    snapshot.clear()

    assert len(store.get_all()) == 1


def test_get_by_category_applies_no_fallback(store: TaskStore) -> None:
    store.add("Work", "travail")
    store.add("Misc")

    assert [task.title for task in store.get_by_category("travail")] == ["Work"]
    assert [task.title for task in store.get_by_category(Category.DIVERS)] == ["Misc"]
    assert store.get_by_category("unknown") == []


def test_every_mutation_is_persisted(store: TaskStore, storage: FakeStorage) -> None:
    task = store.add("Clean house", "maison")
    store.toggle_completion(task.id)
    store.set_category(task.id, "travail")

    records = json.loads(storage.items[TASKS_KEY])
    assert records == [{
        "id": 1,
        "title": "Clean house",
        "completed": True,
        "category": "travail",
        "createdAt": records[0]["createdAt"],
    }]
    assert records[0]["createdAt"].endswith("Z")
    assert storage.items[NEXT_ID_KEY] == "2"
    assert storage.writes == 3


def test_round_trip_through_storage(store: TaskStore, storage: FakeStorage) -> None:
    store.add("Write report", "travail")
    store.add("Water plants", "maison")
    store.add("Call back")
    store.toggle_completion(2)
    store.remove(3)
    before = store.get_all()

    reloaded = TaskStore(FakeStorage(storage.items))

    assert reloaded.get_all() == before
    assert reloaded.next_id == 4


def test_hydration_restores_fields() -> None:
    storage = FakeStorage({
        TASKS_KEY: json.dumps([
            {"id": 3, "title": "Old", "completed": True, "category": "maison",
             "createdAt": "2024-05-01T10:20:30.123Z"},
            {"id": 7, "title": "Strange", "completed": False, "category": "garage"},
        ]),
        NEXT_ID_KEY: "8",
    })

    store = TaskStore(storage)
    old, strange = store.get_all()

    assert old.completed is True
    assert old.category == Category.MAISON
    assert old.created_at == datetime(2024, 5, 1, 10, 20, 30, 123000, tzinfo=timezone.utc)
    assert strange.category == Category.DIVERS
    assert store.add("New").id == 8


@pytest.mark.parametrize(
    "payload",
    [
        "not json",
        json.dumps({"id": 1}),
        json.dumps([{"title": "no id"}]),
        json.dumps([{"id": 1, "title": "   "}]),
        json.dumps([{"id": 1, "title": "a"}, {"id": 1, "title": "b"}]),
        json.dumps([{"id": 1, "title": "a", "createdAt": "yesterday"}]),
    ],
)
def test_corrupt_tasks_reset_to_empty(payload: str) -> None:
    store = TaskStore(FakeStorage({TASKS_KEY: payload, NEXT_ID_KEY: "5"}))

    assert store.get_all() == []
    assert store.add("Fresh").id == 5


def test_unreadable_storage_starts_empty() -> None:
    store = TaskStore(BrokenStorage())

    assert store.get_all() == []
    assert store.next_id == 1


def test_next_id_never_reuses_persisted_ids() -> None:
    tasks = json.dumps([{"id": 4, "title": "Existing", "completed": False, "category": "divers"}])

    missing = TaskStore(FakeStorage({TASKS_KEY: tasks}))
    stale = TaskStore(FakeStorage({TASKS_KEY: tasks, NEXT_ID_KEY: "2"}))
    garbage = TaskStore(FakeStorage({TASKS_KEY: tasks, NEXT_ID_KEY: "abc"}))

    assert missing.next_id == 5
    assert stale.next_id == 5
    assert garbage.next_id == 5


def test_failed_write_leaves_memory_untouched() -> None:
    seed = FakeStorage()
    TaskStore(seed).add("Existing", "maison")
    store = TaskStore(FailingWritesStorage(seed.items))
    before = store.get_all()

    with pytest.raises(StorageError):
        store.add("Lost")
    with pytest.raises(StorageError):
        store.remove(1)
    with pytest.raises(StorageError):
        store.toggle_completion(1)
    with pytest.raises(StorageError):
        store.set_category(1, "travail")

    assert store.get_all() == before
    assert store.next_id == 2


def test_store_recovers_after_failed_write() -> None:
    storage = FailingWritesStorage()
    store = TaskStore(storage)
    with pytest.raises(StorageError):
        store.add("Lost")

    storage.fail_writes = False
    task = store.add("Kept")

    assert task.id == 1
    assert [t.title for t in store.get_all()] == ["Kept"]


@pytest.mark.parametrize("completed", ["false", "true", 0, 1, None])
def test_non_boolean_completed_is_malformed(completed) -> None:
    payload = json.dumps([{"id": 1, "title": "a", "completed": completed, "category": "divers"}])

    store = TaskStore(FakeStorage({TASKS_KEY: payload}))

    assert store.get_all() == []


def test_external_microsecond_timestamps_round_trip_exactly() -> None:
    payload = json.dumps([{
        "id": 1, "title": "Imported", "completed": False, "category": "maison",
        "createdAt": "2024-05-01T10:20:30.123456+00:00",
    }])
    first = TaskStore(FakeStorage({TASKS_KEY: payload, NEXT_ID_KEY: "2"}))
    assert first.get_all()[0].created_at == datetime(2024, 5, 1, 10, 20, 30, 123000, tzinfo=timezone.utc)

    resaved = FakeStorage({TASKS_KEY: payload, NEXT_ID_KEY: "2"})
    store = TaskStore(resaved)
    store.toggle_completion(1)
    store.toggle_completion(1)

    assert TaskStore(FakeStorage(resaved.items)).get_all() == first.get_all()
