from __future__ import annotations

import pytest

from tasklist.services.task_controller import TaskController
from tasklist.services.task_store import TaskStore

from .fakes import FakeStorage


@pytest.fixture
def storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture
def store(storage: FakeStorage) -> TaskStore:
    return TaskStore(storage)


@pytest.fixture
def controller(store: TaskStore) -> TaskController:
    return TaskController(store)
