from __future__ import annotations

import logging
from typing import Callable

from tasklist.domain.entities import TaskEntity
from tasklist.domain.enums import CATEGORY_ORDER, DEFAULT_CATEGORY
from tasklist.domain.errors import ValidationError
from tasklist.domain.renderers import get_renderer
from tasklist.domain.results import AddTaskResult, CategoryGroup

from .task_store import TaskStore

logger = logging.getLogger(__name__)

TasksListener = Callable[[list[TaskEntity]], None]


class TaskController:
    """Bridges the task store and the view.

    Every mutation is followed by a refresh: the controller re-reads the full
    snapshot and hands it to each subscribed listener.
    """

    def __init__(self, store: TaskStore) -> None:
        self._store = store
        self._listeners: list[TasksListener] = []
        self._tasks: list[TaskEntity] = store.get_all()

    @property
    def tasks(self) -> list[TaskEntity]:
        return list(self._tasks)

    def subscribe(self, listener: TasksListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: TasksListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def refresh(self) -> list[TaskEntity]:
        self._tasks = self._store.get_all()
        for listener in list(self._listeners):
            listener(self.tasks)
        return self.tasks

    def add_task(self, title: str, category: str | None = DEFAULT_CATEGORY) -> AddTaskResult:
        try:
            task = self._store.add(title, category)
        except ValidationError as exc:
            logger.info("Task rejected: %s", exc)
            return AddTaskResult.failure(str(exc))
        self.refresh()
        return AddTaskResult.success(task)

    def delete_task(self, task_id: int) -> None:
        self._store.remove(task_id)
        self.refresh()

    def toggle_task_completion(self, task_id: int) -> None:
        self._store.toggle_completion(task_id)
        self.refresh()

    def change_task_category(self, task_id: int, category: str) -> None:
        self._store.set_category(task_id, category)
        self.refresh()

    def get_tasks_by_category(self, category: str) -> list[TaskEntity]:
        return self._store.get_by_category(category)

    def grouped(self) -> list[CategoryGroup]:
        return [
            CategoryGroup(
                category=category,
                style=get_renderer(category),
                tasks=[task for task in self._tasks if task.category == category],
            )
            for category in CATEGORY_ORDER
        ]
