from __future__ import annotations

import json
import logging
import threading
from datetime import datetime, timezone
from typing import Any

from tasklist.domain.entities import TaskEntity, utcnow
from tasklist.domain.enums import Category, DEFAULT_CATEGORY
from tasklist.domain.errors import StorageError, ValidationError
from tasklist.infra.storage import KeyValueStorage

logger = logging.getLogger(__name__)

TASKS_KEY = "tasks"
NEXT_ID_KEY = "nextId"


def _format_timestamp(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _parse_timestamp(value: Any) -> datetime:
    if not isinstance(value, str):
        raise TypeError(f"createdAt must be a string, got {type(value).__name__}")
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    parsed = parsed.astimezone(timezone.utc)
    return parsed.replace(microsecond=parsed.microsecond // 1000 * 1000)


def _to_record(task: TaskEntity) -> dict[str, Any]:
    return {
        "id": task.id,
        "title": task.title,
        "completed": task.completed,
        "category": task.category.value,
        "createdAt": _format_timestamp(task.created_at),
    }


def _from_record(data: Any) -> TaskEntity:
    if not isinstance(data, dict):
        raise TypeError(f"task record must be an object, got {type(data).__name__}")
    task_id = data["id"]
    if isinstance(task_id, bool) or not isinstance(task_id, int):
        raise TypeError(f"task id must be an integer, got {task_id!r}")
    title = data["title"]
    if not isinstance(title, str) or not title.strip():
        raise ValueError(f"task {task_id} has an empty title")
    completed = data.get("completed", False)
    if not isinstance(completed, bool):
        raise TypeError(f"task {task_id} has a non-boolean completed flag {completed!r}")
    created_at = data.get("createdAt")
    return TaskEntity(
        id=task_id,
        title=title,
        category=Category.coerce(data.get("category")),
        completed=completed,
        created_at=_parse_timestamp(created_at) if created_at else utcnow(),
    )


def _parse_tasks(raw: str) -> list[TaskEntity]:
    payload = json.loads(raw)
    if not isinstance(payload, list):
        raise TypeError(f"persisted tasks must be a JSON array, got {type(payload).__name__}")
    tasks = [_from_record(item) for item in payload]
    ids = [task.id for task in tasks]
    if len(ids) != len(set(ids)):
        raise ValueError("persisted tasks contain duplicate ids")
    return tasks


class TaskStore:
    """Authoritative in-memory task collection backed by key-value storage.

    State is read from storage once, at construction. Each mutation writes the
    whole collection and the id counter back before returning.
    """

    def __init__(self, storage: KeyValueStorage) -> None:
        self._storage = storage
        self._lock = threading.RLock()
        self._tasks: list[TaskEntity] = []
        self._next_id = 1
        self._hydrate()
        logger.info("TaskStore ready total=%s next_id=%s", len(self._tasks), self._next_id)

    @property
    def next_id(self) -> int:
        return self._next_id

    # ---- queries ----

    def get_all(self) -> list[TaskEntity]:
        with self._lock:
            return list(self._tasks)

    def get_by_category(self, category: str) -> list[TaskEntity]:
        return [task for task in self.get_all() if task.category == category]

    # ---- mutations ----

    def add(self, title: str, category: str | None = DEFAULT_CATEGORY) -> TaskEntity:
        if not isinstance(title, str) or not title.strip():
            raise ValidationError("Task title must not be empty")

        with self._lock:
            task = TaskEntity(
                id=self._next_id,
                title=title.strip(),
                category=Category.coerce(category),
            )
            self._commit([*self._tasks, task], self._next_id + 1)
        logger.debug("Task added id=%s category=%s", task.id, task.category.value)
        return task

    def remove(self, task_id: int) -> None:
        with self._lock:
            self._commit([task for task in self._tasks if task.id != task_id], self._next_id)

    def toggle_completion(self, task_id: int) -> None:
        with self._lock:
            index = self._index_of(task_id)
            if index is None:
                return
            tasks = list(self._tasks)
            tasks[index] = tasks[index].toggled()
            self._commit(tasks, self._next_id)

    def set_category(self, task_id: int, category: str | None) -> None:
        with self._lock:
            index = self._index_of(task_id)
            if index is None:
                return
            tasks = list(self._tasks)
            tasks[index] = tasks[index].with_category(category)
            self._commit(tasks, self._next_id)

    # ---- persistence ----

    def _index_of(self, task_id: int) -> int | None:
        return next(
            (index for index, task in enumerate(self._tasks) if task.id == task_id),
            None,
        )

    def _commit(self, tasks: list[TaskEntity], next_id: int) -> None:
        # Memory only changes once storage has accepted the write.
        self._storage.set_items({
            TASKS_KEY: json.dumps([_to_record(task) for task in tasks], ensure_ascii=False),
            NEXT_ID_KEY: str(next_id),
        })
        self._tasks = tasks
        self._next_id = next_id

    def _hydrate(self) -> None:
        try:
            raw_tasks = self._storage.get_item(TASKS_KEY)
            if raw_tasks:
                self._tasks = _parse_tasks(raw_tasks)
        except (StorageError, ValueError, TypeError, KeyError) as exc:
            logger.warning("Could not load persisted tasks, starting empty: %s", exc)
            self._tasks = []

        stored_next_id = None
        try:
            raw_next_id = self._storage.get_item(NEXT_ID_KEY)
            if raw_next_id:
                stored_next_id = int(raw_next_id, 10)
        except (StorageError, ValueError) as exc:
            logger.warning("Could not load persisted nextId: %s", exc)

        # Never hand out an id that is already taken.
        floor = max((task.id for task in self._tasks), default=0) + 1
        self._next_id = max(stored_next_id or 1, floor)
