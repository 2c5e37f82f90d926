from __future__ import annotations

from dataclasses import dataclass, field

from .entities import TaskEntity
from .enums import Category
from .renderers import CategoryStyle

EMPTY_CATEGORY_MESSAGE = "Aucune tâche dans cette catégorie"


@dataclass(frozen=True)
class AddTaskResult:
    """Outcome of an add request; truthy only when the task was created."""

    task: TaskEntity | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.task is not None

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def success(cls, task: TaskEntity) -> AddTaskResult:
        return cls(task=task)

    @classmethod
    def failure(cls, reason: str) -> AddTaskResult:
        return cls(error=reason)


@dataclass(frozen=True)
class CategoryGroup:
    category: Category
    style: CategoryStyle
    tasks: list[TaskEntity] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.tasks)

    @property
    def empty_message(self) -> str | None:
        return None if self.tasks else EMPTY_CATEGORY_MESSAGE
