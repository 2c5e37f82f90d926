from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone

from .enums import Category, DEFAULT_CATEGORY
from .renderers import CategoryStyle, get_renderer


def utcnow() -> datetime:
    # Persisted timestamps carry milliseconds only.
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


@dataclass(frozen=True)
class TaskEntity:
    id: int
    title: str
    category: Category = DEFAULT_CATEGORY
    completed: bool = False
    created_at: datetime = field(default_factory=utcnow)

    def with_category(self, category: str | None) -> TaskEntity:
        return replace(self, category=Category.coerce(category))

    def toggled(self) -> TaskEntity:
        return replace(self, completed=not self.completed)

    def style(self) -> CategoryStyle:
        return get_renderer(self.category)

    def render_properties(self) -> dict[str, str]:
        return self.style().render()
