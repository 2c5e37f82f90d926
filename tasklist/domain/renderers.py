"""Presentation metadata per task category.

The registry is a plain table keyed by :class:`Category`. Lookups never fail:
an unknown or missing identifier resolves to the ``divers`` style.
"""
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from .enums import CATEGORY_ORDER, Category


@dataclass(frozen=True)
class CategoryStyle:
    label: str
    icon: str
    color: str
    css_class: str

    def render(self) -> dict[str, str]:
        return {
            "label": self.label,
            "icon": self.icon,
            "color": self.color,
            "css_class": self.css_class,
        }

    def get_icon(self) -> str:
        return self.icon

    def get_color(self) -> str:
        return self.color

    def get_css_class(self) -> str:
        return self.css_class


_STYLES: Mapping[Category, CategoryStyle] = MappingProxyType({
    Category.TRAVAIL: CategoryStyle(label="Travail", icon="💼", color="#ff6b6b", css_class="task-work"),
    Category.MAISON: CategoryStyle(label="Maison", icon="🏠", color="#4ecdc4", css_class="task-home"),
    Category.DIVERS: CategoryStyle(label="Divers", icon="⭐", color="#95e377", css_class="task-misc"),
})


def get_renderer(category: str | None) -> CategoryStyle:
    return _STYLES[Category.coerce(category)]


def all_renderers() -> dict[Category, CategoryStyle]:
    return {category: _STYLES[category] for category in CATEGORY_ORDER}
