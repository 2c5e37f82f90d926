from __future__ import annotations

from enum import StrEnum


class Category(StrEnum):
    TRAVAIL = "travail"
    MAISON = "maison"
    DIVERS = "divers"

    @classmethod
    def coerce(cls, raw: str | None) -> Category:
        """Map a raw identifier onto the closed set; anything unknown is ``divers``."""
        if not raw:
            return cls.DIVERS
        try:
            return cls(raw)
        except ValueError:
            return cls.DIVERS


DEFAULT_CATEGORY = Category.DIVERS

# Display order of the category groups.
CATEGORY_ORDER: tuple[Category, ...] = (Category.TRAVAIL, Category.MAISON, Category.DIVERS)
