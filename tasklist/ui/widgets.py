from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QFrame,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QSizePolicy,
    QVBoxLayout,
    QWidget,
)

from tasklist.domain.entities import TaskEntity
from tasklist.domain.renderers import CategoryStyle, all_renderers
from tasklist.domain.results import CategoryGroup


def fill_category_combo(combo: QComboBox) -> None:
    for category, style in all_renderers().items():
        combo.addItem(f"{style.icon} {style.label}", category.value)


class TaskItemWidget(QWidget):
    def __init__(self, task: TaskEntity, on_toggle, on_delete, on_category_change, parent=None):
        super().__init__(parent)
        self.task = task
        self._on_toggle = on_toggle
        self._on_delete = on_delete
        self._on_category_change = on_category_change

        style = task.style()
        self.setObjectName("TaskCard")
        self.setAttribute(Qt.WA_StyledBackground, True)
        self.setProperty("class", style.css_class)
        self.setProperty("completed", task.completed)
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Fixed)
        self.setStyleSheet(f"#TaskCard {{ border-left: 4px solid {style.color}; }}")

        layout = QHBoxLayout(self)
        layout.setContentsMargins(12, 6, 12, 6)
        layout.setSpacing(8)

        self.done_check = QCheckBox()
        self.done_check.setChecked(task.completed)
        self.done_check.toggled.connect(self._handle_toggle)

        title = QLabel(task.title)
        title.setProperty("class", "task-title")
        title.setWordWrap(True)
        if task.completed:
            font = title.font()
            font.setStrikeOut(True)
            title.setFont(font)

        self.category_combo = QComboBox()
        fill_category_combo(self.category_combo)
        index = self.category_combo.findData(task.category.value)
        if index >= 0:
            self.category_combo.setCurrentIndex(index)
        self.category_combo.currentIndexChanged.connect(self._handle_category_change)

        self.delete_button = QPushButton("✕")
        self.delete_button.setToolTip("Supprimer la tâche")
        self.delete_button.setProperty("variant", "danger")
        self.delete_button.clicked.connect(self._handle_delete)

        layout.addWidget(self.done_check)
        layout.addWidget(title, 1)
        layout.addWidget(self.category_combo)
        layout.addWidget(self.delete_button)

    def _handle_toggle(self, _checked: bool) -> None:
        self._on_toggle(self.task.id)

    def _handle_delete(self) -> None:
        self._on_delete(self.task.id)

    def _handle_category_change(self, _index: int) -> None:
        category = self.category_combo.currentData()
        if category and category != self.task.category.value:
            self._on_category_change(self.task.id, category)


class CategorySection(QFrame):
    def __init__(self, group: CategoryGroup, on_toggle, on_delete, on_category_change, parent=None):
        super().__init__(parent)
        self.setObjectName("CategorySection")
        self.setProperty("class", group.style.css_class)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 8)
        layout.setSpacing(4)

        layout.addWidget(_category_header(group.style, group.count))

        if group.empty_message:
            empty = QLabel(group.empty_message)
            empty.setProperty("class", "category-empty")
            layout.addWidget(empty)
            return

        for task in group.tasks:
            layout.addWidget(TaskItemWidget(task, on_toggle, on_delete, on_category_change))


def _category_header(style: CategoryStyle, count: int) -> QWidget:
    header = QFrame()
    header.setObjectName("CategoryHeader")
    header.setAttribute(Qt.WA_StyledBackground, True)
    header.setStyleSheet(f"#CategoryHeader {{ background-color: {style.color}; border-radius: 4px; }}")

    layout = QHBoxLayout(header)
    layout.setContentsMargins(10, 6, 10, 6)
    layout.setSpacing(6)

    title = QLabel(f"{style.icon} {style.label}")
    title.setProperty("class", "category-title")
    counter = QLabel(f"({count})")
    counter.setProperty("class", "task-count")

    layout.addWidget(title)
    layout.addWidget(counter)
    layout.addStretch()
    return header
