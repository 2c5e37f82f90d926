from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtGui import QKeySequence, QShortcut
from PySide6.QtWidgets import (
    QComboBox,
    QFrame,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QScrollArea,
    QVBoxLayout,
    QWidget,
)

from tasklist.domain.entities import TaskEntity
from tasklist.domain.enums import DEFAULT_CATEGORY
from tasklist.services.task_controller import TaskController

from .widgets import CategorySection, fill_category_combo

EMPTY_INPUT_MESSAGE = "Veuillez entrer une tâche"
ADD_FAILED_MESSAGE = "Erreur lors de l'ajout de la tâche"
NO_TASKS_MESSAGE = "Aucune tâche. Ajoutez-en une!"


class MainWindow(QWidget):
    def __init__(self, controller: TaskController):
        super().__init__()
        self.setWindowTitle("Ma Liste de Tâches")
        self.resize(720, 760)

        self.controller = controller

        main_layout = QVBoxLayout(self)
        main_layout.setContentsMargins(12, 12, 12, 12)
        main_layout.setSpacing(12)

        header_title = QLabel("Ma Liste de Tâches")
        header_title.setProperty("class", "panel-title")

        main_layout.addWidget(header_title)
        main_layout.addWidget(self._build_form())
        main_layout.addWidget(self._build_tasks_section(), 1)

        self.controller.subscribe(self.render_tasks)
        self.render_tasks(self.controller.tasks)

        QShortcut(QKeySequence("Ctrl+N"), self, self.title_input.setFocus)

    def _build_form(self) -> QWidget:
        frame = QFrame()
        frame.setObjectName("FormSection")
        layout = QVBoxLayout(frame)
        layout.setContentsMargins(12, 10, 12, 10)
        layout.setSpacing(6)

        row = QHBoxLayout()
        self.title_input = QLineEdit()
        self.title_input.setPlaceholderText("Ajouter une nouvelle tâche...")
        self.title_input.textChanged.connect(self.clear_error)
        self.title_input.returnPressed.connect(self.submit_task)

        self.category_combo = QComboBox()
        fill_category_combo(self.category_combo)
        self._reset_category()

        add_button = QPushButton("Ajouter")
        add_button.clicked.connect(self.submit_task)

        row.addWidget(self.title_input, 1)
        row.addWidget(self.category_combo)
        row.addWidget(add_button)

        self.error_label = QLabel("")
        self.error_label.setProperty("class", "error-message")
        self.error_label.setVisible(False)

        layout.addLayout(row)
        layout.addWidget(self.error_label)
        return frame

    def _build_tasks_section(self) -> QWidget:
        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setFrameShape(QFrame.NoFrame)
        scroll.setHorizontalScrollBarPolicy(Qt.ScrollBarAlwaysOff)

        content = QWidget()
        self.tasks_layout = QVBoxLayout(content)
        self.tasks_layout.setContentsMargins(0, 0, 0, 0)
        self.tasks_layout.setSpacing(12)
        scroll.setWidget(content)
        return scroll

    def render_tasks(self, tasks: list[TaskEntity]) -> None:
        self._clear_tasks()

        section_title = QLabel("Tâches par catégorie")
        section_title.setProperty("class", "section-title")
        self.tasks_layout.addWidget(section_title)

        if not tasks:
            empty = QLabel(NO_TASKS_MESSAGE)
            empty.setProperty("class", "empty-message")
            self.tasks_layout.addWidget(empty)
        else:
            for group in self.controller.grouped():
                self.tasks_layout.addWidget(
                    CategorySection(
                        group,
                        on_toggle=self.controller.toggle_task_completion,
                        on_delete=self.controller.delete_task,
                        on_category_change=self.controller.change_task_category,
                    )
                )
        self.tasks_layout.addStretch()

    def _clear_tasks(self) -> None:
        while self.tasks_layout.count():
            item = self.tasks_layout.takeAt(0)
            widget = item.widget()
            if widget is not None:
                widget.deleteLater()

    def submit_task(self) -> None:
        title = self.title_input.text()
        if not title.strip():
            self.show_error(EMPTY_INPUT_MESSAGE)
            return

        result = self.controller.add_task(title, self.category_combo.currentData())
        if result:
            self.title_input.clear()
            self._reset_category()
        else:
            self.show_error(ADD_FAILED_MESSAGE)

    def show_error(self, message: str) -> None:
        self.error_label.setText(message)
        self.error_label.setVisible(True)

    def clear_error(self) -> None:
        self.error_label.clear()
        self.error_label.setVisible(False)

    def _reset_category(self) -> None:
        index = self.category_combo.findData(DEFAULT_CATEGORY.value)
        if index >= 0:
            self.category_combo.setCurrentIndex(index)

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self.controller.unsubscribe(self.render_tasks)
        super().closeEvent(event)
