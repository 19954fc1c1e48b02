# ui/main_window.py
from __future__ import annotations

import os
from typing import Optional

from PySide6.QtWidgets import (
    QComboBox,
    QHBoxLayout,
    QInputDialog,
    QLabel,
    QLineEdit,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QScrollArea,
    QVBoxLayout,
    QWidget,
)

from core.events.domain_events import domain_events
from core.exceptions import DomainError
from core.models import ViewMode
from core.services.baseline import BaselineService
from core.services.filtering import GanttFilters
from core.services.interaction.editor import ScheduleEditor
from core.services.task import TaskService
from ui.gantt.canvas import GanttCanvas
from ui.gantt.dependency_type_dialog import choose_dependency_type


class MainWindow(QMainWindow):
    def __init__(self, services: dict[str, object], project_id: str, parent: QWidget | None = None):
        super().__init__(parent)
        self.services: dict[str, object] = services
        self._project_id = project_id
        self._task_service: TaskService = services["task_service"]  # type: ignore[assignment]
        self._baseline_service: BaselineService = services["baseline_service"]  # type: ignore[assignment]
        theme = os.getenv("PM_THEME", "light").strip().lower()

        self.setWindowTitle("Gantt Planner")
        self.resize(1200, 700)

        self.editor = ScheduleEditor(
            self._task_service,
            project_id,
            settings=services["settings"],  # type: ignore[arg-type]
            type_chooser=lambda request: choose_dependency_type(self, self.editor.visible_graph, request),
        )

        central = QWidget()
        layout = QVBoxLayout(central)

        header = QHBoxLayout()
        header.addWidget(QLabel("View:"))
        self.view_combo = QComboBox()
        for mode in ViewMode:
            self.view_combo.addItem(mode.value.title(), userData=mode.value)
        self.view_combo.currentIndexChanged.connect(self._on_view_mode_changed)
        header.addWidget(self.view_combo)

        header.addWidget(QLabel("Baseline:"))
        self.baseline_combo = QComboBox()
        self.baseline_combo.currentIndexChanged.connect(self._on_baseline_changed)
        header.addWidget(self.baseline_combo)

        self.btn_capture_baseline = QPushButton("Capture Baseline")
        self.btn_capture_baseline.clicked.connect(self._capture_baseline)
        header.addWidget(self.btn_capture_baseline)

        self.search_edit = QLineEdit()
        self.search_edit.setPlaceholderText("Search tasks...")
        self.search_edit.textChanged.connect(self._on_search_changed)
        header.addWidget(self.search_edit)
        header.addStretch()

        self.stats_label = QLabel()
        header.addWidget(self.stats_label)
        layout.addLayout(header)

        self.canvas = GanttCanvas(self.editor, theme=theme)
        self.canvas.rejected.connect(self._show_rejection)
        scroll = QScrollArea()
        scroll.setWidget(self.canvas)
        layout.addWidget(scroll)
        self.setCentralWidget(central)

        for signal in (
            domain_events.tasks_changed,
            domain_events.dependencies_changed,
            domain_events.milestones_changed,
        ):
            signal.connect(self._on_schedule_changed)
        domain_events.baselines_changed.connect(self._on_baselines_changed)

        self._reload_baselines()
        self._refresh_stats()

    # ---------- slots ----------

    def _on_schedule_changed(self, project_id: str) -> None:
        if project_id != self._project_id:
            return
        if self.editor.controller.is_active:
            return
        self.editor.reload()
        self.canvas.refresh()
        self._refresh_stats()

    def _on_baselines_changed(self, project_id: str) -> None:
        if project_id == self._project_id:
            self._reload_baselines()

    def _on_view_mode_changed(self, *_args) -> None:
        self.editor.set_view_mode(ViewMode(self.view_combo.currentData()))
        self.canvas.refresh()

    def _on_baseline_changed(self, *_args) -> None:
        baseline_id: Optional[str] = self.baseline_combo.currentData() or None
        self.editor.set_baseline(self._baseline_service.get_differ(baseline_id))
        self.canvas.refresh()
        self._refresh_stats()

    def _on_search_changed(self, text: str) -> None:
        self.editor.set_filters(GanttFilters(search=text))
        self.canvas.refresh()
        self._refresh_stats()

    def _capture_baseline(self) -> None:
        name, ok = QInputDialog.getText(self, "Capture Baseline", "Baseline name:")
        if not ok:
            return
        try:
            self._baseline_service.create_baseline(self._project_id, name or "Baseline")
        except DomainError as exc:
            QMessageBox.warning(self, "Baseline", str(exc))

    def _show_rejection(self, reason: str) -> None:
        self.statusBar().showMessage(reason.replace("\n", " "), 6000)

    # ---------- helpers ----------

    def _reload_baselines(self) -> None:
        selected = self.baseline_combo.currentData() or ""
        self.baseline_combo.blockSignals(True)
        self.baseline_combo.clear()
        self.baseline_combo.addItem("None", userData="")
        for baseline in self._baseline_service.list_baselines(self._project_id):
            self.baseline_combo.addItem(baseline.name, userData=baseline.id)
        index = self.baseline_combo.findData(selected)
        self.baseline_combo.setCurrentIndex(max(index, 0))
        self.baseline_combo.blockSignals(False)
        if selected and index < 0:
            # selected baseline was deleted
            self._on_baseline_changed()

    def _refresh_stats(self) -> None:
        stats = self.editor.analysis.stats
        text = (
            f"{stats.total_tasks} tasks · {stats.completion_percent}% complete · "
            f"{stats.project_duration_days} days · {stats.critical_task_count} critical"
        )
        overloaded = [w.owner for w in self.editor.workload().owners if w.overloaded_days]
        if overloaded:
            text += f" · overloaded: {', '.join(overloaded)}"
        shifted = len(self.editor.baseline_variances())
        if shifted:
            text += f" · {shifted} moved since baseline"
        self.stats_label.setText(text)
