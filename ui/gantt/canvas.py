from __future__ import annotations

from typing import Optional

from PySide6.QtCore import QPointF, QRectF, Qt, Signal
from PySide6.QtGui import QColor, QFont, QMouseEvent, QPainter, QPainterPath, QPaintEvent, QPen, QPolygonF
from PySide6.QtWidgets import QSizePolicy, QWidget

from core.models import Task
from core.services.interaction.editor import ScheduleEditor
from core.services.interaction.state import Anchor, DependencyRejection, DragState, HitZone
from core.services.timeline.models import ChartLayout, TaskBarGeometry
from ui.gantt.pointer_bridge import QtPointerListenerHost
from ui.styles.theme_tokens import theme_tokens

_CURSORS = {
    HitZone.START_HANDLE: Qt.SizeHorCursor,
    HitZone.END_HANDLE: Qt.SizeHorCursor,
    HitZone.BODY: Qt.OpenHandCursor,
    HitZone.START_CONNECTOR: Qt.CrossCursor,
    HitZone.END_CONNECTOR: Qt.CrossCursor,
}


class GanttCanvas(QWidget):
    """Paints the chart of a ScheduleEditor and feeds pointer-downs to its controller."""

    rejected = Signal(str)

    def __init__(self, editor: ScheduleEditor, parent=None, theme: str = "light"):
        super().__init__(parent)
        self._editor = editor
        self._colors = theme_tokens(theme)
        self._layout: ChartLayout = ChartLayout()

        self.setMouseTracking(True)
        self.setFocusPolicy(Qt.StrongFocus)
        self.setSizePolicy(QSizePolicy.Fixed, QSizePolicy.Fixed)

        self._host = QtPointerListenerHost(self)
        controller = editor.controller
        controller.set_listener_host(self._host)
        controller.dates_previewed.connect(lambda _change: self.refresh())
        controller.link_previewed.connect(lambda _preview: self.update())
        controller.cancelled.connect(lambda _task_id: self.refresh())
        controller.dependency_rejected.connect(self._on_rejected)
        self.refresh()

    @property
    def editor(self) -> ScheduleEditor:
        return self._editor

    @property
    def header_height(self) -> int:
        return self._editor.settings.header_height

    def refresh(self) -> None:
        self._layout = self._editor.layout()
        self.setFixedSize(int(self._layout.width), int(self._layout.height + self.header_height))
        self.update()

    # ---------- lookup ----------

    def task_at(self, y: float) -> Optional[Task]:
        body_y = y - self.header_height
        if body_y < 0:
            return None
        row = int(body_y // self._editor.settings.row_height)
        tasks = self._editor.visible_graph.ordered_tasks()
        return tasks[row] if 0 <= row < len(tasks) else None

    def connector_at(self, x: float, y: float) -> tuple[Optional[str], Optional[Anchor]]:
        task = self.task_at(y)
        if task is None:
            return None, None
        zone = self._editor.controller.hit_test(task.id, x)
        if zone is None or zone.anchor is None:
            return task.id, None
        return task.id, zone.anchor

    # ---------- pointer ----------

    def mousePressEvent(self, event: QMouseEvent) -> None:  # noqa: N802
        if event.button() != Qt.LeftButton:
            super().mousePressEvent(event)
            return
        pos = event.position()
        task = self.task_at(pos.y())
        if task is None:
            return
        if self._editor.controller.pointer_down_on_task(task.id, pos.x(), pos.y() - self.header_height):
            self.setFocus()
            event.accept()

    def mouseMoveEvent(self, event: QMouseEvent) -> None:  # noqa: N802
        if self._editor.controller.is_active:
            return
        pos = event.position()
        task = self.task_at(pos.y())
        zone = self._editor.controller.hit_test(task.id, pos.x()) if task else None
        self.setCursor(_CURSORS.get(zone, Qt.ArrowCursor))

    def forward_pointer_move(self, x: float, y: float) -> None:
        hover_id, _anchor = self.connector_at(x, y)
        self._editor.controller.pointer_move(x, y - self.header_height, hover_task_id=hover_id)

    def forward_pointer_release(self, x: float, y: float) -> None:
        controller = self._editor.controller
        target_id, anchor = self.connector_at(x, y)
        controller.pointer_up(x, y - self.header_height, target_task_id=target_id, target_anchor=anchor)
        self.refresh()

    def _on_rejected(self, rejection: DependencyRejection) -> None:
        self.rejected.emit(rejection.reason)
        self.update()

    # ---------- painting ----------

    def paintEvent(self, event: QPaintEvent) -> None:  # noqa: N802
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing, True)
        painter.fillRect(self.rect(), QColor(self._colors["COLOR_BG_SURFACE"]))

        self._paint_header(painter)
        painter.translate(0, self.header_height)
        self._paint_grid(painter)
        for bar in self._layout.bars:
            self._paint_bar(painter, bar)
        self._paint_connectors(painter)
        self._paint_milestones(painter)
        self._paint_today(painter)
        self._paint_link_line(painter)
        painter.end()

    def _paint_header(self, painter: QPainter) -> None:
        half = self.header_height / 2
        painter.fillRect(QRectF(0, 0, self._layout.width, self.header_height), QColor(self._colors["COLOR_BG_SURFACE_ALT"]))
        painter.setFont(QFont(self.font().family(), 8))
        x = 0.0
        for cell in self._layout.headers:
            rect = QRectF(x, 0, cell.width, self.header_height)
            if cell.is_today:
                painter.fillRect(rect, QColor(self._colors["COLOR_ACCENT_SOFT"]))
            elif cell.is_weekend:
                painter.fillRect(rect, QColor(self._colors["COLOR_BG_WEEKEND"]))
            painter.setPen(QColor(self._colors["COLOR_BORDER"]))
            painter.drawLine(QPointF(x, 0), QPointF(x, self.header_height))
            painter.setPen(QColor(self._colors["COLOR_TEXT_PRIMARY"]))
            painter.drawText(QRectF(x, 0, cell.width, half), Qt.AlignCenter, cell.label)
            if cell.sub_label:
                painter.setPen(QColor(self._colors["COLOR_TEXT_MUTED"]))
                painter.drawText(QRectF(x, half, cell.width, half), Qt.AlignCenter, cell.sub_label)
            x += cell.width

    def _paint_grid(self, painter: QPainter) -> None:
        settings = self._editor.settings
        painter.setPen(QColor(self._colors["COLOR_BORDER"]))
        rows = int(self._layout.height // settings.row_height)
        for row in range(rows + 1):
            y = row * settings.row_height
            painter.drawLine(QPointF(0, y), QPointF(self._layout.width, y))

    def _paint_bar(self, painter: QPainter, bar: TaskBarGeometry) -> None:
        settings = self._editor.settings
        fill = QColor(bar.color or self._colors["COLOR_BAR"])
        border = QColor(self._colors["COLOR_CRITICAL"]) if bar.is_critical else fill.darker(130)

        if bar.baseline is not None:
            ghost_top = bar.row * settings.row_height + settings.row_height - settings.baseline_bar_height - 4
            painter.setPen(Qt.NoPen)
            painter.setBrush(QColor(self._colors["COLOR_BASELINE"]))
            painter.drawRoundedRect(
                QRectF(bar.baseline.left, ghost_top, bar.baseline.width, settings.baseline_bar_height), 2, 2
            )

        pieces = [(piece.left, piece.width) for piece in bar.pieces] or [(bar.left, bar.width)]
        painter.setPen(QPen(border, 2 if bar.is_critical else 1))
        painter.setBrush(fill)
        for left, width in pieces:
            painter.drawRoundedRect(QRectF(left, bar.top, width, bar.height), 4, 4)

        if bar.progress > 0:
            painter.setPen(Qt.NoPen)
            painter.setBrush(QColor(self._colors["COLOR_BAR_PROGRESS"]))
            painter.drawRoundedRect(QRectF(bar.left, bar.top + bar.height - 4, bar.width * bar.progress / 100, 4), 2, 2)

        task = self._editor.visible_graph.get_task(bar.task_id)
        if task is not None:
            painter.setPen(QColor("#FFFFFF"))
            painter.drawText(
                QRectF(bar.left + 6, bar.top, max(0.0, bar.width - 12), bar.height),
                Qt.AlignVCenter | Qt.AlignLeft,
                task.name,
            )

    def _paint_connectors(self, painter: QPainter) -> None:
        painter.setBrush(Qt.NoBrush)
        for connector in self._layout.connectors:
            color = self._colors["COLOR_CRITICAL"] if connector.is_critical else self._colors["COLOR_CONNECTOR"]
            pen = QPen(QColor(color), 1.5, Qt.DashLine)
            painter.setPen(pen)
            path = QPainterPath(QPointF(*connector.points[0]))
            for point in connector.points[1:]:
                path.lineTo(QPointF(*point))
            painter.drawPath(path)
            self._paint_arrowhead(painter, connector.points[2], connector.points[3], QColor(color))

    def _paint_arrowhead(self, painter: QPainter, before, tip, color: QColor) -> None:
        direction = 1 if tip[0] >= before[0] else -1
        x, y = tip
        head = QPolygonF([QPointF(x, y), QPointF(x - 6 * direction, y - 4), QPointF(x - 6 * direction, y + 4)])
        painter.setPen(Qt.NoPen)
        painter.setBrush(color)
        painter.drawPolygon(head)
        painter.setBrush(Qt.NoBrush)

    def _paint_milestones(self, painter: QPainter) -> None:
        settings = self._editor.settings
        for marker in self._layout.milestones:
            cx = marker.x + self._editor.scale.day_width / 2
            cy = marker.row * settings.row_height + settings.row_height / 2
            diamond = QPolygonF([
                QPointF(cx, cy - 8),
                QPointF(cx + 8, cy),
                QPointF(cx, cy + 8),
                QPointF(cx - 8, cy),
            ])
            painter.setPen(Qt.NoPen)
            painter.setBrush(QColor(marker.color or self._colors["COLOR_MILESTONE"]))
            painter.drawPolygon(diamond)
            painter.setPen(QColor(self._colors["COLOR_TEXT_SECONDARY"]))
            painter.drawText(QPointF(cx + 12, cy + 4), marker.name)

    def _paint_today(self, painter: QPainter) -> None:
        if self._layout.today_x is None:
            return
        x = self._layout.today_x + self._editor.scale.day_width / 2
        painter.setPen(QPen(QColor(self._colors["COLOR_TODAY"]), 1.5))
        painter.drawLine(QPointF(x, 0), QPointF(x, self._layout.height))

    def _paint_link_line(self, painter: QPainter) -> None:
        controller = self._editor.controller
        if controller.state != DragState.LINKING_DEPENDENCY:
            return
        preview = controller.link_preview()
        if preview is None:
            return
        painter.setPen(QPen(QColor(self._colors["COLOR_ACCENT"]), 2, Qt.DashLine))
        painter.drawLine(QPointF(*preview.origin), QPointF(*preview.pointer))


__all__ = ["GanttCanvas"]
