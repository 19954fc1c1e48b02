from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from PySide6.QtCore import QEvent, QObject, Qt
from PySide6.QtWidgets import QApplication

from core.services.interaction.controller import DragInteractionController

if TYPE_CHECKING:
    from ui.gantt.canvas import GanttCanvas


class QtPointerListenerHost(QObject):
    """
    App-wide event filter installed only while a drag is in progress, so moves
    and releases outside the canvas still reach the controller.
    """

    def __init__(self, canvas: "GanttCanvas"):
        super().__init__(canvas)
        self._canvas = canvas
        self._controller: Optional[DragInteractionController] = None

    @property
    def is_attached(self) -> bool:
        return self._controller is not None

    def attach(self, controller: DragInteractionController) -> None:
        if self._controller is not None:
            return
        self._controller = controller
        app = QApplication.instance()
        if app is not None:
            app.installEventFilter(self)

    def detach(self) -> None:
        if self._controller is None:
            return
        self._controller = None
        app = QApplication.instance()
        if app is not None:
            app.removeEventFilter(self)

    def eventFilter(self, watched: QObject, event: QEvent) -> bool:  # noqa: N802
        if self._controller is None:
            return False

        event_type = event.type()
        if event_type == QEvent.MouseMove:
            pos = self._canvas.mapFromGlobal(event.globalPosition().toPoint())
            self._canvas.forward_pointer_move(pos.x(), pos.y())
            return True
        if event_type == QEvent.MouseButtonRelease and event.button() == Qt.LeftButton:
            pos = self._canvas.mapFromGlobal(event.globalPosition().toPoint())
            self._canvas.forward_pointer_release(pos.x(), pos.y())
            return True
        if event_type == QEvent.KeyPress and event.key() == Qt.Key_Escape:
            self._controller.key_press("Escape")
            return True
        return False


__all__ = ["QtPointerListenerHost"]
