from __future__ import annotations

from typing import Optional

from PySide6.QtWidgets import (
    QComboBox,
    QDialog,
    QDialogButtonBox,
    QFormLayout,
    QLabel,
    QVBoxLayout,
)

from core.models import DependencyType
from core.services.interaction.state import LinkRequest

DEPENDENCY_TYPE_LABELS = {
    DependencyType.FINISH_TO_START: "Finish to Start (FS): successor starts after predecessor ends",
    DependencyType.START_TO_START: "Start to Start (SS): successor starts after predecessor starts",
    DependencyType.FINISH_TO_FINISH: "Finish to Finish (FF): successor ends after predecessor ends",
    DependencyType.START_TO_FINISH: "Start to Finish (SF): successor ends after predecessor starts",
}


class DependencyTypeDialog(QDialog):
    def __init__(
        self,
        parent=None,
        predecessor_name: str = "",
        successor_name: str = "",
        suggested: DependencyType = DependencyType.FINISH_TO_START,
    ):
        super().__init__(parent)
        self.setWindowTitle("Create Dependency")

        self.lbl_info = QLabel(f"{predecessor_name} → {successor_name}")
        self.lbl_info.setWordWrap(True)

        self.cmb_type = QComboBox()
        for dep_type, label in DEPENDENCY_TYPE_LABELS.items():
            self.cmb_type.addItem(label, userData=dep_type.value)
        self.cmb_type.setCurrentIndex(list(DEPENDENCY_TYPE_LABELS).index(DependencyType(suggested)))

        form = QFormLayout()
        form.addRow("Type:", self.cmb_type)

        buttons = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)

        layout = QVBoxLayout(self)
        layout.addWidget(self.lbl_info)
        layout.addLayout(form)
        layout.addWidget(buttons)

    @property
    def dependency_type(self) -> DependencyType:
        return DependencyType(self.cmb_type.currentData())


def choose_dependency_type(parent, graph, request: LinkRequest) -> Optional[DependencyType]:
    pred = graph.get_task(request.predecessor_id)
    succ = graph.get_task(request.successor_id)
    dialog = DependencyTypeDialog(
        parent,
        predecessor_name=pred.name if pred else request.predecessor_id,
        successor_name=succ.name if succ else request.successor_id,
        suggested=request.suggested_type,
    )
    if dialog.exec() != QDialog.Accepted:
        return None
    return dialog.dependency_type


__all__ = ["DependencyTypeDialog", "DEPENDENCY_TYPE_LABELS", "choose_dependency_type"]
