from ui.gantt.canvas import GanttCanvas
from ui.gantt.dependency_type_dialog import DependencyTypeDialog, choose_dependency_type
from ui.gantt.pointer_bridge import QtPointerListenerHost

__all__ = ["GanttCanvas", "DependencyTypeDialog", "QtPointerListenerHost", "choose_dependency_type"]
