"""Project-level change notifications consumed by the Qt surface to reload the chart."""
from PySide6.QtCore import QObject, Signal


class DomainEvents(QObject):
    tasks_changed = Signal(str)         # project_id
    dependencies_changed = Signal(str)  # project_id
    milestones_changed = Signal(str)    # project_id
    baselines_changed = Signal(str)     # project_id


# SINGLE global instance
domain_events = DomainEvents()
