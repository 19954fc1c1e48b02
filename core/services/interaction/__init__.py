from core.services.interaction.controller import DragInteractionController, PointerListenerHost
from core.services.interaction.hit_test import hit_test
from core.services.interaction.state import (
    Anchor,
    DependencyRejection,
    DependencyRequest,
    DragState,
    HitZone,
    LinkPreview,
    LinkRequest,
    TaskDatesChange,
    suggest_dependency_type,
)

__all__ = [
    "DragInteractionController",
    "PointerListenerHost",
    "hit_test",
    "Anchor",
    "DependencyRejection",
    "DependencyRequest",
    "DragState",
    "HitZone",
    "LinkPreview",
    "LinkRequest",
    "TaskDatesChange",
    "suggest_dependency_type",
]
