from __future__ import annotations

import logging
from datetime import timedelta
from typing import Optional, Protocol

from core.events.signal import Signal
from core.models import DependencyType
from core.settings import GanttSettings
from core.services.interaction.hit_test import hit_test
from core.services.interaction.state import (
    ActiveInteraction,
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
from core.services.scheduling.graph import ScheduleGraph
from core.services.timeline.geometry import row_center_y
from core.services.timeline.models import Point
from core.services.timeline.projector import TimelineScale

logger = logging.getLogger(__name__)


class PointerListenerHost(Protocol):
    """Global pointer source (e.g. an app-wide Qt event filter) attached per interaction."""

    def attach(self, controller: "DragInteractionController") -> None: ...

    def detach(self) -> None: ...


class DragInteractionController:
    """
    Turns pointer gestures on task bars into move / resize / link requests.

    The committed graph is only read: previews live in the active interaction
    record, and mutations leave through the signals below for a subscriber to
    persist. One gesture at a time.
    """

    def __init__(
        self,
        graph: ScheduleGraph,
        scale: TimelineScale,
        *,
        settings: Optional[GanttSettings] = None,
        listener_host: Optional[PointerListenerHost] = None,
    ):
        self._graph = graph
        self._scale = scale
        self._settings = settings or scale.settings
        self._listener_host = listener_host
        self._active: Optional[ActiveInteraction] = None
        self._last_outcome: Optional[DragState] = None

        self.dates_previewed: Signal[TaskDatesChange] = Signal("dates_previewed")
        self.dates_committed: Signal[TaskDatesChange] = Signal("dates_committed")
        self.link_previewed: Signal[LinkPreview] = Signal("link_previewed")
        self.link_requested: Signal[LinkRequest] = Signal("link_requested")
        self.dependency_requested: Signal[DependencyRequest] = Signal("dependency_requested")
        self.dependency_rejected: Signal[DependencyRejection] = Signal("dependency_rejected")
        self.cancelled: Signal[str] = Signal("cancelled")

    # ---------- state ----------

    @property
    def state(self) -> DragState:
        return self._active.state if self._active else DragState.IDLE

    @property
    def last_outcome(self) -> Optional[DragState]:
        return self._last_outcome

    @property
    def is_active(self) -> bool:
        return self._active is not None

    @property
    def active(self) -> Optional[ActiveInteraction]:
        return self._active

    @property
    def graph(self) -> ScheduleGraph:
        return self._graph

    @property
    def scale(self) -> TimelineScale:
        return self._scale

    def set_graph(self, graph: ScheduleGraph) -> None:
        if self._active is not None:
            self.cancel()
        self._graph = graph

    def set_scale(self, scale: TimelineScale) -> None:
        if self._active is not None:
            self.cancel()
        self._scale = scale

    def set_listener_host(self, host: Optional[PointerListenerHost]) -> None:
        self._listener_host = host

    def preview_overrides(self) -> dict:
        """task_id -> (start, end) for the bar being dragged; empty when idle or linking."""
        if self._active is None or not self._active.state.is_date_drag:
            return {}
        return {self._active.task_id: (self._active.preview_start, self._active.preview_end)}

    def link_preview(self) -> Optional[LinkPreview]:
        if self._active is None or self._active.state != DragState.LINKING_DEPENDENCY:
            return None
        return self._link_preview(self._active)

    # ---------- pointer events ----------

    def hit_test(self, task_id: str, x: float) -> Optional[HitZone]:
        task = self._graph.get_task(task_id)
        if task is None:
            return None
        left = self._scale.position(task.start_date)
        width = self._scale.span_width(task.start_date, task.end_date)
        return hit_test(x - left, width, self._settings)

    def pointer_down_on_task(self, task_id: str, x: float, y: float = 0.0) -> bool:
        zone = self.hit_test(task_id, x)
        if zone is None:
            return False
        return self.pointer_down(task_id, zone, x, y)

    def pointer_down(self, task_id: str, zone: HitZone, x: float, y: float = 0.0) -> bool:
        if self._active is not None:
            self.cancel()

        task = self._graph.get_task(task_id)
        if task is None:
            logger.debug("Pointer down on unknown task %s ignored.", task_id)
            return False

        zone = HitZone(zone)
        interaction = ActiveInteraction(
            state=zone.drag_state,
            task_id=task_id,
            original_start=task.start_date,
            original_end=task.end_date,
            pointer_start_x=x,
            preview_start=task.start_date,
            preview_end=task.end_date,
            anchor=zone.anchor,
            pointer=(x, y),
        )
        if interaction.state == DragState.LINKING_DEPENDENCY:
            interaction.origin = self._anchor_point(task_id, interaction.anchor)

        self._active = interaction
        if self._listener_host is not None:
            self._listener_host.attach(self)
        logger.debug("Interaction %s started on task %s.", interaction.state.value, task_id)

        if interaction.state == DragState.LINKING_DEPENDENCY:
            self.link_previewed.emit(self._link_preview(interaction))
        return True

    def pointer_move(self, x: float, y: float = 0.0, hover_task_id: Optional[str] = None) -> None:
        interaction = self._active
        if interaction is None:
            return

        interaction.pointer = (x, y)
        if interaction.state == DragState.LINKING_DEPENDENCY:
            interaction.hover_task_id = hover_task_id
            self.link_previewed.emit(self._link_preview(interaction))
            return

        before = (interaction.preview_start, interaction.preview_end)
        self._apply_delta(interaction, x)
        if (interaction.preview_start, interaction.preview_end) != before:
            self.dates_previewed.emit(interaction.dates_change())

    def pointer_up(
        self,
        x: float,
        y: float = 0.0,
        target_task_id: Optional[str] = None,
        target_anchor: Optional[Anchor] = None,
    ) -> None:
        interaction = self._active
        if interaction is None:
            return

        interaction.pointer = (x, y)
        if interaction.state == DragState.LINKING_DEPENDENCY:
            self._release_link(interaction, target_task_id, target_anchor)
            return

        self._apply_delta(interaction, x)
        change = interaction.dates_change()
        self._finish(DragState.COMMITTED if change.is_change else DragState.CANCELLED)
        if change.is_change:
            logger.info(
                "Task %s dates dragged to %s..%s.", change.task_id, change.start_date, change.end_date
            )
            self.dates_committed.emit(change)

    def key_press(self, key: str) -> bool:
        if key == "Escape" and self._active is not None:
            self.cancel()
            return True
        return False

    def cancel(self) -> None:
        interaction = self._active
        if interaction is None:
            return
        self._finish(DragState.CANCELLED)
        logger.debug("Interaction on task %s cancelled.", interaction.task_id)
        self.cancelled.emit(interaction.task_id)

    # ---------- dependencies ----------

    def request_dependency(
        self,
        predecessor_id: str,
        successor_id: str,
        dependency_type: DependencyType = DependencyType.FINISH_TO_START,
    ) -> bool:
        dependency_type = DependencyType(dependency_type)
        diagnostic = self._graph.check_dependency(predecessor_id, successor_id, dependency_type)
        if not diagnostic.is_valid:
            self._reject(predecessor_id, successor_id, dependency_type, diagnostic.code, diagnostic.message)
            return False
        self.dependency_requested.emit(
            DependencyRequest(
                predecessor_id=predecessor_id,
                successor_id=successor_id,
                dependency_type=dependency_type,
            )
        )
        return True

    def report_rejection(
        self,
        predecessor_id: str,
        successor_id: str,
        dependency_type: Optional[DependencyType],
        code: str,
        reason: str,
    ) -> None:
        self._reject(predecessor_id, successor_id, dependency_type, code, reason)

    # ---------- internals ----------

    def _apply_delta(self, interaction: ActiveInteraction, x: float) -> None:
        delta = timedelta(days=self._scale.delta_days(x - interaction.pointer_start_x))
        start, end = interaction.original_start, interaction.original_end

        if interaction.state == DragState.MOVING_TASK:
            interaction.preview_start = start + delta
            interaction.preview_end = end + delta
        elif interaction.state == DragState.RESIZING_START:
            interaction.preview_start = min(start + delta, end)
            interaction.preview_end = end
        elif interaction.state == DragState.RESIZING_END:
            interaction.preview_start = start
            interaction.preview_end = max(end + delta, start)

    def _release_link(
        self,
        interaction: ActiveInteraction,
        target_task_id: Optional[str],
        target_anchor: Optional[Anchor],
    ) -> None:
        if (
            target_task_id is None
            or target_anchor is None
            or target_task_id == interaction.task_id
            or target_task_id not in self._graph
        ):
            self.cancel()
            return

        suggested = suggest_dependency_type(interaction.anchor or Anchor.END, target_anchor)
        diagnostic = self._graph.check_dependency(interaction.task_id, target_task_id, suggested)
        if not diagnostic.is_valid:
            self._finish(DragState.CANCELLED)
            self._reject(interaction.task_id, target_task_id, suggested, diagnostic.code, diagnostic.message)
            return

        self._finish(DragState.COMMITTED)
        self.link_requested.emit(
            LinkRequest(
                predecessor_id=interaction.task_id,
                successor_id=target_task_id,
                suggested_type=suggested,
            )
        )

    def _reject(
        self,
        predecessor_id: str,
        successor_id: str,
        dependency_type: Optional[DependencyType],
        code: str,
        reason: str,
    ) -> None:
        logger.warning("Dependency %s -> %s refused (%s): %s", predecessor_id, successor_id, code, reason)
        self.dependency_rejected.emit(
            DependencyRejection(
                predecessor_id=predecessor_id,
                successor_id=successor_id,
                dependency_type=dependency_type,
                code=code,
                reason=reason,
            )
        )

    def _finish(self, outcome: DragState) -> None:
        self._active = None
        self._last_outcome = outcome
        if self._listener_host is not None:
            self._listener_host.detach()

    def _anchor_point(self, task_id: str, anchor: Optional[Anchor]) -> Point:
        task = self._graph.require_task(task_id)
        row = self._graph.row_index(task_id) or 0
        if anchor == Anchor.START:
            x = self._scale.position(task.start_date)
        else:
            x = self._scale.position(task.start_date) + self._scale.span_width(task.start_date, task.end_date)
        return float(x), row_center_y(self._scale, row)

    def _link_preview(self, interaction: ActiveInteraction) -> LinkPreview:
        return LinkPreview(
            source_task_id=interaction.task_id,
            source_anchor=interaction.anchor or Anchor.END,
            origin=interaction.origin,
            pointer=interaction.pointer,
            target_task_id=interaction.hover_task_id,
        )


__all__ = ["DragInteractionController", "PointerListenerHost"]
