from __future__ import annotations

import logging
from datetime import date
from typing import Callable, List, Optional

from core.exceptions import BusinessRuleError, NotFoundError
from core.models import DependencyType, ViewMode
from core.settings import DEFAULT_SETTINGS, GanttSettings
from core.services.baseline.differ import NO_BASELINE, BaselineDiffer, TaskVariance
from core.services.filtering import NO_FILTERS, GanttFilters, filter_graph
from core.services.interaction.controller import DragInteractionController, PointerListenerHost
from core.services.interaction.state import DependencyRequest, LinkRequest, TaskDatesChange
from core.services.scheduling.engine import CriticalPathAnalyzer
from core.services.scheduling.graph import ScheduleGraph
from core.services.scheduling.models import CriticalPathResult
from core.services.scheduling.workload import build_owner_workloads
from core.services.scheduling.workload_models import WorkloadReport
from core.services.task.service import TaskService
from core.services.timeline.geometry import build_chart_layout
from core.services.timeline.models import ChartLayout
from core.services.timeline.projector import TimelineScale

logger = logging.getLogger(__name__)

# Returns the type to create, or None to drop the link.
DependencyTypeChooser = Callable[[LinkRequest], Optional[DependencyType]]


def accept_suggested_type(request: LinkRequest) -> Optional[DependencyType]:
    return request.suggested_type


class ScheduleEditor:
    """
    Wires one project's chart together: loads the graph through the task
    service, keeps analysis and scale current, and turns controller requests
    into service calls.
    """

    def __init__(
        self,
        task_service: TaskService,
        project_id: str,
        *,
        view_mode: ViewMode = ViewMode.DAY,
        settings: GanttSettings = DEFAULT_SETTINGS,
        listener_host: Optional[PointerListenerHost] = None,
        type_chooser: DependencyTypeChooser = accept_suggested_type,
        today: Optional[date] = None,
    ):
        self._tasks = task_service
        self.project_id = project_id
        self.settings = settings
        self._view_mode = ViewMode(view_mode)
        self._today = today
        self._type_chooser = type_chooser
        self._analyzer = CriticalPathAnalyzer()
        self._filters: GanttFilters = NO_FILTERS
        self._differ: BaselineDiffer = NO_BASELINE

        self.graph: ScheduleGraph = ScheduleGraph()
        self.visible_graph: ScheduleGraph = self.graph
        self.analysis: CriticalPathResult = CriticalPathResult()
        self.scale = TimelineScale.for_schedule((), view_mode=self._view_mode, settings=settings, today=today)

        self.controller = DragInteractionController(
            self.visible_graph, self.scale, settings=settings, listener_host=listener_host
        )
        self.controller.dates_committed.connect(self._on_dates_committed)
        self.controller.link_requested.connect(self._on_link_requested)
        self.controller.dependency_requested.connect(self._on_dependency_requested)

        self.reload()

    # ---------- view state ----------

    @property
    def view_mode(self) -> ViewMode:
        return self._view_mode

    def set_view_mode(self, view_mode: ViewMode) -> None:
        self._view_mode = ViewMode(view_mode)
        self.scale = self.scale.with_view_mode(self._view_mode)
        self.controller.set_scale(self.scale)

    @property
    def filters(self) -> GanttFilters:
        return self._filters

    def set_filters(self, filters: Optional[GanttFilters]) -> None:
        self._filters = filters or NO_FILTERS
        self._rebuild()

    def set_baseline(self, differ: Optional[BaselineDiffer]) -> None:
        self._differ = differ or NO_BASELINE

    @property
    def differ(self) -> BaselineDiffer:
        return self._differ

    # ---------- data ----------

    def reload(self) -> None:
        self.graph = self._tasks.load_graph(self.project_id)
        self._rebuild()

    def _rebuild(self) -> None:
        self.visible_graph = filter_graph(self.graph, self._filters)
        self.analysis = self._analyzer.analyze(self.visible_graph)
        self.scale = TimelineScale.for_schedule(
            self.visible_graph.ordered_tasks(),
            self.visible_graph.milestones,
            view_mode=self._view_mode,
            settings=self.settings,
            today=self._today,
        )
        self.controller.set_graph(self.visible_graph)
        self.controller.set_scale(self.scale)

    def layout(self) -> ChartLayout:
        return build_chart_layout(
            self.visible_graph,
            self.scale,
            analysis=self.analysis,
            differ=self._differ,
            overrides=self.controller.preview_overrides(),
        )

    def workload(self) -> WorkloadReport:
        return build_owner_workloads(self.visible_graph.ordered_tasks(), self.settings.overload_threshold)

    def baseline_variances(self) -> List[TaskVariance]:
        if not self._differ.is_active:
            return []
        return self._differ.variances(self.visible_graph.ordered_tasks())

    # ---------- controller requests ----------

    def _on_dates_committed(self, change: TaskDatesChange) -> None:
        self._tasks.update_task_dates(change.task_id, change.start_date, change.end_date)
        self.reload()

    def _on_link_requested(self, request: LinkRequest) -> None:
        dependency_type = self._type_chooser(request)
        if dependency_type is None:
            logger.debug("Link %s -> %s dropped by user.", request.predecessor_id, request.successor_id)
            return
        self.controller.request_dependency(request.predecessor_id, request.successor_id, dependency_type)

    def _on_dependency_requested(self, request: DependencyRequest) -> None:
        try:
            self._tasks.add_dependency(request.predecessor_id, request.successor_id, request.dependency_type)
        except (BusinessRuleError, NotFoundError) as exc:
            # the stored graph moved on since the local check
            self.controller.report_rejection(
                request.predecessor_id,
                request.successor_id,
                request.dependency_type,
                exc.code,
                str(exc),
            )
            return
        self.reload()


__all__ = ["ScheduleEditor", "DependencyTypeChooser", "accept_suggested_type"]
