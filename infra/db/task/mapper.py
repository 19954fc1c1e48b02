from __future__ import annotations

from core.models import Task, TaskDependency, TaskSegment
from infra.db.models import TaskDependencyORM, TaskORM, TaskSegmentORM


def task_to_orm(task: Task) -> TaskORM:
    return TaskORM(
        id=task.id,
        project_id=task.project_id,
        name=task.name,
        description=task.description or "",
        start_date=task.start_date,
        end_date=task.end_date,
        status=task.status,
        progress=task.progress,
        owner=task.owner,
        color=task.color,
        sort_order=task.sort_order,
    )


def task_from_orm(obj: TaskORM) -> Task:
    return Task(
        id=obj.id,
        project_id=obj.project_id,
        name=obj.name,
        description=obj.description or "",
        start_date=obj.start_date,
        end_date=obj.end_date,
        status=obj.status,
        progress=obj.progress or 0,
        owner=obj.owner,
        color=obj.color,
        sort_order=obj.sort_order or 0,
    )


def dependency_to_orm(dep: TaskDependency) -> TaskDependencyORM:
    return TaskDependencyORM(
        id=dep.id,
        predecessor_task_id=dep.predecessor_id,
        successor_task_id=dep.successor_id,
        dependency_type=dep.dependency_type,
    )


def dependency_from_orm(obj: TaskDependencyORM) -> TaskDependency:
    return TaskDependency(
        id=obj.id,
        predecessor_id=obj.predecessor_task_id,
        successor_id=obj.successor_task_id,
        dependency_type=obj.dependency_type,
    )


def segment_to_orm(segment: TaskSegment) -> TaskSegmentORM:
    return TaskSegmentORM(
        id=segment.id,
        task_id=segment.task_id,
        start_date=segment.start_date,
        end_date=segment.end_date,
    )


def segment_from_orm(obj: TaskSegmentORM) -> TaskSegment:
    return TaskSegment(
        id=obj.id,
        task_id=obj.task_id,
        start_date=obj.start_date,
        end_date=obj.end_date,
    )
