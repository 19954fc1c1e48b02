from __future__ import annotations

from typing import List, Optional

from sqlalchemy import or_, select, update
from sqlalchemy.orm import Session

from core.interfaces import DependencyRepository, SegmentRepository, TaskRepository
from core.models import Task, TaskDependency, TaskSegment
from infra.db.task.mapper import (
    dependency_from_orm,
    dependency_to_orm,
    segment_from_orm,
    segment_to_orm,
    task_from_orm,
    task_to_orm,
)
from infra.db.models import TaskDependencyORM, TaskORM, TaskSegmentORM


class SqlAlchemyTaskRepository(TaskRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, task: Task) -> None:
        self.session.add(task_to_orm(task))

    def update(self, task: Task) -> None:
        self.session.merge(task_to_orm(task))

    def delete(self, task_id: str) -> None:
        self.session.query(TaskORM).filter_by(id=task_id).delete()

    def get(self, task_id: str) -> Optional[Task]:
        obj = self.session.get(TaskORM, task_id)
        return task_from_orm(obj) if obj else None

    def list_by_project(self, project_id: str) -> List[Task]:
        stmt = (
            select(TaskORM)
            .where(TaskORM.project_id == project_id)
            .order_by(TaskORM.sort_order, TaskORM.start_date)
        )
        rows = self.session.execute(stmt).scalars().all()
        return [task_from_orm(row) for row in rows]

    def set_sort_orders(self, ordered_ids: List[str]) -> None:
        for position, task_id in enumerate(ordered_ids):
            self.session.execute(
                update(TaskORM).where(TaskORM.id == task_id).values(sort_order=position)
            )


class SqlAlchemyDependencyRepository(DependencyRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, dependency: TaskDependency) -> None:
        self.session.add(dependency_to_orm(dependency))

    def get(self, dependency_id: str) -> Optional[TaskDependency]:
        obj = self.session.get(TaskDependencyORM, dependency_id)
        return dependency_from_orm(obj) if obj else None

    def list_by_project(self, project_id: str) -> List[TaskDependency]:
        task_ids_subq = select(TaskORM.id).where(TaskORM.project_id == project_id)
        stmt = select(TaskDependencyORM).where(
            TaskDependencyORM.predecessor_task_id.in_(task_ids_subq),
            TaskDependencyORM.successor_task_id.in_(task_ids_subq),
        )
        rows = self.session.execute(stmt).scalars().all()
        return [dependency_from_orm(row) for row in rows]

    def delete(self, dependency_id: str) -> None:
        self.session.query(TaskDependencyORM).filter_by(id=dependency_id).delete()

    def delete_for_task(self, task_id: str) -> None:
        self.session.query(TaskDependencyORM).filter(
            or_(
                TaskDependencyORM.predecessor_task_id == task_id,
                TaskDependencyORM.successor_task_id == task_id,
            )
        ).delete(synchronize_session=False)


class SqlAlchemySegmentRepository(SegmentRepository):
    def __init__(self, session: Session):
        self.session = session

    def replace_for_task(self, task_id: str, segments: List[TaskSegment]) -> None:
        self.delete_for_task(task_id)
        self.session.add_all([segment_to_orm(seg) for seg in segments])

    def list_for_task(self, task_id: str) -> List[TaskSegment]:
        stmt = (
            select(TaskSegmentORM)
            .where(TaskSegmentORM.task_id == task_id)
            .order_by(TaskSegmentORM.start_date)
        )
        rows = self.session.execute(stmt).scalars().all()
        return [segment_from_orm(row) for row in rows]

    def list_by_project(self, project_id: str) -> List[TaskSegment]:
        task_ids_subq = select(TaskORM.id).where(TaskORM.project_id == project_id)
        stmt = (
            select(TaskSegmentORM)
            .where(TaskSegmentORM.task_id.in_(task_ids_subq))
            .order_by(TaskSegmentORM.task_id, TaskSegmentORM.start_date)
        )
        rows = self.session.execute(stmt).scalars().all()
        return [segment_from_orm(row) for row in rows]

    def delete_for_task(self, task_id: str) -> None:
        self.session.query(TaskSegmentORM).filter(
            TaskSegmentORM.task_id == task_id
        ).delete(synchronize_session=False)
