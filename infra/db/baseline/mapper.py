from __future__ import annotations

from core.models import Baseline, BaselineTask
from infra.db.models import BaselineORM, BaselineTaskORM


def baseline_from_orm(obj: BaselineORM) -> Baseline:
    return Baseline(
        id=obj.id,
        project_id=obj.project_id,
        name=obj.name,
        created_at=obj.created_at,
        description=obj.description,
    )


def baseline_to_orm(baseline: Baseline) -> BaselineORM:
    return BaselineORM(
        id=baseline.id,
        project_id=baseline.project_id,
        name=baseline.name,
        created_at=baseline.created_at,
        description=baseline.description,
    )


def baseline_task_from_orm(obj: BaselineTaskORM) -> BaselineTask:
    return BaselineTask(
        id=obj.id,
        baseline_id=obj.baseline_id,
        task_id=obj.task_id,
        name=obj.name,
        start_date=obj.start_date,
        end_date=obj.end_date,
    )


def baseline_task_to_orm(task: BaselineTask) -> BaselineTaskORM:
    return BaselineTaskORM(
        id=task.id,
        baseline_id=task.baseline_id,
        task_id=task.task_id,
        name=task.name,
        start_date=task.start_date,
        end_date=task.end_date,
    )
