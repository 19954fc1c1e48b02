from datetime import date

from core.models import Task, TaskDependency


def make_task(task_id: str, start: date, end: date, **extra) -> Task:
    return Task(
        id=task_id,
        project_id=extra.pop("project_id", "p1"),
        name=extra.pop("name", f"Task {task_id}"),
        start_date=start,
        end_date=end,
        **extra,
    )


def make_dep(pred: str, succ: str, dep_type=None, dep_id: str | None = None) -> TaskDependency:
    dep = TaskDependency.create(pred, succ) if dep_type is None else TaskDependency.create(pred, succ, dep_type)
    if dep_id:
        dep.id = dep_id
    return dep
