"""
Tasks Router

Dashboard endpoints: list / filter / stats and CRUD.
Every endpoint requires an AUTHENTICATED session.
"""
from fastapi import APIRouter, Depends, Query
from typing import List, Optional
from pydantic import BaseModel
from datetime import datetime

from ...core.domain.task import Task, TaskStatus
from ...core.services.task_service import TaskService, task_stats, ALL
from ..dependencies import get_task_service, require_authenticated

import logging
logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/tasks",
    tags=["tasks"],
    dependencies=[Depends(require_authenticated)]
)


# ========== Schemas ==========
class TaskPayload(BaseModel):
    """Schema for the create / edit task form"""
    title: str
    description: Optional[str] = ""
    status: TaskStatus = TaskStatus.TODO
    due_date: Optional[datetime] = None

    def to_domain(self) -> Task:
        return Task(
            title=self.title,
            description=self.description or "",
            status=self.status,
            due_date=self.due_date
        )


class TaskResponse(BaseModel):
    id: Optional[int] = None
    title: str
    description: str = ""
    status: TaskStatus
    due_date: Optional[datetime] = None

    @staticmethod
    def from_domain(task: Task) -> "TaskResponse":
        return TaskResponse(
            id=task.id,
            title=task.title,
            description=task.description,
            status=task.status,
            due_date=task.due_date
        )


class StatsResponse(BaseModel):
    total: int
    todo: int
    in_progress: int
    done: int


# ========== Endpoints ==========
@router.get("", response_model=List[TaskResponse])
async def list_tasks(
    status: str = Query(ALL),
    service: TaskService = Depends(get_task_service)
):
    """List tasks, optionally filtered by status (ALL / TODO / IN_PROGRESS / DONE)"""
    tasks = await service.list_tasks(status)
    return [TaskResponse.from_domain(t) for t in tasks]


@router.get("/stats", response_model=StatsResponse)
async def get_stats(service: TaskService = Depends(get_task_service)):
    tasks = await service.list_tasks()
    return StatsResponse(**task_stats(tasks))


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(task_id: int, service: TaskService = Depends(get_task_service)):
    task = await service.get_task(task_id)
    return TaskResponse.from_domain(task)


@router.post("", response_model=dict)
async def create_task(data: TaskPayload, service: TaskService = Depends(get_task_service)):
    created = await service.create_task(data.to_domain())
    return {
        "ok": True,
        "task": TaskResponse.from_domain(created).model_dump(mode="json") if created else None
    }


@router.put("/{task_id}", response_model=dict)
async def update_task(
    task_id: int,
    data: TaskPayload,
    service: TaskService = Depends(get_task_service)
):
    updated = await service.update_task(task_id, data.to_domain())
    return {
        "ok": True,
        "task": TaskResponse.from_domain(updated).model_dump(mode="json") if updated else None
    }


@router.delete("/{task_id}")
async def delete_task(task_id: int, service: TaskService = Depends(get_task_service)):
    await service.delete_task(task_id)
    return {"ok": True, "message": "Task deleted"}
