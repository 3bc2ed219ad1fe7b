"""
Task Service - dashboard task CRUD over the backend's /tasks endpoints
"""
from typing import Dict, Iterable, List, Optional, Union
import logging

from ..backend_routes import BackendRoutes
from ..domain.task import Task, TaskStatus
from ..exceptions import BackendError, ValidationError
from ..gateway import HttpGateway

logger = logging.getLogger(__name__)

ALL = "ALL"


def filter_tasks(tasks: Iterable[Task], status: Union[str, TaskStatus, None] = ALL) -> List[Task]:
    """
    Keep tasks with the given status; "ALL" (or None) keeps everything

    Raises:
        ValidationError: Unknown status filter
    """
    if status is None or status == ALL:
        return list(tasks)
    try:
        wanted = TaskStatus(status)
    except ValueError:
        raise ValidationError(f"Unknown status filter: {status}")
    return [t for t in tasks if t.status == wanted]


def task_stats(tasks: Iterable[Task]) -> Dict[str, int]:
    """Counters shown above the task list"""
    tasks = list(tasks)
    return {
        "total": len(tasks),
        "todo": sum(1 for t in tasks if t.status == TaskStatus.TODO),
        "in_progress": sum(1 for t in tasks if t.status == TaskStatus.IN_PROGRESS),
        "done": sum(1 for t in tasks if t.status == TaskStatus.DONE),
    }


class TaskService:
    """Service cho task management"""

    def __init__(self, gateway: HttpGateway):
        self.gateway = gateway

    async def list_tasks(self, status: Optional[str] = ALL) -> List[Task]:
        """
        Load the user's tasks

        A non-list payload is treated as "no tasks". Records the client can't
        represent (e.g. blank title) are skipped with a warning.
        """
        data = await self.gateway.get(BackendRoutes.TASKS)
        if not isinstance(data, list):
            logger.warning(f"[TASKS] Expected a list, got {type(data).__name__}")
            return []

        tasks = []
        for item in data:
            if not isinstance(item, dict):
                continue
            try:
                tasks.append(Task.from_api(item))
            except ValidationError as e:
                logger.warning(f"[TASKS] Skipping task {item.get('taskId')}: {e.message}")
        return filter_tasks(tasks, status)

    async def get_task(self, task_id: int) -> Task:
        data = await self.gateway.get(BackendRoutes.TASK.format(task_id=task_id))
        if not isinstance(data, dict):
            raise BackendError(None, f"Task {task_id} not found", data)
        return Task.from_api(data)

    async def create_task(self, task: Task) -> Optional[Task]:
        """Create task; returns the stored task when the backend echoes it"""
        logger.info(f"[TASKS] Creating task: {task.title}")
        data = await self.gateway.post(BackendRoutes.TASKS, json=task.to_api())
        return Task.from_api(data) if isinstance(data, dict) and data.get("taskTitle") else None

    async def update_task(self, task_id: int, task: Task) -> Optional[Task]:
        logger.info(f"[TASKS] Updating task {task_id}")
        data = await self.gateway.put(BackendRoutes.TASK.format(task_id=task_id), json=task.to_api())
        return Task.from_api(data) if isinstance(data, dict) and data.get("taskTitle") else None

    async def delete_task(self, task_id: int) -> None:
        logger.info(f"[TASKS] Deleting task {task_id}")
        await self.gateway.delete(BackendRoutes.TASK.format(task_id=task_id))
