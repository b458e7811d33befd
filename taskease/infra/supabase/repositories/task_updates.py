"""Task update (comment) repository"""
from typing import List

from pydantic import BaseModel
from supabase import Client  # type: ignore

from taskease.models.task_update import TaskComment, TaskCommentCreate

from .base import BaseRepository


class TaskUpdateRepository(BaseRepository[TaskComment, TaskCommentCreate, BaseModel]):
    """Repository for the append-only comment log of a task"""

    def __init__(self, client: Client):
        super().__init__(client, "task_updates", TaskComment)

    async def find_by_task(self, task_id: int) -> List[TaskComment]:
        """Comments of a task, oldest first"""
        return await self.find_by_filters({"task_id": task_id}, order_by="created_at")
