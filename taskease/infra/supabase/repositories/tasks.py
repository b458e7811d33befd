"""Task repository"""
from datetime import datetime, timezone
from typing import List, Optional

from supabase import Client  # type: ignore

from taskease.models.task import Task, TaskCreate, TaskUpdate, RECURRING_FREQUENCIES

from .base import BaseRepository


class TaskRepository(BaseRepository[Task, TaskCreate, TaskUpdate]):
    """Repository for task operations"""

    def __init__(self, client: Client):
        super().__init__(client, "tasks", Task)

    async def find_assigned_to(self, email: str) -> List[Task]:
        """Find all tasks assigned to a user"""
        return await self.find_by_filters({"assigned_to": email}, order_by="due_date")

    async def find_created_by(self, email: str) -> List[Task]:
        """Find all tasks a user has assigned to others (or to themselves)"""
        return await self.find_by_filters({"created_by": email}, order_by="due_date")

    async def find_recurring(self) -> List[Task]:
        """Find all tasks whose frequency is Daily, Weekly or Monthly"""
        response = (
            self._table()
            .select("*")
            .in_("task_frequency", [f.value for f in RECURRING_FREQUENCIES])
            .execute()
        )
        return self._to_models(response.data)

    async def find_successor(self, task_id: int) -> Optional[Task]:
        """Find the task that was regenerated from the given one, if any"""
        successors = await self.find_by_filters({"source_task_id": task_id}, limit=1)
        return successors[0] if successors else None

    async def find_due_between(self, email: str, start: datetime, end: datetime) -> List[Task]:
        """Tasks assigned to email with start <= due_date < end"""
        response = (
            self._table()
            .select("*")
            .eq("assigned_to", email)
            .gte("due_date", start.isoformat())
            .lt("due_date", end.isoformat())
            .order("due_date", desc=False)
            .execute()
        )
        return self._to_models(response.data)

    async def find_overdue(self, email: str, before: datetime) -> List[Task]:
        """Pending tasks assigned to email that were due before the given time"""
        response = (
            self._table()
            .select("*")
            .eq("assigned_to", email)
            .lt("due_date", before.isoformat())
            .is_("completed_date", "null")
            .order("due_date", desc=False)
            .execute()
        )
        return self._to_models(response.data)

    async def mark_completed(
        self,
        task_id: int,
        email: str,
        completed_at: Optional[datetime] = None,
    ) -> Optional[Task]:
        """Mark a pending task assigned to email as completed.

        The filter and the write happen in one statement, so a task that is
        missing, assigned to someone else or already completed is left
        untouched and None is returned.
        """
        if completed_at is None:
            completed_at = datetime.now(timezone.utc)

        update_data = TaskUpdate(completed_date=completed_at)
        response = (
            self._table()
            .update(update_data.model_dump(exclude_unset=True, mode="json"))
            .eq("id", task_id)
            .eq("assigned_to", email)
            .is_("completed_date", "null")
            .execute()
        )
        return self._first(response)
