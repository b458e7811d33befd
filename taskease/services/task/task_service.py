"""
Task Service

Task lifecycle and the user counter bookkeeping that goes with it:
create, complete (with recurring regeneration), delete, comments and
counter recount.
"""

import logging
from datetime import datetime
from typing import List, Optional, Protocol

from pydantic import BaseModel

from taskease.infra.supabase.repositories import RepositoryFactory
from taskease.models.task import Task, TaskCreate, TaskFrequency
from taskease.models.task_update import TaskComment, TaskCommentCreate, TaskUpdateType
from taskease.models.user import User, UserCounters
from taskease.utils.datetime_helper import ensure_utc, utc_now

from .recurring_task_service import RecurringTaskService

logger = logging.getLogger(__name__)


class SystemNotifier(Protocol):
    """Anything that can publish a system message to users"""

    async def post_system_message(self, text: str) -> object:
        ...


class CompletionResult(BaseModel):
    completed_task: Task
    generated_task: Optional[Task] = None


class TaskService:
    """Service for task operations"""

    def __init__(self, repos: RepositoryFactory, notifier: Optional[SystemNotifier] = None):
        self.repos = repos
        self.notifier = notifier
        self.recurring = RecurringTaskService(repos)

    async def _notify(self, text: str) -> None:
        """Publish a system message; failures never reach the caller"""
        if self.notifier is None:
            return
        try:
            await self.notifier.post_system_message(text)
        except Exception as e:
            logger.error(f"Failed to publish system message {text!r}: {e}")

    async def get_task(self, task_id: int) -> Optional[Task]:
        return await self.repos.tasks.find_by_id(task_id)

    async def list_tasks(
        self,
        assigned_to: Optional[str] = None,
        created_by: Optional[str] = None,
    ) -> List[Task]:
        filters = {}
        if assigned_to:
            filters["assigned_to"] = assigned_to
        if created_by:
            filters["created_by"] = created_by
        return await self.repos.tasks.find_by_filters(filters, order_by="due_date")

    async def create_task(
        self,
        created_by: str,
        task_name: str,
        assigned_to: str,
        task_description: Optional[str] = None,
        assigned_name: Optional[str] = None,
        task_frequency: TaskFrequency = TaskFrequency.ONE_TIME,
        due_date: Optional[datetime] = None,
        priority: Optional[str] = None,
    ) -> Optional[Task]:
        """
        Create a task and count it against the assignee.

        Returns:
            The created task, or None when the assignee is not registered
        """
        assignee = await self.repos.users.find_by_email(assigned_to)
        if not assignee:
            logger.info(f"Cannot create task, assignee {assigned_to} is not registered")
            return None

        task = await self.repos.tasks.create(
            TaskCreate(
                created_by=created_by,
                task_name=task_name,
                task_description=task_description,
                assigned_to=assigned_to,
                assigned_name=assigned_name or assignee.username,
                task_frequency=task_frequency,
                due_date=ensure_utc(due_date) or utc_now(),
                priority=priority,
            )
        )
        logger.info(f"Created task {task.id} '{task.task_name}' for {assigned_to}")

        await self.repos.users.adjust_counters(
            assigned_to, tasks_assigned=1, tasks_not_started=1
        )
        return task

    async def complete_task(self, task_id: int, email: str) -> Optional[CompletionResult]:
        """
        Mark a pending task assigned to `email` as completed.

        Steps, in order, without rollback:
        1. set completed_date
        2. tasks_completed +1, tasks_not_started -1 (floored)
        3. recurring tasks get their successor
        4. system message to world chat

        Returns:
            The completed and generated tasks, or None when no pending task
            with this id is assigned to `email`
        """
        task = await self.repos.tasks.mark_completed(task_id, email, utc_now())
        if not task:
            logger.info(f"No pending task {task_id} assigned to {email}")
            return None

        logger.info(f"Task {task.id} completed by {email} at {task.completed_date}")

        await self.repos.users.adjust_counters(
            email, tasks_completed=1, tasks_not_started=-1
        )

        generated = await self.recurring.regenerate_after_completion(task)

        user = await self.repos.users.find_by_email(email)
        if user:
            await self._notify(f'{user.username or email} has completed task: "{task.task_name}"')

        return CompletionResult(completed_task=task, generated_task=generated)

    async def delete_task(self, task_id: int) -> bool:
        """
        Delete a task and uncount it from its assignee.

        tasks_assigned and exactly one of tasks_not_started (pending) or
        tasks_completed (completed) go down by one, floored at zero.

        Returns:
            False when the task does not exist
        """
        task = await self.repos.tasks.find_by_id(task_id)
        if not task:
            return False

        user = await self.repos.users.find_by_email(task.assigned_to)
        if user:
            if task.is_pending:
                await self.repos.users.adjust_counters(
                    user.email, tasks_assigned=-1, tasks_not_started=-1
                )
            else:
                await self.repos.users.adjust_counters(
                    user.email, tasks_assigned=-1, tasks_completed=-1
                )
            await self._notify(
                f'{user.username or user.email} has deleted the task: "{task.task_name}"'
            )

        deleted = await self.repos.tasks.delete(task_id)
        if deleted:
            logger.info(f"Deleted task {task_id}")
        return deleted

    async def add_comment(
        self,
        task_id: int,
        update_text: str,
        updated_by: str,
        update_type: TaskUpdateType = TaskUpdateType.COMMENT,
    ) -> Optional[TaskComment]:
        """Append a comment to a task; None when the task does not exist"""
        if not await self.repos.tasks.find_by_id(task_id):
            return None

        comment = await self.repos.task_updates.create(
            TaskCommentCreate(
                task_id=task_id,
                update_text=update_text,
                updated_by=updated_by,
                update_type=update_type,
            )
        )
        logger.info(f"Task {task_id}: {update_type.value} {comment.id} added by {updated_by}")
        return comment

    async def list_comments(self, task_id: int) -> Optional[List[TaskComment]]:
        """Comments of a task, oldest first; None when the task does not exist"""
        if not await self.repos.tasks.find_by_id(task_id):
            return None
        return await self.repos.task_updates.find_by_task(task_id)

    async def recount(self, email: str) -> Optional[User]:
        """Recompute a user's counters from the tasks assigned to them"""
        user = await self.repos.users.find_by_email(email)
        if not user:
            return None

        tasks = await self.repos.tasks.find_assigned_to(email)
        completed = sum(1 for t in tasks if not t.is_pending)
        counters = UserCounters(
            tasks_assigned=len(tasks),
            tasks_completed=completed,
            tasks_in_progress=0,
            tasks_not_started=len(tasks) - completed,
        )
        logger.info(f"Recounted tasks for {email}: {counters.model_dump()}")
        return await self.repos.users.set_counters(user.id, counters)
