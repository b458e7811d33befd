"""
Recurring Task Service

Handles business logic for recurring tasks including:
- Creating the successor of a recurring task (the single place that does so)
- Regenerating a task right after it is completed
- The scheduled sweep over recurring tasks whose cycle has elapsed
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from taskease.infra.supabase.repositories import RepositoryFactory
from taskease.models.task import Task
from taskease.utils.datetime_helper import utc_now
from taskease.utils.recurrence_calculator import calculate_next_due_date, is_cycle_elapsed

logger = logging.getLogger(__name__)


class RecurringTaskService:
    """Service for regenerating recurring tasks"""

    def __init__(self, repos: RepositoryFactory):
        self.repos = repos

    async def spawn_successor(self, task: Task, due_date: datetime) -> Optional[Task]:
        """
        Create the next occurrence of a recurring task.

        Each task is regenerated at most once: the successor records its
        source_task_id, and a task that already has one is skipped, whichever
        path asks for it (completion or sweep).

        Args:
            task: the task being regenerated
            due_date: due date of the new occurrence

        Returns:
            The created task, or None when a successor already exists
        """
        existing = await self.repos.tasks.find_successor(task.id)
        if existing:
            logger.info(
                f"Task {task.id}: successor {existing.id} already exists "
                f"(due {existing.due_date}), not creating another"
            )
            return None

        new_task = await self.repos.tasks.create(task.successor(due_date))
        logger.info(
            f"Task {task.id}: created {task.task_frequency.value} successor {new_task.id} "
            f"for {task.assigned_to} due {due_date}"
        )

        await self.repos.users.adjust_counters(
            task.assigned_to, tasks_assigned=1, tasks_not_started=1
        )
        return new_task

    async def regenerate_after_completion(self, task: Task) -> Optional[Task]:
        """Create the successor of a just-completed task, dated from its completion"""
        if not task.is_recurring or task.completed_date is None:
            return None

        next_due = calculate_next_due_date(task.completed_date, task.task_frequency)
        if next_due is None:
            return None

        return await self.spawn_successor(task, next_due)

    async def find_due_tasks(self, now: Optional[datetime] = None) -> List[Task]:
        """Recurring tasks whose due date lapsed by at least one cycle"""
        if now is None:
            now = utc_now()

        recurring = await self.repos.tasks.find_recurring()
        return [
            task for task in recurring
            if is_cycle_elapsed(task.due_date, task.task_frequency, now)
        ]

    async def process_due_tasks(self, now: Optional[datetime] = None) -> Dict[str, Any]:
        """
        Sweep: give every lapsed recurring task a successor dated `now`.

        Runs regardless of whether the source task was completed. A failure
        on one task is logged and the sweep moves on.

        Returns:
            Summary of processed tasks
        """
        if now is None:
            now = utc_now()

        due_tasks = await self.find_due_tasks(now)
        logger.info(f"Found {len(due_tasks)} recurring tasks with an elapsed cycle")

        created = []
        skipped = []
        errors = []

        for task in due_tasks:
            try:
                new_task = await self.spawn_successor(task, now)
                if new_task:
                    created.append(new_task.id)
                else:
                    skipped.append(task.id)
            except Exception as e:
                logger.error(f"Error processing recurring task {task.id}: {e}", exc_info=True)
                errors.append({"task_id": task.id, "error": str(e)})

        logger.info(
            f"Recurring sweep done: {len(created)} created, {len(skipped)} skipped, "
            f"{len(errors)} failed"
        )

        return {
            "status": "ok",
            "due_count": len(due_tasks),
            "created_count": len(created),
            "created_task_ids": created,
            "skipped_task_ids": skipped,
            "error_count": len(errors),
            "errors": errors,
        }
