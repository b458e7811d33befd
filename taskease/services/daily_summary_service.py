"""
Daily Summary Service

Emails each user a digest of today's, overdue and upcoming tasks, at most
once per day.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from taskease import config
from taskease.infra.supabase.repositories import RepositoryFactory
from taskease.models.task import Task, RECURRING_FREQUENCIES
from taskease.models.user import User
from taskease.services.mail_service import MailService
from taskease.utils.datetime_helper import app_timezone, day_bounds, format_date, utc_now

logger = logging.getLogger(__name__)

SUMMARY_SUBJECT = "Your Daily Task Summary"


def build_summary_text(
    user: User,
    today: datetime,
    tasks_today: List[Task],
    overdue: List[Task],
    upcoming: List[Task],
) -> str:
    """Render the plain-text digest for one user"""
    completed = sum(1 for t in tasks_today if not t.is_pending)
    pending = len(tasks_today) - completed

    checklist_today = "\n".join(
        f"{'[x]' if not t.is_pending else '[ ]'} {t.task_name}" for t in tasks_today
    )
    checklist_overdue = "\n".join(
        f"! {t.task_name} (Due: {format_date(t.due_date)})" for t in overdue
    )
    checklist_upcoming = "\n".join(
        f"- {t.task_name} ({t.task_frequency.value})" for t in upcoming
    )

    return (
        f"Hi {user.username or user.email},\n"
        f"\n"
        f"Daily Task Summary for {format_date(today)}:\n"
        f"\n"
        f"Completed Today: {completed}\n"
        f"Pending Today: {pending}\n"
        f"\n"
        f"Today's Checklist:\n"
        f"{checklist_today or 'No tasks scheduled for today.'}\n"
        f"\n"
        f"Overdue Tasks:\n"
        f"{checklist_overdue or 'None'}\n"
        f"\n"
        f"Tasks for Tomorrow:\n"
        f"{checklist_upcoming or 'None planned yet.'}\n"
        f"\n"
        f"Keep up the good work!\n"
        f"\n"
        f"Regards,\n"
        f"TaskEase\n"
    )


class DailySummaryService:
    """Builds and sends the daily summaries"""

    def __init__(
        self,
        repos: RepositoryFactory,
        mailer: MailService,
        summary_hour: Optional[int] = None,
    ):
        self.repos = repos
        self.mailer = mailer
        self.summary_hour = config.DAILY_SUMMARY_HOUR if summary_hour is None else summary_hour

    async def collect(self, user: User, now: datetime) -> Dict[str, List[Task]]:
        """Today's, overdue and tomorrow's tasks for one user"""
        today_start, today_end = day_bounds(now)
        tomorrow_start, tomorrow_end = day_bounds(now, days_ahead=1)

        tasks_today = await self.repos.tasks.find_due_between(user.email, today_start, today_end)
        overdue = await self.repos.tasks.find_overdue(user.email, today_start)

        upcoming = await self.repos.tasks.find_due_between(user.email, tomorrow_start, tomorrow_end)
        seen = {t.id for t in upcoming}
        for task in await self.repos.tasks.find_assigned_to(user.email):
            if task.task_frequency in RECURRING_FREQUENCIES and task.id not in seen:
                upcoming.append(task)
                seen.add(task.id)

        return {"today": tasks_today, "overdue": overdue, "upcoming": upcoming}

    async def send_for_user(self, user: User, now: datetime) -> bool:
        """
        Send the summary to one user unless it was already sent today.

        Returns:
            True when an email went out
        """
        today = now.astimezone(app_timezone()).date().isoformat()
        if await self.repos.summary_status.has_sent(user.email, today):
            logger.info(f"Summary already sent today for {user.email}")
            return False

        tasks = await self.collect(user, now)
        text = build_summary_text(user, now, tasks["today"], tasks["overdue"], tasks["upcoming"])

        if not await self.mailer.send_email(user.email, SUMMARY_SUBJECT, text):
            logger.warning(f"Summary for {user.email} was not delivered")
            return False

        await self.repos.summary_status.mark_sent(user.email, today)
        logger.info(f"Summary sent and marked for {user.email}")
        return True

    async def send_all(self, now: Optional[datetime] = None) -> Dict[str, Any]:
        """
        Send today's summaries to every user.

        Does nothing before the configured summary hour. A failure for one
        user is logged and the run continues.
        """
        if now is None:
            now = utc_now()

        local_hour = now.astimezone(app_timezone()).hour
        if local_hour < self.summary_hour:
            logger.info(f"Too early for summaries ({local_hour}:00 < {self.summary_hour}:00), skipping")
            return {"status": "skipped", "sent": 0, "error_count": 0}

        users = await self.repos.users.find_all()
        sent = 0
        errors = []

        for user in users:
            try:
                if await self.send_for_user(user, now):
                    sent += 1
            except Exception as e:
                logger.error(f"Error sending summary to {user.email}: {e}", exc_info=True)
                errors.append({"email": user.email, "error": str(e)})

        logger.info(f"Daily summaries: {sent}/{len(users)} sent, {len(errors)} failed")
        return {"status": "ok", "sent": sent, "error_count": len(errors), "errors": errors}
