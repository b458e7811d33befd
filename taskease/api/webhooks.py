"""Endpoints called by the external daily cron"""
from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException
import logging

from taskease.api.deps import get_mail_service, get_repositories, verify_cron_secret
from taskease.infra.supabase.repositories import RepositoryFactory
from taskease.services.daily_summary_service import DailySummaryService
from taskease.services.mail_service import MailService
from taskease.services.task import RecurringTaskService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/webhooks",
    tags=["webhooks"],
    dependencies=[Depends(verify_cron_secret)],
)


@router.post("/process-recurring-tasks")
async def process_recurring_tasks(repos: RepositoryFactory = Depends(get_repositories)):
    """
    Recurring task sweep (once a day, "5 19 * * *").

    Every Daily/Weekly/Monthly task whose due date lapsed by at least one
    cycle (1/7/30 days) gets a successor due now, unless its series already
    has a later task.
    """
    logger.info("CRON: Starting process-recurring-tasks")

    try:
        return await RecurringTaskService(repos).process_due_tasks()
    except Exception as e:
        logger.error(f"Recurring task sweep failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Server Error")


async def _send_daily_summaries(service: DailySummaryService) -> None:
    try:
        await service.send_all()
    except Exception as e:
        logger.error(f"Daily summary run failed: {e}", exc_info=True)


@router.get("/ping")
async def ping(
    background_tasks: BackgroundTasks,
    repos: RepositoryFactory = Depends(get_repositories),
    mailer: MailService = Depends(get_mail_service),
):
    """Keep-alive ping that also kicks off the daily summary run"""
    logger.info("CRON: Pinged, starting daily summary check")
    background_tasks.add_task(_send_daily_summaries, DailySummaryService(repos, mailer))
    return {"success": True, "message": "Ping success and summary check triggered"}
