"""Shared FastAPI dependencies"""
import logging
from typing import Optional

from fastapi import Depends, Header, HTTPException
from fastapi.requests import HTTPConnection
from supabase import Client  # type: ignore

from taskease import config
from taskease.infra.supabase import RepositoryFactory, get_supabase_client
from taskease.services.chat_service import ConnectionManager, WorldChatService
from taskease.services.mail_service import MailService
from taskease.services.task import TaskService

logger = logging.getLogger(__name__)


def get_repositories(supabase: Client = Depends(get_supabase_client)) -> RepositoryFactory:
    return RepositoryFactory(supabase)


def get_broadcaster(connection: HTTPConnection) -> ConnectionManager:
    """The world chat connection manager owned by the application"""
    return connection.app.state.world_chat


def get_chat_service(
    repos: RepositoryFactory = Depends(get_repositories),
    broadcaster: ConnectionManager = Depends(get_broadcaster),
) -> WorldChatService:
    return WorldChatService(repos, broadcaster)


def get_task_service(
    repos: RepositoryFactory = Depends(get_repositories),
    chat: WorldChatService = Depends(get_chat_service),
) -> TaskService:
    return TaskService(repos, notifier=chat)


def get_mail_service() -> MailService:
    return MailService()


def verify_cron_secret(x_cron_secret: Optional[str] = Header(None)) -> None:
    """Reject cron calls without the shared secret (when one is configured)"""
    if config.CRON_SECRET and x_cron_secret != config.CRON_SECRET:
        logger.warning("Rejected cron call with a missing or wrong secret")
        raise HTTPException(status_code=403, detail="Unauthorized")
