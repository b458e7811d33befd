"""Services module"""

from taskease.services.chat_service import ConnectionManager, WorldChatService
from taskease.services.daily_summary_service import DailySummaryService
from taskease.services.mail_service import MailService
from taskease.services.task import CompletionResult, RecurringTaskService, TaskService

__all__ = [
    "ConnectionManager",
    "WorldChatService",
    "DailySummaryService",
    "MailService",
    "TaskService",
    "RecurringTaskService",
    "CompletionResult",
]
