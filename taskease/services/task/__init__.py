from .recurring_task_service import RecurringTaskService
from .task_service import CompletionResult, SystemNotifier, TaskService

__all__ = ["RecurringTaskService", "TaskService", "CompletionResult", "SystemNotifier"]
