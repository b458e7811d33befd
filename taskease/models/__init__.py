"""Domain models for the application"""
from .task import Task, TaskCreate, TaskUpdate, TaskFrequency, RECURRING_FREQUENCIES
from .user import User, UserCreate, UserCounters, UserDetail, UserDetailCreate, UserDetailUpdate, UserRole
from .task_update import TaskComment, TaskCommentCreate, TaskUpdateType
from .chat import WorldChatMessage, WorldChatMessageCreate, SYSTEM_USERNAME
from .summary import SummaryStatus, SummaryStatusCreate

__all__ = [
    'Task', 'TaskCreate', 'TaskUpdate', 'TaskFrequency', 'RECURRING_FREQUENCIES',
    'User', 'UserCreate', 'UserCounters',
    'UserDetail', 'UserDetailCreate', 'UserDetailUpdate', 'UserRole',
    'TaskComment', 'TaskCommentCreate', 'TaskUpdateType',
    'WorldChatMessage', 'WorldChatMessageCreate', 'SYSTEM_USERNAME',
    'SummaryStatus', 'SummaryStatusCreate',
]
