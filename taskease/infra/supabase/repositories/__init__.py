"""Repository factory and exports"""
from supabase import Client
from .tasks import TaskRepository
from .users import UserRepository
from .user_details import UserDetailRepository
from .task_updates import TaskUpdateRepository
from .chat_messages import WorldChatMessageRepository
from .summary_status import SummaryStatusRepository


class RepositoryFactory:
    """Factory for creating repository instances"""

    def __init__(self, client: Client):
        self._client = client
        self._tasks: TaskRepository = None
        self._users: UserRepository = None
        self._user_details: UserDetailRepository = None
        self._task_updates: TaskUpdateRepository = None
        self._chat_messages: WorldChatMessageRepository = None
        self._summary_status: SummaryStatusRepository = None

    @property
    def tasks(self) -> TaskRepository:
        """Get task repository"""
        if self._tasks is None:
            self._tasks = TaskRepository(self._client)
        return self._tasks

    @property
    def users(self) -> UserRepository:
        """Get user repository"""
        if self._users is None:
            self._users = UserRepository(self._client)
        return self._users

    @property
    def user_details(self) -> UserDetailRepository:
        """Get user detail repository"""
        if self._user_details is None:
            self._user_details = UserDetailRepository(self._client)
        return self._user_details

    @property
    def task_updates(self) -> TaskUpdateRepository:
        """Get task update (comment) repository"""
        if self._task_updates is None:
            self._task_updates = TaskUpdateRepository(self._client)
        return self._task_updates

    @property
    def chat_messages(self) -> WorldChatMessageRepository:
        """Get world chat message repository"""
        if self._chat_messages is None:
            self._chat_messages = WorldChatMessageRepository(self._client)
        return self._chat_messages

    @property
    def summary_status(self) -> SummaryStatusRepository:
        """Get summary status repository"""
        if self._summary_status is None:
            self._summary_status = SummaryStatusRepository(self._client)
        return self._summary_status


__all__ = [
    'RepositoryFactory',
    'TaskRepository',
    'UserRepository',
    'UserDetailRepository',
    'TaskUpdateRepository',
    'WorldChatMessageRepository',
    'SummaryStatusRepository',
]
