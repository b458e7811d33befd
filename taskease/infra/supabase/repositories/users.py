"""User repository"""
import logging
from typing import Dict, List, Optional

from supabase import Client  # type: ignore

from taskease.models.user import User, UserCreate, UserCounters

from .base import BaseRepository

logger = logging.getLogger(__name__)

COUNTER_FIELDS = (
    "tasks_assigned",
    "tasks_completed",
    "tasks_in_progress",
    "tasks_not_started",
)


class UserRepository(BaseRepository[User, UserCreate, UserCounters]):
    """Repository for users and their task counters"""

    def __init__(self, client: Client):
        super().__init__(client, "users", User)

    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by email"""
        users = await self.find_by_filters({"email": email}, limit=2)

        if not users:
            return None

        if len(users) > 1:
            # Only possible on a store created without the unique constraint
            logger.warning(f"Multiple users share email {email}, using id={users[0].id}")

        return users[0]

    async def list_emails(self) -> List[str]:
        """Emails of all registered users"""
        response = self._table().select("email").execute()
        return [row["email"] for row in response.data if row.get("email")]

    async def adjust_counters(self, email: str, **deltas: int) -> Optional[User]:
        """Add deltas to the named counters of a user.

        Every counter is floored at zero. Returns None when the user does not
        exist.

        Example:
            await repo.adjust_counters(email, tasks_assigned=1, tasks_not_started=1)
        """
        unknown = set(deltas) - set(COUNTER_FIELDS)
        if unknown:
            raise ValueError(f"Unknown counter field(s): {', '.join(sorted(unknown))}")

        user = await self.find_by_email(email)
        if not user:
            logger.warning(f"Cannot adjust counters, no user with email {email}")
            return None

        values: Dict[str, int] = {
            field: max(0, getattr(user, field) + delta)
            for field, delta in deltas.items()
        }
        if not values:
            return user

        return await self.update_fields(user.id, values)

    async def set_counters(self, user_id: int, counters: UserCounters) -> Optional[User]:
        """Overwrite all four counters of a user"""
        return await self.update_fields(user_id, counters.model_dump(mode="json"))
