"""User detail repository"""
from datetime import datetime, timezone
from typing import Optional

from supabase import Client  # type: ignore

from taskease.models.user import UserDetail, UserDetailCreate, UserDetailUpdate, UserRole

from .base import BaseRepository


class UserDetailRepository(BaseRepository[UserDetail, UserDetailCreate, UserDetailUpdate]):
    """Repository for per-user contact details and role"""

    def __init__(self, client: Client):
        super().__init__(client, "user_details", UserDetail)

    async def find_by_user(self, user_id: int) -> Optional[UserDetail]:
        details = await self.find_by_filters({"user_id": user_id}, limit=1)
        return details[0] if details else None

    async def save(self, user_id: int, phone_number: str, role: UserRole) -> UserDetail:
        """Create the detail row for a user, or update it when it exists"""
        existing = await self.find_by_user(user_id)

        if existing:
            updated = await self.update_fields(existing.id, {
                "phone_number": phone_number,
                "role": role.value,
                "updated_at": datetime.now(timezone.utc).isoformat(),
            })
            if updated is None:
                raise ValueError(f"Failed to update user detail {existing.id}")
            return updated

        return await self.create(
            UserDetailCreate(user_id=user_id, phone_number=phone_number, role=role)
        )
