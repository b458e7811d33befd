"""World chat message repository"""
from datetime import datetime
from typing import List

from pydantic import BaseModel
from supabase import Client  # type: ignore

from taskease.models.chat import WorldChatMessage, WorldChatMessageCreate

from .base import BaseRepository


class WorldChatMessageRepository(BaseRepository[WorldChatMessage, WorldChatMessageCreate, BaseModel]):
    """Repository for the shared world chat room"""

    def __init__(self, client: Client):
        super().__init__(client, "world_chat_messages", WorldChatMessage)

    async def find_before(self, before: datetime, limit: int = 20) -> List[WorldChatMessage]:
        """The newest `limit` messages sent before `before`, returned oldest first"""
        response = (
            self._table()
            .select("*")
            .lt("timestamp", before.isoformat())
            .order("timestamp", desc=True)
            .limit(limit)
            .execute()
        )
        messages = self._to_models(response.data)
        messages.reverse()
        return messages

    async def find_latest(self, limit: int = 50) -> List[WorldChatMessage]:
        """The newest `limit` messages, returned oldest first"""
        response = (
            self._table()
            .select("*")
            .order("timestamp", desc=True)
            .limit(limit)
            .execute()
        )
        messages = self._to_models(response.data)
        messages.reverse()
        return messages
