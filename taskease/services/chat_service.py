"""
World chat

ConnectionManager keeps the open WebSocket connections and fans events out
to them. WorldChatService stores messages and publishes them through the
manager it is given.
"""

import logging
from datetime import datetime
from typing import Any, List, Optional, Set

from fastapi import WebSocket

from taskease.infra.supabase.repositories import RepositoryFactory
from taskease.models.chat import SYSTEM_USERNAME, WorldChatMessage, WorldChatMessageCreate
from taskease.utils.datetime_helper import utc_now

logger = logging.getLogger(__name__)

INIT_EVENT = "world-chat-init"
MESSAGE_EVENT = "world-chat-message"
INIT_HISTORY_SIZE = 50


class ConnectionManager:
    """Broadcasts events to every connected world chat client"""

    def __init__(self):
        self._connections: Set[WebSocket] = set()

    @property
    def connection_count(self) -> int:
        return len(self._connections)

    async def connect(self, websocket: WebSocket) -> None:
        await websocket.accept()
        self._connections.add(websocket)
        logger.info(f"World chat client connected ({self.connection_count} open)")

    def disconnect(self, websocket: WebSocket) -> None:
        self._connections.discard(websocket)
        logger.info(f"World chat client disconnected ({self.connection_count} open)")

    async def send(self, websocket: WebSocket, event: str, data: Any) -> None:
        await websocket.send_json({"event": event, "data": data})

    async def broadcast(self, event: str, data: Any) -> int:
        """Send an event to all clients, dropping the ones that fail.

        Returns the number of clients reached.
        """
        delivered = 0
        for websocket in list(self._connections):
            try:
                await self.send(websocket, event, data)
                delivered += 1
            except Exception as e:
                logger.warning(f"Dropping world chat client after send failure: {e}")
                self._connections.discard(websocket)
        return delivered


class WorldChatService:
    """Stores world chat messages and publishes them"""

    def __init__(self, repos: RepositoryFactory, broadcaster: ConnectionManager):
        self.repos = repos
        self.broadcaster = broadcaster

    async def history(self, before: Optional[datetime] = None, limit: int = 20) -> List[WorldChatMessage]:
        return await self.repos.chat_messages.find_before(before or utc_now(), limit=limit)

    async def send_history(self, websocket: WebSocket) -> None:
        """Send the latest messages to a freshly connected client"""
        messages = await self.repos.chat_messages.find_latest(INIT_HISTORY_SIZE)
        await self.broadcaster.send(
            websocket, INIT_EVENT, [m.model_dump(mode="json") for m in messages]
        )

    async def post_user_message(self, user_id: Any, message: Any) -> Optional[WorldChatMessage]:
        """Store and broadcast a message from a registered user.

        Blank messages and unknown users are ignored (None is returned).
        """
        if not user_id or not isinstance(message, str) or not message.strip():
            return None

        try:
            user = await self.repos.users.find_by_id(int(user_id))
        except (TypeError, ValueError):
            return None
        if not user:
            return None

        saved = await self.repos.chat_messages.create(
            WorldChatMessageCreate(
                user_id=user.id,
                username=user.username or user.email,
                message=message,
                is_system=False,
                timestamp=utc_now(),
            )
        )
        await self.broadcaster.broadcast(MESSAGE_EVENT, saved.model_dump(mode="json"))
        return saved

    async def post_system_message(self, text: str) -> WorldChatMessage:
        """Store and broadcast a message written by the system"""
        saved = await self.repos.chat_messages.create(
            WorldChatMessageCreate(
                user_id=None,
                username=SYSTEM_USERNAME,
                message=text,
                is_system=True,
                timestamp=utc_now(),
            )
        )
        await self.broadcaster.broadcast(MESSAGE_EVENT, saved.model_dump(mode="json"))
        return saved
