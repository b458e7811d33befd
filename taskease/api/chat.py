"""World chat: history over HTTP, live messages over WebSocket"""
import json
import logging
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, WebSocket, WebSocketDisconnect

from taskease.api.deps import get_chat_service
from taskease.models.chat import WorldChatMessage
from taskease.services.chat_service import WorldChatService
from taskease.utils.datetime_helper import ensure_utc

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/chat", tags=["chat"])
ws_router = APIRouter(tags=["chat"])


@router.get("/messages", response_model=List[WorldChatMessage])
async def get_messages(
    before: Optional[datetime] = None,
    limit: int = Query(20, ge=1, le=100),
    chat: WorldChatService = Depends(get_chat_service),
):
    """Messages sent before `before` (default now), oldest first"""
    try:
        return await chat.history(before=ensure_utc(before), limit=limit)
    except Exception as e:
        logger.error(f"Error fetching chat messages: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error")


@ws_router.websocket("/ws/world-chat")
async def world_chat(websocket: WebSocket, chat: WorldChatService = Depends(get_chat_service)):
    """
    Live world chat.

    On connect the client receives {"event": "world-chat-init", "data": [...]}
    with the latest messages. It sends {"user_id": ..., "message": ...}
    frames; stored messages are broadcast to everyone as
    {"event": "world-chat-message", "data": {...}}.
    """
    await chat.broadcaster.connect(websocket)
    try:
        await chat.send_history(websocket)

        while True:
            try:
                frame = await websocket.receive_json()
            except json.JSONDecodeError:
                logger.debug("Ignoring non-JSON world chat frame")
                continue
            if not isinstance(frame, dict):
                continue

            try:
                await chat.post_user_message(frame.get("user_id"), frame.get("message"))
            except Exception as e:
                logger.error(f"Error handling world chat message: {e}", exc_info=True)

    except WebSocketDisconnect:
        pass
    finally:
        chat.broadcaster.disconnect(websocket)
