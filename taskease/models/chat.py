"""World chat message model"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel

SYSTEM_USERNAME = "System"


class WorldChatMessageCreate(BaseModel):
    user_id: Optional[int] = None
    username: str = SYSTEM_USERNAME
    message: str
    is_system: bool = False
    timestamp: datetime


class WorldChatMessage(WorldChatMessageCreate):
    id: int
