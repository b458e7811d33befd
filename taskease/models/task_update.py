"""Task update (comment) model"""
from datetime import datetime
from enum import Enum
from typing import Annotated, Optional
from pydantic import BaseModel, StringConstraints


class TaskUpdateType(str, Enum):
    COMMENT = "comment"
    STATUS_CHANGE = "status_change"
    NOTE = "note"
    OTHER = "other"


class TaskCommentCreate(BaseModel):
    task_id: int
    update_text: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
    updated_by: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
    update_type: TaskUpdateType = TaskUpdateType.COMMENT


class TaskComment(TaskCommentCreate):
    id: int
    created_at: Optional[datetime] = None
