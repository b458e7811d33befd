"""Task domain model"""
from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict


class TaskFrequency(str, Enum):
    """How often a task comes back after it is done"""
    ONE_TIME = "OneTime"
    DAILY = "Daily"
    WEEKLY = "Weekly"
    MONTHLY = "Monthly"


RECURRING_FREQUENCIES = (
    TaskFrequency.DAILY,
    TaskFrequency.WEEKLY,
    TaskFrequency.MONTHLY,
)


class TaskBase(BaseModel):
    """Descriptive task fields carried from a task to its successor"""
    created_by: str
    task_name: str
    task_description: Optional[str] = None
    assigned_to: str
    assigned_name: Optional[str] = None
    task_frequency: TaskFrequency = TaskFrequency.ONE_TIME
    priority: Optional[str] = None


class TaskCreate(TaskBase):
    """Task creation model"""
    due_date: datetime
    source_task_id: Optional[int] = None


class TaskUpdate(BaseModel):
    """Task update model - all fields optional"""
    completed_date: Optional[datetime] = None
    due_date: Optional[datetime] = None


class Task(TaskBase):
    """Complete task model from database"""
    id: int
    due_date: datetime
    completed_date: Optional[datetime] = None
    source_task_id: Optional[int] = None  # the task this one was regenerated from
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

    @property
    def is_pending(self) -> bool:
        return self.completed_date is None

    @property
    def is_recurring(self) -> bool:
        return self.task_frequency in RECURRING_FREQUENCIES

    def successor(self, due_date: datetime) -> TaskCreate:
        """Build the next occurrence of this task, due at due_date"""
        return TaskCreate(
            source_task_id=self.id,
            created_by=self.created_by,
            task_name=self.task_name,
            task_description=self.task_description,
            assigned_to=self.assigned_to,
            assigned_name=self.assigned_name,
            task_frequency=self.task_frequency,
            priority=self.priority,
            due_date=due_date,
        )
