"""User and user detail models"""
from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class UserBase(BaseModel):
    email: str
    username: Optional[str] = None


class UserCreate(UserBase):
    """User creation model (counters start at zero in the store)"""


class UserCounters(BaseModel):
    """Denormalized per-user task counters"""
    tasks_assigned: int = Field(0, ge=0)
    tasks_completed: int = Field(0, ge=0)
    tasks_in_progress: int = Field(0, ge=0)
    tasks_not_started: int = Field(0, ge=0)


class User(UserBase, UserCounters):
    """Complete user model from database"""
    id: int
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class UserRole(str, Enum):
    USER = "user"
    ADMIN = "admin"
    MANAGER = "manager"
    GUEST = "guest"


class UserDetailCreate(BaseModel):
    user_id: int
    phone_number: Optional[str] = None
    role: UserRole = UserRole.USER


class UserDetailUpdate(BaseModel):
    phone_number: Optional[str] = None
    role: Optional[UserRole] = None


class UserDetail(UserDetailCreate):
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
