from fastapi import APIRouter, HTTPException, Depends
from pydantic import BaseModel
from typing import List, Optional
import logging

from taskease.api.deps import get_repositories, get_task_service
from taskease.infra.supabase.repositories import RepositoryFactory
from taskease.models.task import Task
from taskease.models.user import User, UserDetail, UserRole
from taskease.services.task import TaskService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])


class EmailListResponse(BaseModel):
    emails: List[str]


class UserProfileResponse(BaseModel):
    success: bool = True
    user: User


class UserTasksResponse(BaseModel):
    success: bool = True
    tasks: List[Task]


class SaveUserDetailRequest(BaseModel):
    phone_number: Optional[str] = None
    role: Optional[UserRole] = None


class UserDetailResponse(BaseModel):
    success: bool = True
    message: str
    user_detail: UserDetail


async def _require_user(repos: RepositoryFactory, email: str) -> User:
    user = await repos.users.find_by_email(email)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.get("/emails", response_model=EmailListResponse)
async def list_emails(repos: RepositoryFactory = Depends(get_repositories)):
    """Emails of all registered users (candidates for assignment)"""
    try:
        emails = await repos.users.list_emails()
    except Exception as e:
        logger.error(f"Error listing emails: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Server Error")

    return {"emails": emails}


@router.get("/{email}", response_model=UserProfileResponse)
async def get_profile(email: str, repos: RepositoryFactory = Depends(get_repositories)):
    """User profile with task counters"""
    try:
        user = await _require_user(repos, email)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching profile of {email}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Server Error")

    return {"user": user}


@router.get("/{email}/tasks", response_model=UserTasksResponse)
async def get_user_tasks(email: str, repos: RepositoryFactory = Depends(get_repositories)):
    """Tasks assigned to the user"""
    try:
        tasks = await repos.tasks.find_assigned_to(email)
    except Exception as e:
        logger.error(f"Error fetching tasks of {email}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Server Error")

    return {"tasks": tasks}


@router.get("/{email}/assigned-by-me", response_model=UserTasksResponse)
async def get_assigned_by_me(email: str, repos: RepositoryFactory = Depends(get_repositories)):
    """Tasks the user created for others"""
    try:
        tasks = await repos.tasks.find_created_by(email)
    except Exception as e:
        logger.error(f"Error fetching tasks created by {email}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Server Error")

    return {"tasks": tasks}


@router.get("/{email}/detail", response_model=UserDetailResponse)
async def get_user_detail(email: str, repos: RepositoryFactory = Depends(get_repositories)):
    """Phone number and role of a user"""
    try:
        user = await _require_user(repos, email)
        detail = await repos.user_details.find_by_user(user.id)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching detail of {email}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Server Error")

    if not detail:
        raise HTTPException(status_code=404, detail="User details not found.")

    return {"message": "User details fetched successfully", "user_detail": detail}


@router.put("/{email}/detail", response_model=UserDetailResponse)
async def save_user_detail(
    email: str,
    request: SaveUserDetailRequest,
    repos: RepositoryFactory = Depends(get_repositories),
):
    """Create or update the phone number and role of a user"""
    if not request.phone_number or not request.role:
        raise HTTPException(
            status_code=400,
            detail="Email, phone number, and role are required.",
        )

    try:
        user = await _require_user(repos, email)
        detail = await repos.user_details.save(user.id, request.phone_number, request.role)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error saving detail of {email}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Server Error")

    return {"message": "User details saved successfully!", "user_detail": detail}


@router.post("/{email}/recount", response_model=UserProfileResponse)
async def recount_user_tasks(email: str, service: TaskService = Depends(get_task_service)):
    """Rebuild the user's task counters from the task table"""
    try:
        user = await service.recount(email)
    except Exception as e:
        logger.error(f"Error recounting tasks of {email}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Server Error")

    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    return {"user": user}
