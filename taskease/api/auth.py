"""Account endpoints.

The frontend signs users in with Google and forwards the verified email;
these endpoints only register and look up the matching account.
"""
from fastapi import APIRouter, Depends, HTTPException
from postgrest.exceptions import APIError  # type: ignore
from pydantic import BaseModel
from typing import Optional
import logging

from taskease.api.deps import get_repositories
from taskease.infra.supabase.repositories import RepositoryFactory
from taskease.models.user import User, UserCreate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])

UNIQUE_VIOLATION = "23505"


class SignupRequest(BaseModel):
    email: str
    username: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None


class UserResponse(BaseModel):
    success: bool = True
    message: str
    user: User


@router.post("/signup", response_model=UserResponse)
async def signup(request: SignupRequest, repos: RepositoryFactory = Depends(get_repositories)):
    """Register a user; each email can register once"""
    email = request.email.strip()
    if not email:
        raise HTTPException(status_code=400, detail="Email is required")

    try:
        if await repos.users.find_by_email(email):
            logger.info(f"Signup rejected, {email} already registered")
            raise HTTPException(status_code=400, detail="User already exists")

        user = await repos.users.create(UserCreate(email=email, username=request.username))
    except HTTPException:
        raise
    except APIError as e:
        if e.code == UNIQUE_VIOLATION:
            logger.info(f"Signup rejected by unique constraint for {email}")
            raise HTTPException(status_code=400, detail="User already exists")
        logger.error(f"Error signing up {email}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Server Error")
    except Exception as e:
        logger.error(f"Error signing up {email}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Server Error")

    logger.info(f"Signed up user {user.id} ({email})")
    return {"message": "Signed up successfully", "user": user}


@router.post("/login", response_model=UserResponse)
async def login(request: LoginRequest, repos: RepositoryFactory = Depends(get_repositories)):
    """Look up the account of an already authenticated email"""
    if not request.email or not request.email.strip():
        raise HTTPException(status_code=400, detail="Email is required")

    try:
        user = await repos.users.find_by_email(request.email.strip())
    except Exception as e:
        logger.error(f"Error logging in {request.email}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Server Error")

    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    return {"message": "Logged in successfully", "user": user}
