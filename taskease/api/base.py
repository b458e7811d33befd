from fastapi import APIRouter
from taskease.api import auth, chat, health, tasks, users, webhooks

api_router = APIRouter()

# Include all sub-routers
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(tasks.router)
api_router.include_router(chat.router)
api_router.include_router(chat.ws_router)
api_router.include_router(webhooks.router)
api_router.include_router(health.router)
