# API module exports
from taskease.api import auth, chat, health, tasks, users, webhooks
from taskease.api.base import api_router

__all__ = ["auth", "chat", "health", "tasks", "users", "webhooks", "api_router"]
