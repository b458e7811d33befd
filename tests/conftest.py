# tests/conftest.py

from __future__ import annotations

from datetime import datetime

import pytest

from taskease import config
from taskease.infra.supabase.repositories import RepositoryFactory
from taskease.models.task import Task, TaskFrequency
from taskease.models.user import User

from .fakes import FakeBroadcaster, FakeMailService, FakeSupabaseClient


@pytest.fixture(autouse=True)
def fixed_config(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep tests independent of whatever .env the developer has locally"""
    monkeypatch.setattr(config, "APP_TIMEZONE", "UTC")
    monkeypatch.setattr(config, "DAILY_SUMMARY_HOUR", 12)
    monkeypatch.setattr(config, "CRON_SECRET", None)


@pytest.fixture()
def supabase() -> FakeSupabaseClient:
    return FakeSupabaseClient()


@pytest.fixture()
def repos(supabase: FakeSupabaseClient) -> RepositoryFactory:
    return RepositoryFactory(supabase)


@pytest.fixture()
def broadcaster() -> FakeBroadcaster:
    return FakeBroadcaster()


@pytest.fixture()
def mailer() -> FakeMailService:
    return FakeMailService()


@pytest.fixture()
def make_user(supabase: FakeSupabaseClient):
    """Seed a user row and return it as a model"""

    def _make(email: str, username: str | None = None, **counters: int) -> User:
        row = supabase.seed("users", email=email, username=username, **counters)
        return User(**row)

    return _make


@pytest.fixture()
def make_task(supabase: FakeSupabaseClient):
    """Seed a task row and return it as a model"""

    def _make(
        task_name: str,
        assigned_to: str,
        due_date: datetime,
        created_by: str = "boss@example.com",
        task_frequency: TaskFrequency = TaskFrequency.ONE_TIME,
        completed_date: datetime | None = None,
        source_task_id: int | None = None,
    ) -> Task:
        row = supabase.seed(
            "tasks",
            created_by=created_by,
            task_name=task_name,
            assigned_to=assigned_to,
            task_frequency=task_frequency.value,
            due_date=due_date,
            completed_date=completed_date,
            source_task_id=source_task_id,
        )
        return Task(**row)

    return _make
