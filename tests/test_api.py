# tests/test_api.py

from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from postgrest.exceptions import APIError

from taskease import config
from taskease.api.deps import get_mail_service
from taskease.infra.supabase import get_supabase_client
from taskease.main import app
from taskease.models.task import TaskFrequency


@pytest.fixture()
def client(supabase, mailer):
    app.dependency_overrides[get_supabase_client] = lambda: supabase
    app.dependency_overrides[get_mail_service] = lambda: mailer
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def create_task(client: TestClient, **overrides) -> dict:
    body = {
        "created_by": "boss@example.com",
        "task_name": "Write report",
        "assigned_to": "alice@example.com",
        "due_date": "2024-01-05T09:00:00Z",
    }
    body.update(overrides)
    response = client.post("/api/tasks", json=body)
    assert response.status_code == 201, response.text
    return response.json()["task"]


# Accounts

def test_signup_and_login(client) -> None:
    response = client.post("/api/auth/signup", json={"email": "alice@example.com", "username": "Alice"})
    assert response.status_code == 200
    user = response.json()["user"]
    assert user["email"] == "alice@example.com"
    assert user["tasks_assigned"] == 0

    response = client.post("/api/auth/login", json={"email": "alice@example.com"})
    assert response.status_code == 200
    assert response.json()["user"]["id"] == user["id"]


def test_signup_twice_is_rejected(client) -> None:
    client.post("/api/auth/signup", json={"email": "alice@example.com"})

    response = client.post("/api/auth/signup", json={"email": "alice@example.com"})

    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "User already exists"}


def test_signup_unique_violation_maps_to_400(client, supabase) -> None:
    supabase.failures[("users", "insert")] = APIError(
        {"code": "23505", "message": "duplicate key", "details": None, "hint": None}
    )

    response = client.post("/api/auth/signup", json={"email": "alice@example.com"})

    assert response.status_code == 400
    assert response.json()["message"] == "User already exists"


def test_login_errors(client) -> None:
    assert client.post("/api/auth/login", json={}).status_code == 400
    response = client.post("/api/auth/login", json={"email": "ghost@example.com"})
    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "User not found"}


# Tasks

def test_create_task_for_unregistered_assignee(client) -> None:
    response = client.post(
        "/api/tasks",
        json={"created_by": "boss@example.com", "task_name": "Write report", "assigned_to": "ghost@example.com"},
    )

    assert response.status_code == 404
    assert response.json()["message"] == "The assigned email is not registered in the system."


def test_create_task_validation_error(client) -> None:
    response = client.post("/api/tasks", json={"task_name": "No assignee"})

    assert response.status_code == 422
    body = response.json()
    assert body["success"] is False
    assert body["errors"]


def test_create_and_list_tasks(client, make_user) -> None:
    make_user("alice@example.com", "Alice")
    task = create_task(client, task_frequency="Weekly")

    assert task["assigned_name"] == "Alice"
    assert task["task_frequency"] == "Weekly"

    response = client.get("/api/tasks", params={"assigned_to": "alice@example.com"})
    assert response.json()["count"] == 1

    response = client.get(f"/api/tasks/{task['id']}")
    assert response.json()["task"]["task_name"] == "Write report"

    assert client.get("/api/tasks/999").status_code == 404


def test_complete_task_flow(client, supabase, make_user) -> None:
    make_user("alice@example.com", "Alice")
    task = create_task(client)

    response = client.post(f"/api/tasks/{task['id']}/complete", json={"email": "alice@example.com"})
    assert response.status_code == 200
    body = response.json()
    assert body["completed_task"]["completed_date"] is not None
    assert body["generated_task"] is None

    response = client.post(f"/api/tasks/{task['id']}/complete", json={"email": "alice@example.com"})
    assert response.status_code == 404
    assert response.json()["message"] == "Task not found or not assigned to this email."

    [message] = supabase.rows("world_chat_messages")
    assert message["message"] == 'Alice has completed task: "Write report"'


def test_complete_recurring_task_returns_successor(client, make_user) -> None:
    make_user("alice@example.com")
    task = create_task(client, task_frequency="Daily")

    body = client.post(f"/api/tasks/{task['id']}/complete", json={"email": "alice@example.com"}).json()

    generated = body["generated_task"]
    assert generated["task_name"] == "Write report"
    assert generated["completed_date"] is None
    assert generated["id"] != task["id"]


def test_delete_task(client, make_user) -> None:
    make_user("alice@example.com")
    task = create_task(client)

    response = client.delete(f"/api/tasks/{task['id']}")
    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Task deleted successfully"}

    assert client.delete(f"/api/tasks/{task['id']}").status_code == 404


def test_task_comments(client, make_user) -> None:
    make_user("alice@example.com")
    task = create_task(client)
    url = f"/api/tasks/{task['id']}/updates"

    blank = client.post(url, json={"update_text": "   ", "updated_by": "alice@example.com"})
    assert blank.status_code == 400

    created = client.post(url, json={"update_text": "Halfway there", "updated_by": "alice@example.com"})
    assert created.status_code == 201
    assert created.json()["update"]["update_type"] == "comment"

    listed = client.get(url).json()
    assert [u["update_text"] for u in listed["updates"]] == ["Halfway there"]

    missing = client.post("/api/tasks/999/updates", json={"update_text": "hi", "updated_by": "x@example.com"})
    assert missing.status_code == 404
    assert client.get("/api/tasks/999/updates").status_code == 404


# Users

def test_user_profile_and_tasks(client, make_user) -> None:
    make_user("alice@example.com", "Alice")
    make_user("bob@example.com")
    create_task(client)
    create_task(client, created_by="alice@example.com", assigned_to="bob@example.com")

    assert client.get("/api/users/emails").json()["emails"] == ["alice@example.com", "bob@example.com"]

    profile = client.get("/api/users/alice@example.com").json()["user"]
    assert profile["tasks_assigned"] == 1
    assert profile["tasks_not_started"] == 1

    assert len(client.get("/api/users/alice@example.com/tasks").json()["tasks"]) == 1
    assigned = client.get("/api/users/alice@example.com/assigned-by-me").json()["tasks"]
    assert [t["assigned_to"] for t in assigned] == ["bob@example.com"]

    assert client.get("/api/users/ghost@example.com").status_code == 404


def test_user_detail(client, make_user) -> None:
    make_user("alice@example.com")
    url = "/api/users/alice@example.com/detail"

    assert client.get(url).status_code == 404
    assert client.put(url, json={"phone_number": "+15550100"}).status_code == 400
    assert client.put(url, json={"phone_number": "+15550100", "role": "boss"}).status_code == 422

    saved = client.put(url, json={"phone_number": "+15550100", "role": "manager"})
    assert saved.status_code == 200
    updated = client.put(url, json={"phone_number": "+15550199", "role": "admin"}).json()["user_detail"]
    assert updated["id"] == saved.json()["user_detail"]["id"]

    detail = client.get(url).json()["user_detail"]
    assert detail["phone_number"] == "+15550199"
    assert detail["role"] == "admin"


def test_recount(client, supabase, make_user, make_task) -> None:
    alice = make_user("alice@example.com", tasks_assigned=10)
    make_task("A", alice.email, datetime(2024, 1, 5, tzinfo=timezone.utc))

    response = client.post("/api/users/alice@example.com/recount")

    assert response.status_code == 200
    assert response.json()["user"]["tasks_assigned"] == 1
    assert client.post("/api/users/ghost@example.com/recount").status_code == 404


# World chat

def test_chat_history_endpoint(client, supabase) -> None:
    start = datetime(2024, 5, 1, tzinfo=timezone.utc)
    for i in range(5):
        supabase.seed(
            "world_chat_messages",
            username="System",
            message=f"m{i}",
            is_system=True,
            timestamp=start + timedelta(minutes=i),
        )

    response = client.get("/api/chat/messages", params={"before": "2024-05-01T00:04:00Z", "limit": 2})

    assert [m["message"] for m in response.json()] == ["m2", "m3"]
    assert client.get("/api/chat/messages", params={"limit": 0}).status_code == 422


def test_world_chat_websocket(client, supabase, make_user) -> None:
    alice = make_user("alice@example.com", "Alice")

    with client.websocket_connect("/ws/world-chat") as websocket:
        init = websocket.receive_json()
        assert init == {"event": "world-chat-init", "data": []}

        websocket.send_text("not json")
        websocket.send_text(json.dumps({"user_id": alice.id, "message": "Hello team"}))

        event = websocket.receive_json()
        assert event["event"] == "world-chat-message"
        assert event["data"]["username"] == "Alice"
        assert event["data"]["message"] == "Hello team"

    assert len(supabase.rows("world_chat_messages")) == 1


# Cron webhooks

def test_webhooks_require_secret_when_configured(client, monkeypatch) -> None:
    monkeypatch.setattr(config, "CRON_SECRET", "s3cret")

    assert client.post("/api/webhooks/process-recurring-tasks").status_code == 403
    response = client.post("/api/webhooks/process-recurring-tasks", headers={"X-Cron-Secret": "s3cret"})
    assert response.status_code == 200


def test_process_recurring_tasks_webhook(client, make_user, make_task) -> None:
    make_user("alice@example.com")
    make_task(
        "Daily log",
        "alice@example.com",
        datetime.now(timezone.utc) - timedelta(days=2),
        task_frequency=TaskFrequency.DAILY,
    )

    body = client.post("/api/webhooks/process-recurring-tasks").json()

    assert body["status"] == "ok"
    assert body["created_count"] == 1


def test_ping_triggers_daily_summaries(client, mailer, make_user, monkeypatch) -> None:
    monkeypatch.setattr(config, "DAILY_SUMMARY_HOUR", 0)
    make_user("alice@example.com")

    response = client.get("/api/webhooks/ping")

    assert response.status_code == 200
    assert response.json()["success"] is True
    assert [e.to for e in mailer.sent] == ["alice@example.com"]


def test_health(client) -> None:
    body = client.get("/api/health").json()
    assert body["status"] == "healthy"
    assert body["world_chat_connections"] == 0
