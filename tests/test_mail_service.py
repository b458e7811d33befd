# tests/test_mail_service.py

from __future__ import annotations

import json

import httpx
import pytest

from taskease import config
from taskease.services.mail_service import MailService


@pytest.fixture()
def captured(monkeypatch: pytest.MonkeyPatch):
    """Route MailService's httpx client through a MockTransport"""
    requests: list[httpx.Request] = []
    state = {"status": 200, "raise": False}
    real_client = httpx.AsyncClient

    def handler(request: httpx.Request) -> httpx.Response:
        if state["raise"]:
            raise httpx.ConnectError("mail API unreachable", request=request)
        requests.append(request)
        return httpx.Response(state["status"], json={"id": "msg_1"})

    monkeypatch.setattr(
        httpx,
        "AsyncClient",
        lambda **kwargs: real_client(transport=httpx.MockTransport(handler), **kwargs),
    )
    return requests, state


@pytest.mark.asyncio
async def test_unconfigured_mailer_drops_email(captured, monkeypatch) -> None:
    requests, _ = captured
    monkeypatch.setattr(config, "MAIL_API_URL", None)
    monkeypatch.setattr(config, "MAIL_API_KEY", None)
    mailer = MailService()

    assert mailer.is_configured is False
    assert await mailer.send_email("alice@example.com", "Hi", "Body") is False
    assert requests == []


@pytest.mark.asyncio
async def test_send_email_posts_json(captured) -> None:
    requests, _ = captured
    mailer = MailService(api_url="https://mail.test/emails", api_key="key-123", sender="TaskEase <bot@test>")

    assert await mailer.send_email("alice@example.com", "Your Daily Task Summary", "Hello") is True

    [request] = requests
    assert request.url == "https://mail.test/emails"
    assert request.headers["Authorization"] == "Bearer key-123"
    assert json.loads(request.content) == {
        "from": "TaskEase <bot@test>",
        "to": ["alice@example.com"],
        "subject": "Your Daily Task Summary",
        "text": "Hello",
    }


@pytest.mark.asyncio
async def test_rejected_email_returns_false(captured) -> None:
    _, state = captured
    state["status"] = 422
    mailer = MailService(api_url="https://mail.test/emails", api_key="key-123")

    assert await mailer.send_email("alice@example.com", "Hi", "Body") is False


@pytest.mark.asyncio
async def test_transport_error_returns_false(captured) -> None:
    _, state = captured
    state["raise"] = True
    mailer = MailService(api_url="https://mail.test/emails", api_key="key-123")

    assert await mailer.send_email("alice@example.com", "Hi", "Body") is False
