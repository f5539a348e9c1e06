"""Shared fixtures and mocks for all tests."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio

from cfai.config.settings import Settings
from cfai.executor.confirmation import ConfirmationPort
from cfai.memory.store import AuditStore
from cfai.models.action import Action, ActionKind
from cfai.models.policy import RiskTier


class ScriptedConfirmation(ConfirmationPort):
    """Answers from fixed scripts and records every question asked."""

    def __init__(self, batch=True, high_risk=(), cont=()):
        self.batch = batch
        self.high_risk = list(high_risk)
        self.cont = list(cont)
        self.calls: list[tuple] = []

    async def confirm_batch(self, actions):
        self.calls.append(("batch", len(actions)))
        return self.batch

    async def confirm_high_risk(self, action):
        self.calls.append(("high_risk", action.description))
        return self.high_risk.pop(0)

    async def confirm_continue(self, after_index, failed_action):
        self.calls.append(("continue", after_index))
        return self.cont.pop(0)


@pytest.fixture
def mock_settings(monkeypatch):
    monkeypatch.setenv("CFAI_CLOUDFLARE_API_TOKEN", "cf-test-token")
    monkeypatch.setenv("CFAI_AI_API_KEY", "sk-test-key-fake")
    monkeypatch.setenv("CFAI_AI_MODEL", "gpt-4o")
    monkeypatch.setenv("CFAI_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("CFAI_DB_PATH", ":memory:")
    return Settings()  # type: ignore[call-arg]


@pytest_asyncio.fixture
async def temp_db():
    store = AuditStore(db_path=":memory:")
    await store.initialize()
    yield store
    await store.close()


@pytest.fixture
def remote_client():
    """AsyncMock standing in for the Cloudflare client."""
    client = AsyncMock()
    client.create_dns_record.return_value = {"id": "rec-123"}
    return client


@pytest.fixture
def make_action():
    def _make(
        kind: ActionKind = ActionKind.DNS_RECORD_CREATE,
        params: dict | None = None,
        risk: RiskTier = RiskTier.LOW,
        description: str = "test action",
        type_token: str = "",
    ) -> Action:
        if params is None:
            params = {"type": "A", "name": "www", "content": "1.2.3.4"}
        return Action(
            kind=kind,
            type_token=type_token,
            description=description,
            parameters=params,
            risk=risk,
        )
    return _make


@pytest.fixture
def mock_openai_response():
    """Create a mock OpenAI chat completion response."""
    def _make(content: str | None, total_tokens: int | None = 42):
        message = MagicMock()
        message.content = content
        choice = MagicMock()
        choice.message = message
        response = MagicMock()
        response.choices = [choice]
        if total_tokens is None:
            response.usage = None
        else:
            response.usage = MagicMock(total_tokens=total_tokens)
        return response
    return _make


@pytest.fixture
def scripted():
    return ScriptedConfirmation
