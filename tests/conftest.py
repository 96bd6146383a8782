from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from odoo_assistant.config import Settings, get_settings
from odoo_assistant.main import app, get_provider


class FakeProvider:
    """Records every call and answers with a canned reply or error."""

    def __init__(self, reply: str = "Here is the code", error: Optional[Exception] = None) -> None:
        self.reply = reply
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    async def generate(self, messages: List[Dict[str, Any]], system_instruction: str) -> str:
        self.calls.append({"messages": messages, "system_instruction": system_instruction})
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def test_settings(monkeypatch: pytest.MonkeyPatch) -> Settings:
    monkeypatch.setenv("GOOGLE_API_KEY", "test-key")
    monkeypatch.setenv("MAX_HISTORY_TURNS", "4")
    return Settings()


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def client(provider: FakeProvider, test_settings: Settings):
    app.dependency_overrides[get_provider] = lambda: provider
    app.dependency_overrides[get_settings] = lambda: test_settings
    yield TestClient(app)
    app.dependency_overrides.clear()
