"""Shared fixtures: a fresh store, settings and app per test."""

from __future__ import annotations

from typing import Any

import pytest
from fastapi.testclient import TestClient

from washield.application.exceptions import ProviderUpstreamError
from washield.application.ports.messaging_provider import MessagingProviderPort
from washield.core.config import Settings
from washield.infrastructure.store.memory_store import MemoryMessageStore
from washield.infrastructure.whatsapp.mock_provider import MockWhatsAppProvider
from washield.main import create_app


VERIFY_TOKEN = "test_verify_token"


class FailingProvider(MessagingProviderPort):
    """Provider whose every network call fails like a rejected credential."""

    def __init__(self, message: str = "Invalid OAuth access token") -> None:
        self.message = message

    async def send_message(self, recipient: str, content: str, message_type: str = "text") -> dict[str, Any]:
        raise ProviderUpstreamError(self.message, status_code=401, error_code=190)

    async def get_message_status(self, message_id: str) -> dict[str, Any]:
        raise ProviderUpstreamError(self.message, status_code=401, error_code=190)

    async def mark_message_as_read(self, message_id: str) -> dict[str, Any]:
        raise ProviderUpstreamError(self.message, status_code=401, error_code=190)

    async def get_phone_number_info(self) -> dict[str, Any]:
        raise ProviderUpstreamError(self.message, status_code=401, error_code=190)

    def validate_webhook_token(self, token: str | None) -> bool:
        return False


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        _env_file=None,
        WHATSAPP_API_URL=None,
        PHONE_NUMBER_ID=None,
        WHATSAPP_ACCESS_TOKEN=None,
        WHATSAPP_WEBHOOK_VERIFY_TOKEN=VERIFY_TOKEN,
        ENV="dev",
    )


@pytest.fixture
def store() -> MemoryMessageStore:
    return MemoryMessageStore()


@pytest.fixture
def provider() -> MockWhatsAppProvider:
    return MockWhatsAppProvider(verify_token=VERIFY_TOKEN)


@pytest.fixture
def client(test_settings: Settings, store: MemoryMessageStore, provider: MockWhatsAppProvider) -> TestClient:
    app = create_app(app_settings=test_settings, store=store, provider=provider)
    return TestClient(app)


@pytest.fixture
def failing_client(test_settings: Settings, store: MemoryMessageStore) -> TestClient:
    app = create_app(app_settings=test_settings, store=store, provider=FailingProvider())
    return TestClient(app, raise_server_exceptions=False)
