from __future__ import annotations

import logging
import time
from typing import Any

from washield.application.ports.messaging_provider import MessagingProviderPort
from washield.infrastructure.whatsapp.webhook_verify import token_matches
from washield.infrastructure.whatsapp.whatsapp_client import build_send_payload


class MockWhatsAppProvider(MessagingProviderPort):
    def __init__(self, verify_token: str = "") -> None:
        self._verify_token = verify_token
        self._logger = logging.getLogger(__name__)
        self.sent: list[dict[str, Any]] = []

    async def send_message(self, recipient: str, content: str, message_type: str = "text") -> dict[str, Any]:
        payload = build_send_payload(recipient, content, message_type)
        self.sent.append(payload)
        message_id = f"wamid.mock_{int(time.time() * 1000)}_{len(self.sent)}"
        self._logger.info(
            "Mock send to WhatsApp",
            extra={"recipient": recipient, "message_id": message_id, "message_type": message_type},
        )
        return {
            "messaging_product": "whatsapp",
            "contacts": [{"input": recipient, "wa_id": recipient}],
            "messages": [{"id": message_id}],
        }

    async def get_message_status(self, message_id: str) -> dict[str, Any]:
        self._logger.info("Mock status lookup", extra={"message_id": message_id})
        return {"id": message_id, "status": "sent", "timestamp": str(int(time.time()))}

    async def mark_message_as_read(self, message_id: str) -> dict[str, Any]:
        self._logger.info("Mock read receipt", extra={"message_id": message_id})
        return {"success": True}

    async def get_phone_number_info(self) -> dict[str, Any]:
        return {
            "id": "mock_phone_number_id",
            "display_phone_number": "+1 555 000 0000",
            "verified_name": "WA-Shield (mock)",
            "quality_rating": "GREEN",
        }

    def validate_webhook_token(self, token: str | None) -> bool:
        return token_matches(token, self._verify_token)
