from __future__ import annotations

import logging
from typing import Any

from washield.application.ports.messaging_provider import SUPPORTED_MESSAGE_TYPES, MessagingProviderPort


class SendMessageUseCase:
    def __init__(self, provider: MessagingProviderPort) -> None:
        self._provider = provider
        self._logger = logging.getLogger(__name__)

    async def execute(self, phone_number: str | None, message: str | None, message_type: str | None = None) -> dict[str, Any]:
        if not phone_number or not message:
            raise ValueError("Missing phoneNumber or message")
        message_type = message_type or "text"
        if message_type not in SUPPORTED_MESSAGE_TYPES:
            raise ValueError(f"Unsupported messageType: {message_type}")

        self._logger.info("Relaying outbound message", extra={"recipient": phone_number, "message_type": message_type})
        return await self._provider.send_message(phone_number, message, message_type)
