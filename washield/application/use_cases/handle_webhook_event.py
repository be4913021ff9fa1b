from __future__ import annotations

import logging

from washield.application.dto.webhook_event import WebhookEventDTO


class HandleWebhookEventUseCase:
    """Log inbound messages and delivery statuses. Nothing is stored or replied to."""

    def __init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def execute(self, event: WebhookEventDTO) -> str:
        """Returns "processed" when at least one message or status was found, else "ignored"."""
        messages = event.extract_messages()
        statuses = event.extract_statuses()

        for message in messages:
            if message.type == "text":
                self._logger.info(
                    f"Text message from {message.sender}: {message.text}",
                    extra={"message_id": message.id, "sender": message.sender},
                )
            elif message.type in {"image", "document"}:
                self._logger.info(
                    f"{message.type.capitalize()} message from {message.sender}",
                    extra={"message_id": message.id, "sender": message.sender},
                )
            else:
                self._logger.info(
                    "Received message",
                    extra={"message_id": message.id, "sender": message.sender, "message_type": message.type},
                )

        for status in statuses:
            self._logger.info(
                f"Message status update: {status.id} - {status.status}",
                extra={"message_id": status.id, "status": status.status, "recipient": status.recipient},
            )
            if status.status == "failed":
                self._logger.warning("Message delivery failed", extra={"message_id": status.id})

        if not messages and not statuses:
            self._logger.info("Webhook event ignored: no messages or statuses")
            return "ignored"
        return "processed"
