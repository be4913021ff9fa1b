from __future__ import annotations

import logging
from datetime import datetime, timezone

from washield.application.ports.message_store import MessageStorePort
from washield.domain.entities.message import MessageRecord


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class CreateMessageUseCase:
    def __init__(self, store: MessageStorePort) -> None:
        self._store = store
        self._logger = logging.getLogger(__name__)

    def execute(
        self,
        sender: str | None,
        recipient: str | None,
        encrypted_content: str | None,
        timestamp: str | None = None,
        message_id: str | None = None,
    ) -> MessageRecord:
        if not sender or not recipient or not encrypted_content:
            raise ValueError("Missing required fields")

        record = MessageRecord(
            id=message_id or self._store.new_id(),
            sender=sender,
            recipient=recipient,
            encrypted_content=encrypted_content,
            timestamp=timestamp or utc_now_iso(),
        )
        self._store.append(record)
        self._logger.info("Message stored", extra={"message_id": record.id})
        return record
