from __future__ import annotations

import logging
import time

from washield.application.ports.message_store import MessageStorePort
from washield.domain.entities.message import MessageRecord


class MemoryMessageStore(MessageStorePort):
    """
    Insertion-ordered message records held in process memory.

    Every lookup is a linear scan, O(n) in the number of stored records.
    Nothing survives a restart.
    """

    def __init__(self) -> None:
        self._records: list[MessageRecord] = []
        self._logger = logging.getLogger(__name__)

    def append(self, record: MessageRecord) -> MessageRecord:
        if self.get(record.id) is not None:
            self._logger.warning("Duplicate message id stored", extra={"message_id": record.id})
        self._records.append(record)
        return record

    def list(
        self,
        sender: str | None = None,
        recipient: str | None = None,
        limit: int = 50,
    ) -> list[MessageRecord]:
        if limit <= 0:
            return []
        filtered = self._records
        if sender:
            filtered = [r for r in filtered if r.sender == sender]
        if recipient:
            filtered = [r for r in filtered if r.recipient == recipient]
        return list(filtered[-limit:])

    def get(self, message_id: str) -> MessageRecord | None:
        for record in self._records:
            if record.id == message_id:
                return record
        return None

    def mark_read(self, message_id: str) -> MessageRecord | None:
        record = self.get(message_id)
        if record is None:
            return None
        record.read = True
        return record

    def remove(self, message_id: str) -> bool:
        for index, record in enumerate(self._records):
            if record.id == message_id:
                del self._records[index]
                return True
        return False

    def new_id(self, now_ms: int | None = None) -> str:
        if now_ms is None:
            now_ms = int(time.time() * 1000)
        candidate = f"msg_{now_ms}"
        suffix = 1
        while self.get(candidate) is not None:
            candidate = f"msg_{now_ms}_{suffix}"
            suffix += 1
        return candidate

    def count(self) -> int:
        return len(self._records)
