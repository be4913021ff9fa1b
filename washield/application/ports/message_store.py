from __future__ import annotations

from abc import ABC, abstractmethod

from washield.domain.entities.message import MessageRecord


class MessageStorePort(ABC):
    @abstractmethod
    def append(self, record: MessageRecord) -> MessageRecord:
        raise NotImplementedError

    @abstractmethod
    def list(
        self,
        sender: str | None = None,
        recipient: str | None = None,
        limit: int = 50,
    ) -> list[MessageRecord]:
        """
        Return the most recent `limit` records matching the equality filters.

        Records keep insertion order; the result is the tail of the filtered
        sequence, not a page.
        """
        raise NotImplementedError

    @abstractmethod
    def get(self, message_id: str) -> MessageRecord | None:
        raise NotImplementedError

    @abstractmethod
    def mark_read(self, message_id: str) -> MessageRecord | None:
        raise NotImplementedError

    @abstractmethod
    def remove(self, message_id: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    def new_id(self, now_ms: int | None = None) -> str:
        """Generate a time-based identifier not used by any stored record."""
        raise NotImplementedError

    @abstractmethod
    def count(self) -> int:
        raise NotImplementedError
