from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from washield.domain.entities.inbound import InboundMessage, StatusUpdate


WHATSAPP_OBJECT = "whatsapp_business_account"
MESSAGE_FIELDS = {"messages"}
STATUS_FIELDS = {"messages", "message_status"}


def _as_list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


class WebhookEventDTO(BaseModel):
    object: str | None = None
    entry: list[Any] = Field(default_factory=list)

    def is_whatsapp(self) -> bool:
        return self.object == WHATSAPP_OBJECT

    def _changes(self) -> list[tuple[str | None, dict[str, Any]]]:
        changes: list[tuple[str | None, dict[str, Any]]] = []
        for entry in self.entry or []:
            for change in _as_list(_as_dict(entry).get("changes")):
                change = _as_dict(change)
                changes.append((change.get("field"), _as_dict(change.get("value"))))
        return changes

    def extract_messages(self) -> list[InboundMessage]:
        messages: list[InboundMessage] = []
        for field, value in self._changes():
            if field not in MESSAGE_FIELDS:
                continue
            for msg in _as_list(value.get("messages")):
                msg = _as_dict(msg)
                mid = msg.get("id")
                sender = msg.get("from")
                if not (mid and sender):
                    continue
                msg_type = str(msg.get("type") or "unknown")
                text = _as_dict(msg.get("text")).get("body") if msg_type == "text" else None
                messages.append(
                    InboundMessage(
                        id=str(mid),
                        sender=str(sender),
                        type=msg_type,
                        text=str(text) if text is not None else None,
                        timestamp=str(msg["timestamp"]) if msg.get("timestamp") is not None else None,
                    )
                )
        return messages

    def extract_statuses(self) -> list[StatusUpdate]:
        statuses: list[StatusUpdate] = []
        for field, value in self._changes():
            if field not in STATUS_FIELDS:
                continue
            for status in _as_list(value.get("statuses")):
                status = _as_dict(status)
                sid = status.get("id")
                state = status.get("status")
                if not (sid and state):
                    continue
                statuses.append(
                    StatusUpdate(
                        id=str(sid),
                        status=str(state),
                        recipient=str(status["recipient_id"]) if status.get("recipient_id") else None,
                        timestamp=str(status["timestamp"]) if status.get("timestamp") is not None else None,
                    )
                )
        return statuses
