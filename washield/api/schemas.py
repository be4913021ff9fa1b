from typing import Any

from pydantic import BaseModel, ConfigDict

from washield.domain.entities.message import MessageRecord


class SendMessageRequestSchema(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    phoneNumber: str | None = None
    message: str | None = None
    messageType: str | None = None


class MarkAsReadRequestSchema(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    messageId: str | None = None


class CreateMessageRequestSchema(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    sender: str | None = None
    recipient: str | None = None
    encryptedContent: str | None = None
    timestamp: str | None = None
    messageId: str | None = None


class MessageSchema(BaseModel):
    id: str
    sender: str
    recipient: str
    encryptedContent: str
    timestamp: str
    read: bool

    @classmethod
    def from_record(cls, record: MessageRecord) -> "MessageSchema":
        return cls(
            id=record.id,
            sender=record.sender,
            recipient=record.recipient,
            encryptedContent=record.encrypted_content,
            timestamp=record.timestamp,
            read=record.read,
        )


def success(data: Any = None, **extra: Any) -> dict[str, Any]:
    body: dict[str, Any] = {"success": True}
    if data is not None:
        body["data"] = data
    body.update(extra)
    return body


def failure(error: str) -> dict[str, Any]:
    return {"success": False, "error": error}
