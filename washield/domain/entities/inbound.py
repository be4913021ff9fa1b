from dataclasses import dataclass


@dataclass(frozen=True)
class InboundMessage:
    id: str
    sender: str
    type: str
    text: str | None
    timestamp: str | None


@dataclass(frozen=True)
class StatusUpdate:
    id: str
    status: str
    recipient: str | None
    timestamp: str | None
