from dataclasses import dataclass


@dataclass
class MessageRecord:
    id: str
    sender: str
    recipient: str
    encrypted_content: str
    timestamp: str
    read: bool = False
