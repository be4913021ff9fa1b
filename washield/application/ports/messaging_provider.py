from abc import ABC, abstractmethod
from typing import Any


SUPPORTED_MESSAGE_TYPES = ("text", "image", "document")


class MessagingProviderPort(ABC):
    @abstractmethod
    async def send_message(self, recipient: str, content: str, message_type: str = "text") -> dict[str, Any]:
        """
        Send a message through the provider.

        Text messages carry `content` as the body; image and document
        messages carry it as a link to the media.

        Raises:
            ValueError: `message_type` is not one of SUPPORTED_MESSAGE_TYPES
            ProviderUpstreamError: the provider rejected or failed the request
        """
        raise NotImplementedError

    @abstractmethod
    async def get_message_status(self, message_id: str) -> dict[str, Any]:
        raise NotImplementedError

    @abstractmethod
    async def mark_message_as_read(self, message_id: str) -> dict[str, Any]:
        raise NotImplementedError

    @abstractmethod
    async def get_phone_number_info(self) -> dict[str, Any]:
        raise NotImplementedError

    @abstractmethod
    def validate_webhook_token(self, token: str | None) -> bool:
        raise NotImplementedError

    async def aclose(self) -> None:
        return None
