from __future__ import annotations

import logging
from typing import Any

import httpx

from washield.application.exceptions import ProviderUpstreamError
from washield.application.ports.messaging_provider import SUPPORTED_MESSAGE_TYPES, MessagingProviderPort
from washield.infrastructure.whatsapp.webhook_verify import token_matches


def build_send_payload(recipient: str, content: str, message_type: str = "text") -> dict[str, Any]:
    if message_type not in SUPPORTED_MESSAGE_TYPES:
        raise ValueError(f"Unsupported messageType: {message_type}")
    payload: dict[str, Any] = {
        "messaging_product": "whatsapp",
        "to": recipient,
        "type": message_type,
    }
    if message_type == "text":
        payload["text"] = {"body": content}
    else:
        payload[message_type] = {"link": content}
    return payload


class WhatsAppClient(MessagingProviderPort):
    def __init__(
        self,
        base_url: str,
        phone_number_id: str,
        access_token: str,
        verify_token: str = "",
        timeout: float | None = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._phone_number_id = phone_number_id
        self._access_token = access_token
        self._verify_token = verify_token
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)
        self._logger = logging.getLogger(__name__)

    @property
    def _messages_url(self) -> str:
        return f"{self._base_url}/{self._phone_number_id}/messages"

    def _headers(self, json_body: bool = False) -> dict[str, str]:
        headers = {"Authorization": f"Bearer {self._access_token}"}
        if json_body:
            headers["Content-Type"] = "application/json"
        return headers

    async def send_message(self, recipient: str, content: str, message_type: str = "text") -> dict[str, Any]:
        payload = build_send_payload(recipient, content, message_type)
        data = await self._request(
            "POST", self._messages_url, "send message", json=payload, headers=self._headers(json_body=True)
        )
        sent = data.get("messages") or [{}]
        self._logger.info(
            "Message sent",
            extra={"recipient": recipient, "message_id": sent[0].get("id"), "message_type": message_type},
        )
        return data

    async def get_message_status(self, message_id: str) -> dict[str, Any]:
        return await self._request(
            "GET",
            f"{self._base_url}/{message_id}",
            "get message status",
            params={"fields": "status,timestamp"},
            headers=self._headers(),
        )

    async def mark_message_as_read(self, message_id: str) -> dict[str, Any]:
        payload = {
            "messaging_product": "whatsapp",
            "status": "read",
            "message_id": message_id,
        }
        return await self._request(
            "POST", self._messages_url, "mark message as read", json=payload, headers=self._headers(json_body=True)
        )

    async def get_phone_number_info(self) -> dict[str, Any]:
        return await self._request(
            "GET", f"{self._base_url}/{self._phone_number_id}", "get phone number info", headers=self._headers()
        )

    def validate_webhook_token(self, token: str | None) -> bool:
        return token_matches(token, self._verify_token)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, url: str, action: str, **kwargs: Any) -> dict[str, Any]:
        try:
            resp = await self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            self._logger.error(f"Failed to {action}", extra={"error": str(e) or type(e).__name__})
            raise ProviderUpstreamError(str(e) or type(e).__name__) from e

        if resp.status_code >= 400:
            error_body = resp.text
            try:
                error = resp.json().get("error", {}) or {}
                error_code = error.get("code")
                error_message = error.get("message") or error_body
            except Exception:
                error_code = None
                error_message = error_body

            self._logger.error(
                f"Failed to {action}",
                extra={
                    "provider_status": resp.status_code,
                    "error": error_message,
                    "error_code": error_code,
                },
            )
            raise ProviderUpstreamError(
                error_message or f"Provider returned HTTP {resp.status_code}",
                status_code=resp.status_code,
                error_code=error_code,
            )

        try:
            return resp.json()
        except ValueError as e:
            self._logger.error(f"Failed to {action}", extra={"error": "invalid JSON from provider"})
            raise ProviderUpstreamError("Provider returned a non-JSON response", status_code=resp.status_code) from e
