from __future__ import annotations

import hmac
import logging
from typing import Callable, Mapping


logger = logging.getLogger(__name__)


def token_matches(provided: str | None, expected: str | None) -> bool:
    if not provided or not expected:
        return False
    return hmac.compare_digest(provided.encode("utf-8"), expected.encode("utf-8"))


def verify_get_request(params: Mapping[str, str], validate_token: Callable[[str | None], bool]) -> str | None:
    """Return the challenge to echo back, or None when the handshake must be refused."""
    mode = params.get("hub.mode")
    token = params.get("hub.verify_token")
    challenge = params.get("hub.challenge")
    logger.info("Webhook verification request", extra={"status": mode})
    if mode == "subscribe" and validate_token(token):
        return challenge or ""
    return None
