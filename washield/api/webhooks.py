from __future__ import annotations

import json
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import ValidationError

from washield.application.dto.webhook_event import WebhookEventDTO
from washield.application.use_cases.handle_webhook_event import HandleWebhookEventUseCase
from washield.core.config import Settings
from washield.infrastructure.whatsapp.webhook_verify import token_matches, verify_get_request
from washield.wiring.dependencies import get_handle_webhook_event_use_case, get_settings


router = APIRouter(prefix="/webhook")
logger = logging.getLogger(__name__)


@router.get("")
def verify_webhook(request: Request, settings: Settings = Depends(get_settings)):
    expected = settings.WHATSAPP_WEBHOOK_VERIFY_TOKEN
    challenge = verify_get_request(request.query_params, lambda token: token_matches(token, expected))
    if challenge is None:
        logger.error("Webhook verification failed")
        return JSONResponse(status_code=403, content={"error": "Webhook verification failed"})
    logger.info("Webhook verified successfully")
    return PlainTextResponse(challenge)


@router.post("")
async def receive_webhook(
    request: Request,
    uc: HandleWebhookEventUseCase = Depends(get_handle_webhook_event_use_case),
):
    body = await request.body()
    try:
        payload = json.loads(body.decode("utf-8")) if body else {}
    except (UnicodeDecodeError, json.JSONDecodeError):
        logger.exception("Failed to parse webhook body")
        return JSONResponse(status_code=400, content={"error": "Invalid JSON body"})

    if not isinstance(payload, dict):
        payload = {}

    try:
        event = WebhookEventDTO.model_validate(payload)
    except ValidationError:
        logger.warning("Webhook event has an unexpected shape; ignoring")
        if payload.get("object") == "whatsapp_business_account":
            return {"received": True, "status": "ignored"}
        return JSONResponse(status_code=404, content={"error": "Not a WhatsApp webhook"})

    if not event.is_whatsapp():
        return JSONResponse(status_code=404, content={"error": "Not a WhatsApp webhook"})

    outcome = uc.execute(event)
    return {"received": True, "status": outcome}
