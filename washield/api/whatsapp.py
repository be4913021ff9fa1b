from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from washield.api.body import body_of
from washield.api.schemas import MarkAsReadRequestSchema, SendMessageRequestSchema, failure, success
from washield.application.exceptions import ProviderUpstreamError
from washield.application.ports.messaging_provider import MessagingProviderPort
from washield.application.use_cases.send_message import SendMessageUseCase
from washield.wiring.dependencies import get_send_message_use_case, get_whatsapp_provider


router = APIRouter(prefix="/api/whatsapp")
logger = logging.getLogger(__name__)


@router.get("/phone-info")
async def phone_info(provider: MessagingProviderPort = Depends(get_whatsapp_provider)):
    try:
        info = await provider.get_phone_number_info()
    except ProviderUpstreamError as e:
        logger.error(f"Error fetching phone info: {e}")
        return JSONResponse(status_code=500, content=failure(str(e)))
    return success(info)


@router.post("/send")
async def send(
    req: SendMessageRequestSchema = Depends(body_of(SendMessageRequestSchema)),
    uc: SendMessageUseCase = Depends(get_send_message_use_case),
):
    try:
        result = await uc.execute(
            phone_number=req.phoneNumber,
            message=req.message,
            message_type=req.messageType,
        )
    except ValueError as e:
        return JSONResponse(status_code=400, content=failure(str(e)))
    except ProviderUpstreamError as e:
        logger.error(f"Error sending message: {e}", extra={"recipient": req.phoneNumber})
        return JSONResponse(status_code=500, content=failure(str(e)))
    return success(result)


@router.get("/message-status/{message_id}")
async def message_status(message_id: str, provider: MessagingProviderPort = Depends(get_whatsapp_provider)):
    try:
        status = await provider.get_message_status(message_id)
    except ProviderUpstreamError as e:
        logger.error(f"Error fetching message status: {e}", extra={"message_id": message_id})
        return JSONResponse(status_code=500, content=failure(str(e)))
    return success(status)


@router.post("/mark-as-read")
async def mark_as_read(
    req: MarkAsReadRequestSchema = Depends(body_of(MarkAsReadRequestSchema)),
    provider: MessagingProviderPort = Depends(get_whatsapp_provider),
):
    if not req.messageId:
        return JSONResponse(status_code=400, content=failure("Missing messageId"))
    try:
        result = await provider.mark_message_as_read(req.messageId)
    except ProviderUpstreamError as e:
        logger.error(f"Error marking message as read: {e}", extra={"message_id": req.messageId})
        return JSONResponse(status_code=500, content=failure(str(e)))
    return success(result)
