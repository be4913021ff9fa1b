from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from washield.api.body import body_of
from washield.api.schemas import CreateMessageRequestSchema, MessageSchema, failure, success
from washield.application.ports.message_store import MessageStorePort
from washield.application.use_cases.create_message import CreateMessageUseCase
from washield.core.config import Settings
from washield.wiring.dependencies import get_create_message_use_case, get_message_store, get_settings


router = APIRouter(prefix="/api/messages")
logger = logging.getLogger(__name__)

NOT_FOUND = "Message not found"


def _parse_limit(raw: str | None, default: int) -> int | None:
    if raw is None or raw == "":
        return default
    try:
        limit = int(raw)
    except ValueError:
        return None
    return limit if limit > 0 else None


@router.post("", status_code=201)
def create_message(
    req: CreateMessageRequestSchema = Depends(body_of(CreateMessageRequestSchema)),
    uc: CreateMessageUseCase = Depends(get_create_message_use_case),
):
    try:
        record = uc.execute(
            sender=req.sender,
            recipient=req.recipient,
            encrypted_content=req.encryptedContent,
            timestamp=req.timestamp,
            message_id=req.messageId,
        )
    except ValueError as e:
        return JSONResponse(status_code=400, content=failure(str(e)))
    return success(MessageSchema.from_record(record).model_dump())


@router.get("")
def list_messages(
    sender: str | None = Query(None),
    recipient: str | None = Query(None),
    limit: str | None = Query(None),
    store: MessageStorePort = Depends(get_message_store),
    settings: Settings = Depends(get_settings),
):
    parsed_limit = _parse_limit(limit, settings.MESSAGES_DEFAULT_LIMIT)
    if parsed_limit is None:
        return JSONResponse(status_code=400, content=failure("Invalid limit"))
    records = store.list(sender=sender, recipient=recipient, limit=parsed_limit)
    return success([MessageSchema.from_record(r).model_dump() for r in records])


@router.get("/{message_id}")
def get_message(message_id: str, store: MessageStorePort = Depends(get_message_store)):
    record = store.get(message_id)
    if record is None:
        return JSONResponse(status_code=404, content=failure(NOT_FOUND))
    return success(MessageSchema.from_record(record).model_dump())


@router.put("/{message_id}")
def mark_message_read(message_id: str, store: MessageStorePort = Depends(get_message_store)):
    record = store.mark_read(message_id)
    if record is None:
        return JSONResponse(status_code=404, content=failure(NOT_FOUND))
    logger.info("Message marked as read", extra={"message_id": message_id})
    return success(MessageSchema.from_record(record).model_dump())


@router.delete("/{message_id}")
def delete_message(message_id: str, store: MessageStorePort = Depends(get_message_store)):
    if not store.remove(message_id):
        return JSONResponse(status_code=404, content=failure(NOT_FOUND))
    logger.info("Message deleted", extra={"message_id": message_id})
    return success(message="Message deleted")
