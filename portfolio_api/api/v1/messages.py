from datetime import datetime, timezone
from typing import Any, List

import structlog
from fastapi import APIRouter, Body, Depends, Request, Response, status
from sqlalchemy.orm import Session

from portfolio_api.api.deps import AdminIdentity, client_key, require_admin
from portfolio_api.core.exceptions import RateLimited
from portfolio_api.core.rate_limiter import contact_limiter
from portfolio_api.db.session import get_db
from portfolio_api.models.message import Message
from portfolio_api.schemas.common import IdList
from portfolio_api.schemas.message import MessageCreate, MessageReply, MessageResponse
from portfolio_api.services.content_service import ContentService
from portfolio_api.services.message_service import MessageService
from portfolio_api.utils.email import send_email_now
from portfolio_api.utils.response import success, serialize, validation_error
from portfolio_api.utils.validation import Invalid, parse_model

router = APIRouter()
logger = structlog.get_logger()

SENT_MESSAGE = "Message sent! We'll get back to you soon."


@router.get("", response_model=List[MessageResponse])
def list_messages(
    db: Session = Depends(get_db),
    _: AdminIdentity = Depends(require_admin),
):
    return MessageService.list_messages(db)


@router.post("", status_code=status.HTTP_201_CREATED)
def create_message(
    request: Request,
    payload: Any = Body(None),
    db: Session = Depends(get_db),
):
    """Contact form submission (public)."""
    key = client_key(request)
    state = contact_limiter.hit(key)
    if not state.allowed:
        logger.warning("rate_limit_exceeded", limiter=contact_limiter.name, client=key)
        raise RateLimited(contact_limiter.message, headers=state.headers())

    result = parse_model(MessageCreate, payload)
    if isinstance(result, Invalid):
        return validation_error(result.errors)
    data = result.value

    if MessageService.is_spam(data):
        logger.warning("contact_spam_blocked", client=key)
        # Bots get the same answer as people; nothing is stored.
        decoy = {
            "id": 0,
            "name": data.name,
            "email": data.email,
            "subject": data.subject,
            "message": "blocked",
            "createdAt": datetime.now(timezone.utc),
        }
        return success(data=decoy, message=SENT_MESSAGE, status_code=status.HTTP_201_CREATED)

    message = MessageService.create_message(db, data)
    return success(
        data=serialize(MessageResponse, message),
        message=SENT_MESSAGE,
        status_code=status.HTTP_201_CREATED,
    )


@router.post("/bulk-delete", status_code=status.HTTP_204_NO_CONTENT)
def bulk_delete_messages(
    payload: Any = Body(None),
    db: Session = Depends(get_db),
    _: AdminIdentity = Depends(require_admin),
):
    result = parse_model(IdList, payload)
    if isinstance(result, Invalid):
        return validation_error(result.errors)

    ContentService.bulk_delete(db, Message, result.value.ids)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{message_id}/reply")
def reply_to_message(
    message_id: int,
    payload: Any = Body(None),
    db: Session = Depends(get_db),
    _: AdminIdentity = Depends(require_admin),
):
    """Email a reply to the sender; 502 when the mail server cannot take it."""
    message = ContentService.get_or_404(db, Message, message_id, "Message")
    result = parse_model(MessageReply, payload)
    if isinstance(result, Invalid):
        return validation_error(result.errors)

    reply = result.value
    send_email_now(message.email, reply.subject, reply.text_body, html=reply.body)
    logger.info("contact_reply_sent", message_id=message.id)
    return success(message="Reply sent successfully")


@router.get("/{message_id}", response_model=MessageResponse)
def get_message(
    message_id: int,
    db: Session = Depends(get_db),
    _: AdminIdentity = Depends(require_admin),
):
    return ContentService.get_or_404(db, Message, message_id, "Message")


@router.delete("/{message_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_message(
    message_id: int,
    db: Session = Depends(get_db),
    _: AdminIdentity = Depends(require_admin),
):
    message = ContentService.get_or_404(db, Message, message_id, "Message")
    ContentService.delete(db, message)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
