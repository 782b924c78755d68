from sqlalchemy.orm import Session
from typing import List
import structlog

from portfolio_api.models.message import Message
from portfolio_api.schemas.message import MessageCreate
from portfolio_api.utils.email import send_contact_notification

logger = structlog.get_logger()


class MessageService:

    @staticmethod
    def is_spam(data: MessageCreate) -> bool:
        return bool(data.website and data.website.strip())

    @staticmethod
    def create_message(db: Session, data: MessageCreate) -> Message:
        message = Message(**data.model_dump(exclude={"website"}))
        db.add(message)
        db.commit()
        db.refresh(message)

        logger.info("contact_message_received", message_id=message.id)
        send_contact_notification(message)
        return message

    @staticmethod
    def list_messages(db: Session) -> List[Message]:
        return db.query(Message).order_by(Message.created_at.desc(), Message.id.desc()).all()
