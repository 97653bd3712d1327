import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..shared.database import commit_or_fail
from ..shared.errors import StoreFailure
from .models import ChatMessage

logger = logging.getLogger(__name__)


def save_message(db: Session, request_id: str, sender_id: str, sender_name: str, text: str) -> ChatMessage:
    # any sender is accepted; participant gating happens in the client
    m = ChatMessage(request_id=request_id, sender_id=sender_id, sender_name=sender_name, text=text)
    db.add(m)
    commit_or_fail(db, "send message")
    db.refresh(m)
    logger.debug("Message %s posted on request %s", m.id, request_id)
    return m


def list_messages(db: Session, request_id: str) -> list[ChatMessage]:
    try:
        return (
            db.query(ChatMessage)
            .filter(ChatMessage.request_id == request_id)
            .order_by(ChatMessage.timestamp.asc())
            .all()
        )
    except SQLAlchemyError as e:
        logger.exception("Get messages error for request %s", request_id)
        raise StoreFailure("Failed to get messages") from e
