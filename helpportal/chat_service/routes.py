from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..shared.database import db_dependency
from ..shared.errors import PortalError, to_http
from .crud import list_messages, save_message
from .schemas import MessageIn, MessageOut


def build_router(SessionLocal) -> APIRouter:
    router = APIRouter()
    get_db = db_dependency(SessionLocal)

    @router.get("/{request_id}", response_model=list[MessageOut])
    def recent(request_id: str, db: Session = Depends(get_db)):
        try:
            return list_messages(db, request_id)
        except PortalError as e:
            raise to_http(e)

    @router.post("", response_model=MessageOut, status_code=201)
    def send(payload: MessageIn, db: Session = Depends(get_db)):
        try:
            return save_message(db, payload.request_id, payload.sender_id, payload.sender_name, payload.text)
        except PortalError as e:
            raise to_http(e)

    return router
