from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..shared.database import db_dependency
from ..shared.enums import RequestStatus
from ..shared.errors import PortalError, to_http
from .crud import create_request, delete_request, get_request_or_404, list_requests, update_status
from .schemas import RequestIn, RequestOut, RequestUpdateIn


def build_router(SessionLocal) -> APIRouter:
    router = APIRouter()
    get_db = db_dependency(SessionLocal)

    @router.post("", response_model=RequestOut, status_code=201)
    def create(payload: RequestIn, db: Session = Depends(get_db)):
        try:
            return create_request(db, payload.model_dump(mode="json"))
        except PortalError as e:
            raise to_http(e)

    # no role-based filtering here; the caller picks the subset it wants
    @router.get("", response_model=list[RequestOut])
    def get_all(
        status: RequestStatus | None = Query(default=None),
        requester_id: str | None = Query(default=None),
        volunteer_id: str | None = Query(default=None),
        db: Session = Depends(get_db),
    ):
        return list_requests(db, status.value if status else None, requester_id, volunteer_id)

    @router.get("/{request_id}", response_model=RequestOut)
    def get_one(request_id: str, db: Session = Depends(get_db)):
        try:
            return get_request_or_404(db, request_id)
        except PortalError as e:
            raise to_http(e)

    @router.put("/{request_id}", response_model=RequestOut)
    def transition(request_id: str, payload: RequestUpdateIn, db: Session = Depends(get_db)):
        try:
            return update_status(db, request_id, payload.status, payload.actor_id)
        except PortalError as e:
            raise to_http(e)

    @router.delete("/{request_id}", response_model=dict)
    def remove(request_id: str, db: Session = Depends(get_db)):
        try:
            deleted = delete_request(db, request_id)
        except PortalError as e:
            raise to_http(e)
        return {"message": "Request deleted successfully", "deleted": deleted}

    return router
