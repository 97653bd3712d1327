import logging

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..shared.database import commit_or_fail
from ..shared.enums import RequestStatus, UserRole
from ..shared.errors import InvalidTransition, NotFound, StoreFailure, Unauthorized
from ..user_service.models import User
from .models import HelpRequest
from .workflow import check_transition

logger = logging.getLogger(__name__)


def _get_user(db: Session, user_id: str) -> User | None:
    return db.query(User).filter(User.id == user_id).first()


def get_request(db: Session, request_id: str) -> HelpRequest | None:
    return db.query(HelpRequest).filter(HelpRequest.id == request_id).first()


def get_request_or_404(db: Session, request_id: str) -> HelpRequest:
    r = get_request(db, request_id)
    if not r:
        raise NotFound("Request not found")
    return r


def list_requests(
    db: Session,
    status: str | None = None,
    requester_id: str | None = None,
    volunteer_id: str | None = None,
):
    q = db.query(HelpRequest)
    if status:
        q = q.filter(HelpRequest.status == status)
    if requester_id:
        q = q.filter(HelpRequest.resident_id == requester_id)
    if volunteer_id:
        q = q.filter(HelpRequest.helper_id == volunteer_id)
    return q.order_by(HelpRequest.created_at.desc()).all()


def create_request(db: Session, payload: dict) -> HelpRequest:
    resident = _get_user(db, payload["resident_id"])
    if not resident:
        raise NotFound("Resident not found")
    if resident.role != UserRole.RESIDENT.value:
        raise Unauthorized("Only residents can create help requests")

    data = dict(payload)
    data["resident_name"] = data.get("resident_name") or resident.name
    r = HelpRequest(**data, status=RequestStatus.PENDING.value, helper_id=None, helper_name=None)
    db.add(r)
    commit_or_fail(db, "create help request")
    db.refresh(r)
    logger.info("Help request %s created by %s", r.id, r.resident_id)
    return r


def update_status(db: Session, request_id: str, target: RequestStatus, actor_id: str) -> HelpRequest:
    """
    Move a request one step along its workflow on behalf of actor_id.

    The write is conditional on the row still being in the expected
    pre-state, so of two helpers racing to accept only one wins.
    """
    r = get_request_or_404(db, request_id)
    actor = _get_user(db, actor_id)

    expected = check_transition(
        current=RequestStatus(r.status),
        target=target,
        actor_id=actor_id,
        actor_role=actor.role if actor else None,
        helper_id=r.helper_id,
    )

    values: dict = {"status": target.value}
    conditions = [HelpRequest.id == request_id, HelpRequest.status == expected.value]
    if target == RequestStatus.ACCEPTED:
        values["helper_id"] = actor.id
        values["helper_name"] = actor.name
        conditions.append(HelpRequest.helper_id.is_(None))
    else:
        conditions.append(HelpRequest.helper_id == actor_id)

    try:
        result = db.execute(update(HelpRequest).where(*conditions).values(**values))
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Store error while updating request %s", request_id)
        raise StoreFailure("Failed to update help request") from e

    if result.rowcount == 0:
        db.rollback()
        logger.warning("Lost update on request %s: %s -> %s by %s", request_id, expected.value, target.value, actor_id)
        raise InvalidTransition(f"Request is no longer {expected.value}")

    commit_or_fail(db, "update help request")
    db.refresh(r)
    logger.info("Request %s: %s -> %s by %s", request_id, expected.value, target.value, actor_id)
    return r


def delete_request(db: Session, request_id: str) -> bool:
    r = get_request(db, request_id)
    if not r:
        return False
    db.delete(r)
    commit_or_fail(db, "delete help request")
    logger.info("Help request %s deleted", request_id)
    return True
