import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..shared.database import commit_or_fail
from ..shared.errors import DuplicateContact, NotFound, StoreFailure
from .models import User

logger = logging.getLogger(__name__)


def normalize_contact(contact: str) -> str:
    return (contact or "").strip().lower()


def get_user(db: Session, user_id: str) -> User | None:
    return db.query(User).filter(User.id == user_id).first()


def get_by_contact(db: Session, contact: str) -> User | None:
    return db.query(User).filter(User.contact_key == normalize_contact(contact)).first()


def register(db: Session, name: str, contact: str, location: str, role: str) -> User:
    if get_by_contact(db, contact):
        raise DuplicateContact("User with this contact info already exists. Please login.")

    u = User(
        name=name,
        contact_info=contact.strip(),
        contact_key=normalize_contact(contact),
        location=location,
        role=role,
    )
    db.add(u)
    try:
        commit_or_fail(db, "register user")
    except StoreFailure as e:
        # lost the race against a concurrent register with the same contact
        if isinstance(e.__cause__, IntegrityError):
            raise DuplicateContact("User with this contact info already exists. Please login.") from e
        raise
    db.refresh(u)
    logger.info("User registered: %s (%s)", u.id, u.role)
    return u


def login(db: Session, contact: str) -> User:
    u = get_by_contact(db, contact)
    if not u:
        raise NotFound("User not found. Please check your contact info or create an account.")
    return u
