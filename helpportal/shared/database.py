import logging
import uuid
from datetime import datetime, timezone
from typing import Callable, Iterator

from sqlalchemy import DateTime, create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool
from sqlalchemy.types import TypeDecorator

from .errors import StoreFailure

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


class UTCDateTime(TypeDecorator):
    """Timezone-aware UTC datetimes, also on backends that store them naive (SQLite)."""

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None and value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value

    def process_result_value(self, value, dialect):
        if value is not None and value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value


def make_engine(url: str) -> Engine:
    if url.startswith("sqlite"):
        kwargs: dict = {"connect_args": {"check_same_thread": False}}
        # in-memory sqlite lives in a single connection, share it
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(url, **kwargs)
    return create_engine(url, pool_pre_ping=True)


def make_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def init_db(engine: Engine) -> None:
    # register every table on Base.metadata before create_all
    from ..chat_service import models as _chat  # noqa: F401
    from ..request_service import models as _requests  # noqa: F401
    from ..user_service import models as _users  # noqa: F401

    Base.metadata.create_all(bind=engine)


def db_dependency(SessionLocal: sessionmaker[Session]) -> Callable[[], Iterator[Session]]:
    def get_db() -> Iterator[Session]:
        db = SessionLocal()
        try:
            yield db
        finally:
            db.close()

    return get_db


def commit_or_fail(db: Session, action: str) -> None:
    """
    Commit the current unit of work.
    Any driver error is rolled back and surfaced as StoreFailure.
    """
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Store error while trying to %s", action)
        raise StoreFailure(f"Failed to {action}") from e


def new_id() -> str:
    return uuid.uuid4().hex


def utcnow() -> datetime:
    return datetime.now(timezone.utc)
