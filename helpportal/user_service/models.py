from datetime import datetime

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from ..shared.database import Base, UTCDateTime, new_id, utcnow


class User(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(255))
    contact_info: Mapped[str] = mapped_column(String(255))
    # lower-cased, trimmed contact_info; the login key
    contact_key: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    location: Mapped[str] = mapped_column(String(255), default="")
    role: Mapped[str] = mapped_column(String(20))  # "Resident" | "Helper"
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, default=utcnow)
