from datetime import datetime

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ..shared.database import Base, UTCDateTime, new_id, utcnow


class HelpRequest(Base):
    __tablename__ = "help_requests"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    resident_id: Mapped[str] = mapped_column(String(32), index=True)
    resident_name: Mapped[str] = mapped_column(String(255), default="")
    title: Mapped[str] = mapped_column(String(255))
    description: Mapped[str] = mapped_column(Text, default="")
    category: Mapped[str] = mapped_column(String(50))
    status: Mapped[str] = mapped_column(String(20), index=True, default="Pending")
    # unset while Pending, fixed once a helper accepts
    helper_id: Mapped[str | None] = mapped_column(String(32), index=True, nullable=True)
    helper_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    urgency: Mapped[str] = mapped_column(String(10), default="Medium")  # Low/Medium/High
    location: Mapped[str] = mapped_column(String(255), default="")
    attachments: Mapped[str | None] = mapped_column(Text, nullable=True)  # URL
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, default=utcnow, index=True)
    updated_at: Mapped[datetime] = mapped_column(UTCDateTime, default=utcnow, onupdate=utcnow)
