from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..shared.enums import CATEGORY_PATTERN, RequestStatus, Urgency
from ..shared.validators import not_blank


class RequestIn(BaseModel):
    resident_id: str
    resident_name: str = Field(default="", description="Defaults to the resident's registered name")
    title: str = Field(min_length=1, max_length=255)
    description: str = Field(default="")
    category: str = Field(pattern=CATEGORY_PATTERN)
    urgency: Urgency = Urgency.MEDIUM
    location: str = ""
    attachments: Optional[str] = Field(default=None, description="Optional URL")

    check_not_blank = field_validator("title")(not_blank)


class RequestUpdateIn(BaseModel):
    status: RequestStatus
    actor_id: str = Field(min_length=1, description="User performing the transition")


class RequestOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    resident_id: str
    resident_name: str
    title: str
    description: str
    category: str
    status: RequestStatus
    helper_id: Optional[str] = None
    helper_name: Optional[str] = None
    urgency: Urgency
    location: str
    attachments: Optional[str] = None
    created_at: datetime
    updated_at: datetime
