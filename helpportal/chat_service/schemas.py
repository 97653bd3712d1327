from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..shared.validators import not_blank


class MessageIn(BaseModel):
    request_id: str = Field(min_length=1)
    sender_id: str = Field(min_length=1)
    sender_name: str = Field(default="")
    text: str = Field(..., min_length=1, max_length=4000)

    check_not_blank = field_validator("text")(not_blank)


class MessageOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    request_id: str
    sender_id: str
    sender_name: str
    text: str
    timestamp: datetime
