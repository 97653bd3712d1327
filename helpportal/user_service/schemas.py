from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..shared.enums import UserRole
from ..shared.validators import not_blank


class RegisterIn(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    contact_info: str = Field(min_length=1, max_length=255, description="Email or phone, used to log in")
    location: str = Field(default="", max_length=255)
    role: UserRole

    check_not_blank = field_validator("name", "contact_info")(not_blank)


class LoginIn(BaseModel):
    contact_info: str = Field(min_length=1, max_length=255)


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    contact_info: str
    location: str
    role: UserRole
    created_at: datetime
