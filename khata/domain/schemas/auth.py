"""Pydantic schemas for User and Auth."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from khata.core.validation import validate_email, validate_password, validate_phone
from khata.domain.schemas.common import RequestSchema, blank_to_none


class RegisterRequest(RequestSchema):
    required_fields = ("name", "email", "phone", "password")

    name: str
    email: str
    phone: str
    password: str
    address: Optional[str] = None

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str) -> str:
        return validate_email(v)

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v: str) -> str:
        return validate_phone(v)

    @field_validator("password")
    @classmethod
    def check_password(cls, v: str) -> str:
        return validate_password(v)

    @field_validator("address")
    @classmethod
    def empty_address(cls, v: Optional[str]) -> Optional[str]:
        return blank_to_none(v)


class LoginRequest(RequestSchema):
    required_fields = ("email", "password")

    email: str
    password: str


class UserSummary(BaseModel):
    id: int
    name: str
    email: str
    phone: str

    model_config = {"from_attributes": True}


class UserRead(UserSummary):
    address: Optional[str] = None
    profile_image: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AuthPayload(BaseModel):
    user: UserSummary
    token: str


class CurrentUser(BaseModel):
    """Claims of the verified bearer token, scoped to one request."""
    user_id: int
    email: str
    name: Optional[str] = None

    model_config = {"frozen": True}
