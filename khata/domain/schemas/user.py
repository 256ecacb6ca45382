"""Pydantic schemas for profile updates."""

from typing import Optional

from pydantic import field_validator

from khata.core.validation import validate_email, validate_not_blank, validate_password, validate_phone
from khata.domain.schemas.common import RequestSchema, blank_to_none


class UserUpdate(RequestSchema):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    password: Optional[str] = None
    address: Optional[str] = None
    profile_image: Optional[str] = None

    # Validators only run for keys the client actually sent
    @field_validator("name")
    @classmethod
    def check_name(cls, v: Optional[str]) -> str:
        return validate_not_blank(v, "name")

    @field_validator("email")
    @classmethod
    def check_email(cls, v: Optional[str]) -> str:
        return validate_email(validate_not_blank(v, "email"))

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v: Optional[str]) -> str:
        return validate_phone(validate_not_blank(v, "phone"))

    @field_validator("password")
    @classmethod
    def check_password(cls, v: Optional[str]) -> str:
        return validate_password(v)

    @field_validator("address", "profile_image")
    @classmethod
    def empty_to_none(cls, v: Optional[str]) -> Optional[str]:
        return blank_to_none(v)
