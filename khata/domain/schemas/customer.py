"""Pydantic schemas for Customer domain."""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, field_validator

from khata.core.validation import validate_amount, validate_email, validate_not_blank, validate_phone
from khata.domain.schemas.common import RequestSchema, blank_to_none


class CustomerFields(RequestSchema):
    email: Optional[str] = None
    address: Optional[str] = None
    category: Optional[str] = None

    @field_validator("email")
    @classmethod
    def check_email(cls, v: Optional[str]) -> Optional[str]:
        v = blank_to_none(v)
        return validate_email(v) if v is not None else None

    @field_validator("address", "category")
    @classmethod
    def empty_to_none(cls, v: Optional[str]) -> Optional[str]:
        return blank_to_none(v)

    @field_validator("credit_limit", mode="before", check_fields=False)
    @classmethod
    def check_credit_limit(cls, v: Any) -> float:
        return float(validate_amount(v, field="credit_limit", label="Credit limit"))


class CustomerCreate(CustomerFields):
    required_fields = ("name", "phone")

    name: str
    phone: str
    credit_limit: float = 0

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v: str) -> str:
        return validate_phone(v)


class CustomerUpdate(CustomerFields):
    name: Optional[str] = None
    phone: Optional[str] = None
    credit_limit: Optional[float] = None

    @field_validator("name")
    @classmethod
    def check_name(cls, v: Optional[str]) -> str:
        return validate_not_blank(v, "name")

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v: Optional[str]) -> str:
        return validate_phone(validate_not_blank(v, "phone"))


class CustomerRead(BaseModel):
    id: int
    user_id: int
    name: str
    phone: str
    email: Optional[str] = None
    address: Optional[str] = None
    category: Optional[str] = None
    credit_limit: float = 0
    balance: Optional[float] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class CustomerFilter(BaseModel):
    page: int = 1
    limit: int = 20
    search: Optional[str] = None
    with_balance: bool = False

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit
