"""Pydantic schemas for the transaction ledger."""

import datetime as dt
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, field_validator

from khata.core.validation import (
    validate_amount,
    validate_date,
    validate_not_blank,
    validate_transaction_type,
)
from khata.domain.schemas.common import RequestSchema, blank_to_none


class TransactionType(str, Enum):
    CREDIT = "credit"
    DEBIT = "debit"


class TransactionFields(RequestSchema):
    category: Optional[str] = None
    image_url: Optional[str] = None

    @field_validator("type", mode="before", check_fields=False)
    @classmethod
    def check_type(cls, v: Any) -> str:
        return validate_transaction_type(v)

    @field_validator("amount", mode="before", check_fields=False)
    @classmethod
    def check_amount(cls, v: Any) -> Decimal:
        return validate_amount(v)

    @field_validator("date", mode="before", check_fields=False)
    @classmethod
    def check_date(cls, v: Any) -> Optional[dt.date]:
        if v is None:
            return None
        return validate_date(v)

    @field_validator("category", "image_url")
    @classmethod
    def empty_to_none(cls, v: Optional[str]) -> Optional[str]:
        return blank_to_none(v)


class TransactionCreate(TransactionFields):
    required_fields = ("customer_id", "type", "amount", "description")

    customer_id: int
    type: TransactionType
    amount: Decimal
    description: str
    date: Optional[dt.date] = None


class TransactionUpdate(TransactionFields):
    customer_id: Optional[int] = None
    type: Optional[TransactionType] = None
    amount: Optional[Decimal] = None
    description: Optional[str] = None
    date: Optional[dt.date] = None

    @field_validator("customer_id", mode="before")
    @classmethod
    def check_customer_id(cls, v: Any) -> Any:
        if v is None:
            validate_not_blank(v, "customer_id")
        return v

    @field_validator("description")
    @classmethod
    def check_description(cls, v: Optional[str]) -> str:
        return validate_not_blank(v, "description")


class TransactionRead(BaseModel):
    id: int
    user_id: int
    customer_id: int
    customer_name: Optional[str] = None
    type: TransactionType
    amount: float
    description: str
    category: Optional[str] = None
    date: dt.date
    image_url: Optional[str] = None
    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None

    model_config = {"from_attributes": True}


class TransactionFilter(BaseModel):
    page: int = 1
    limit: int = 20
    customer_id: Optional[int] = None
    type: Optional[TransactionType] = None
    start_date: Optional[dt.date] = None
    end_date: Optional[dt.date] = None
    search: Optional[str] = None

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit
