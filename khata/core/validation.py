"""
Input validation and sanitization.

Pure functions: each either returns the normalized value or raises ``FieldError``
carrying the offending field and a client-facing message. ``FieldError`` is a
``ValueError`` so pydantic validators can raise it and have it collected with
every other field failure.
"""

import html
import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, List, Mapping

from email_validator import EmailNotValidError, validate_email as _check_email

from khata.core.exceptions import ValidationException

PHONE_PATTERN = re.compile(r"^\+?[1-9]\d{1,14}$")
TAG_PATTERN = re.compile(r"<[^>]*>")
MIN_PASSWORD_LENGTH = 6
TRANSACTION_TYPES = ("credit", "debit")
# Amounts are stored as NUMERIC(12, 2)
CENT = Decimal("0.01")
MAX_AMOUNT = Decimal("9999999999.99")


class FieldError(ValueError):
    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(message)


def missing_fields(data: Mapping[str, Any], fields: Iterable[str]) -> List[str]:
    """Names from ``fields`` that are absent, null, or blank after trimming."""
    missing = []
    for name in fields:
        value = data.get(name)
        if value is None or (isinstance(value, str) and not value.strip()):
            missing.append(name)
    return missing


def require_fields(data: Mapping[str, Any], fields: Iterable[str]) -> None:
    """Raise one ValidationException listing every missing field."""
    missing = missing_fields(data, fields)
    if missing:
        raise ValidationException(
            details=[{"field": name, "message": f"Field '{name}' is required"} for name in missing]
        )


def validate_email(value: str, field: str = "email") -> str:
    try:
        _check_email(value, check_deliverability=False)
    except (EmailNotValidError, TypeError):
        raise FieldError(field, "Invalid email format")
    return value


def validate_phone(value: str, field: str = "phone") -> str:
    if not isinstance(value, str) or not PHONE_PATTERN.match(value):
        raise FieldError(field, "Invalid phone number format")
    return value


def validate_password(value: str, field: str = "password") -> str:
    if not isinstance(value, str) or len(value) < MIN_PASSWORD_LENGTH:
        raise FieldError(field, f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")
    return value


def validate_amount(value: Any, field: str = "amount", label: str = "Amount") -> Decimal:
    if isinstance(value, bool) or value is None:
        raise FieldError(field, f"{label} must be a positive number")
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        raise FieldError(field, f"{label} must be a positive number")
    if not amount.is_finite() or amount < 0 or amount > MAX_AMOUNT or amount != amount.quantize(CENT):
        raise FieldError(field, f"{label} must be a positive number")
    return amount


def validate_date(value: Any, field: str = "date") -> date:
    """Strict YYYY-MM-DD."""
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            parsed = datetime.strptime(value, "%Y-%m-%d").date()
        except ValueError:
            pass
        else:
            if parsed.isoformat() == value:
                return parsed
    raise FieldError(field, "Invalid date format. Use YYYY-MM-DD")


def validate_transaction_type(value: Any, field: str = "type") -> str:
    if value not in TRANSACTION_TYPES:
        raise FieldError(field, "Invalid transaction type. Must be credit or debit")
    return value


def validate_not_blank(value: Any, field: str) -> str:
    if value is None or not str(value).strip():
        raise FieldError(field, f"Field '{field}' cannot be empty")
    return value


def sanitize(data: Any) -> Any:
    """Strip tags, trim and HTML-escape every string leaf of a nested structure."""
    if isinstance(data, dict):
        return {key: sanitize(value) for key, value in data.items()}
    if isinstance(data, (list, tuple)):
        return [sanitize(item) for item in data]
    if isinstance(data, str):
        return html.escape(TAG_PATTERN.sub("", data).strip(), quote=True)
    return data
