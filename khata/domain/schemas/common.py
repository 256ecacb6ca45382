"""Shared request/response building blocks."""

from typing import Any, ClassVar, Tuple

from pydantic import BaseModel, model_validator

from khata.core.validation import require_fields, sanitize


class RequestSchema(BaseModel):
    """Base for every inbound payload.

    The raw body is sanitized first, then the names in ``required_fields`` are
    checked together so the client sees every missing field at once.
    Unknown keys (``id``, ``user_id``, timestamps...) are dropped.
    """

    required_fields: ClassVar[Tuple[str, ...]] = ()

    model_config = {"extra": "ignore"}

    @model_validator(mode="before")
    @classmethod
    def sanitize_and_require(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = sanitize(data)
        require_fields(data, cls.required_fields)
        return data


def blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value
