"""Response envelope helpers shared by every route."""

import math
from typing import Any, Dict, Optional, Sequence

from fastapi.encoders import jsonable_encoder

from khata.config import get_settings


def success(data: Any = None, message: str = "Success") -> Dict[str, Any]:
    body: Dict[str, Any] = {"success": True, "message": message}
    if data is not None:
        body["data"] = jsonable_encoder(data)
    return body


def pagination_meta(total: int, page: int, limit: int) -> Dict[str, Any]:
    total_pages = math.ceil(total / limit) if limit else 0
    return {
        "current_page": page,
        "per_page": limit,
        "total": total,
        "total_pages": total_pages,
        "has_next": page < total_pages,
        "has_prev": page > 1,
    }


def paginated(items: Sequence[Any], total: int, page: int, limit: int) -> Dict[str, Any]:
    return {"data": list(items), "pagination": pagination_meta(total, page, limit)}


def format_currency(amount: Optional[float], symbol: Optional[str] = None) -> str:
    """``₹1,234.50`` style; the sign goes before the symbol."""
    if symbol is None:
        symbol = get_settings().CURRENCY_SYMBOL
    value = float(amount or 0)
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.2f}"
