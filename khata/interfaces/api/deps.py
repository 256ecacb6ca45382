"""Bearer token auth gate."""

import re
from typing import Optional

import structlog
from fastapi import Depends, Header

from khata.application.services.auth_service import decode_access_token
from khata.core.exceptions import UnauthorizedException
from khata.core.tokens import TokenError
from khata.domain.repositories.user_repository import UserRepository
from khata.domain.schemas.auth import CurrentUser
from khata.interfaces.deps import get_user_repository

logger = structlog.get_logger(__name__)

BEARER_PATTERN = re.compile(r"^Bearer\s+(\S+)\s*$", re.IGNORECASE)
INVALID_TOKEN = "Invalid or expired token"


def get_current_user(
    authorization: Optional[str] = Header(None),
    repo: UserRepository = Depends(get_user_repository),
) -> CurrentUser:
    """Resolve the caller from the ``Authorization: Bearer <token>`` header."""
    if not authorization:
        raise UnauthorizedException("Authorization header missing")

    match = BEARER_PATTERN.match(authorization.strip())
    if not match:
        raise UnauthorizedException("Invalid authorization header format")

    try:
        claims = decode_access_token(match.group(1))
    except TokenError as exc:
        logger.info("Token rejected", reason=type(exc).__name__)
        raise UnauthorizedException(INVALID_TOKEN)

    user_id = claims.get("user_id")
    if not isinstance(user_id, int) or not claims.get("email"):
        raise UnauthorizedException(INVALID_TOKEN)

    # Tokens outlive soft-deleted accounts; refuse them here
    if repo.get_by_id(user_id) is None:
        raise UnauthorizedException(INVALID_TOKEN)

    return CurrentUser(user_id=user_id, email=claims["email"], name=claims.get("name"))
