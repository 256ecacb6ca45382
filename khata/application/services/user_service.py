"""User service — self-service profile read, update and deactivation."""

from typing import Optional

import structlog

from khata.application.services.auth_service import hash_password
from khata.core.exceptions import ConflictException, DuplicateEntryError, EntityNotFoundException, ForbiddenException
from khata.domain.repositories.user_repository import UserRepository
from khata.domain.schemas.auth import CurrentUser, UserRead
from khata.domain.schemas.user import UserUpdate

logger = structlog.get_logger(__name__)


def _ensure_self(current: CurrentUser, user_id: int) -> None:
    if user_id != current.user_id:
        raise ForbiddenException("Access denied")


def get_user(repo: UserRepository, current: CurrentUser, user_id: Optional[int] = None) -> UserRead:
    """Read a profile. Without an id the caller's own profile is returned."""
    if user_id is None:
        user_id = current.user_id
    _ensure_self(current, user_id)

    user = repo.get_by_id(user_id)
    if user is None:
        raise EntityNotFoundException("User not found")
    return UserRead.model_validate(user)


def update_user(repo: UserRepository, current: CurrentUser, user_id: int, body: UserUpdate) -> UserRead:
    _ensure_self(current, user_id)
    values = body.model_dump(exclude_unset=True)

    if "email" in values and repo.email_exists(values["email"], exclude_id=user_id):
        raise ConflictException("Email already exists")
    if "phone" in values and repo.phone_exists(values["phone"], exclude_id=user_id):
        raise ConflictException("Phone number already exists")
    if "password" in values:
        values["password_hash"] = hash_password(values.pop("password"))

    if not values:
        return get_user(repo, current, user_id)

    try:
        updated = repo.update(user_id, values)
    except DuplicateEntryError:
        raise ConflictException("Email or phone number already exists")
    if not updated:
        raise EntityNotFoundException("User not found")

    logger.info("User updated", user_id=user_id, fields=sorted(values))
    return get_user(repo, current, user_id)


def delete_user(repo: UserRepository, current: CurrentUser, user_id: int) -> None:
    _ensure_self(current, user_id)
    if not repo.deactivate(user_id):
        raise EntityNotFoundException("User not found")
    logger.info("User deactivated", user_id=user_id)
