"""Auth service — registration, login, password hashing and access tokens."""

from datetime import timedelta
from typing import Any, Dict

import structlog
from passlib.context import CryptContext

from khata.config import get_settings
from khata.core.exceptions import ConflictException, DuplicateEntryError, UnauthorizedException
from khata.core.tokens import issue_token, verify_token
from khata.domain.models.user import User
from khata.domain.repositories.user_repository import UserRepository
from khata.domain.schemas.auth import AuthPayload, LoginRequest, RegisterRequest, UserSummary

settings = get_settings()
logger = structlog.get_logger(__name__)
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=settings.BCRYPT_ROUNDS)

INVALID_CREDENTIALS = "Invalid email or password"


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(user: User) -> str:
    claims = {"user_id": user.id, "email": user.email, "name": user.name}
    return issue_token(
        claims,
        settings.SECRET_KEY,
        timedelta(minutes=settings.JWT_EXPIRATION_MINUTES),
        algorithm=settings.JWT_ALGORITHM,
    )


def decode_access_token(token: str) -> Dict[str, Any]:
    """Verified claims; raises ``TokenError`` on any failure."""
    return verify_token(token, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def _auth_payload(user: User) -> AuthPayload:
    return AuthPayload(user=UserSummary.model_validate(user), token=create_access_token(user))


def register_user(repo: UserRepository, body: RegisterRequest) -> AuthPayload:
    if repo.email_exists(body.email):
        raise ConflictException("Email already exists")
    if repo.phone_exists(body.phone):
        raise ConflictException("Phone number already exists")

    try:
        user = repo.create({
            "name": body.name,
            "email": body.email,
            "phone": body.phone,
            "address": body.address,
            "password_hash": hash_password(body.password),
            "is_active": True,
        })
    except DuplicateEntryError:
        # A deactivated account still holds the unique email/phone
        raise ConflictException("Email or phone number already exists")

    logger.info("User registered", user_id=user.id)
    return _auth_payload(user)


def authenticate_user(repo: UserRepository, body: LoginRequest) -> AuthPayload:
    user = repo.get_by_email(body.email)
    if user is None:
        # Same hashing cost whether or not the account exists
        pwd_context.dummy_verify()
        logger.warning("Login failed", reason="unknown_email")
        raise UnauthorizedException(INVALID_CREDENTIALS)

    if not verify_password(body.password, user.password_hash):
        logger.warning("Login failed", reason="bad_password", user_id=user.id)
        raise UnauthorizedException(INVALID_CREDENTIALS)

    logger.info("User logged in", user_id=user.id)
    return _auth_payload(user)
