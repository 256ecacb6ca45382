"""
Signed access tokens (JWT, HS256).

``issue_token`` injects ``iat``/``exp`` into the supplied claims and signs the
result; ``verify_token`` checks shape, then signature, then expiry, and raises
a ``TokenError`` subclass naming the first check that failed.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import jwk, jwt
from jose.exceptions import ExpiredSignatureError, JWTError
from jose.utils import base64url_decode

DEFAULT_ALGORITHM = "HS256"


class TokenError(Exception):
    """Base class for token verification failures."""


class InvalidTokenFormat(TokenError):
    pass


class BadTokenSignature(TokenError):
    pass


class TokenExpired(TokenError):
    pass


def issue_token(
    claims: Dict[str, Any],
    secret: str,
    ttl: timedelta,
    algorithm: str = DEFAULT_ALGORITHM,
    now: Optional[datetime] = None,
) -> str:
    issued_at = now or datetime.now(timezone.utc)
    payload = dict(claims)
    payload.update({
        "iat": int(issued_at.timestamp()),
        "exp": int((issued_at + ttl).timestamp()),
    })
    return jwt.encode(payload, secret, algorithm=algorithm, headers={"typ": "JWT"})


def verify_token(token: str, secret: str, algorithm: str = DEFAULT_ALGORITHM) -> Dict[str, Any]:
    if not isinstance(token, str) or token.count(".") != 2:
        raise InvalidTokenFormat("Token must have exactly three segments")

    signing_input, _, encoded_signature = token.rpartition(".")
    try:
        header = jwt.get_unverified_header(token)
        signature = base64url_decode(encoded_signature.encode("ascii"))
        message = signing_input.encode("ascii")
    except (JWTError, ValueError, UnicodeError) as exc:
        raise InvalidTokenFormat(str(exc))

    if header.get("alg") != algorithm:
        raise InvalidTokenFormat("Unexpected signing algorithm")

    # HMACKey.verify compares digests in constant time
    key = jwk.construct(secret, algorithm)
    if not key.verify(message, signature):
        raise BadTokenSignature("Signature verification failed")

    try:
        return jwt.decode(token, secret, algorithms=[algorithm])
    except ExpiredSignatureError:
        raise TokenExpired("Token has expired")
    except JWTError as exc:
        raise InvalidTokenFormat(str(exc))
