"""Security related functions.

Password hashing (bcrypt) and the signed session credential (JWT) that is
carried in the ``auth_token`` cookie.
"""

import logging
from datetime import datetime, timedelta, timezone
from uuid import UUID

import bcrypt
import jwt
from fastapi import Response
from jwt import InvalidTokenError
from pydantic import BaseModel, ValidationError

from app.core.config import settings

logger = logging.getLogger(__name__)


class TokenPayload(BaseModel):
    """Identity claim carried by the credential."""

    user_id: UUID
    email: str


def hash_password(password: str) -> str:
    """Hash a password using bcrypt."""
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against its bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False


def create_access_token(user_id: UUID, email: str, expires_delta: timedelta | None = None) -> str:
    """
    Issue a signed credential for ``user_id``.

    :param user_id: Identifier placed in the ``sub`` claim.
    :param email: Email placed in the ``email`` claim.
    :param expires_delta: Lifetime override; defaults to the configured number of days.
    :return: Encoded JWT string.
    """
    now = datetime.now(timezone.utc)
    lifetime = expires_delta or timedelta(days=settings.access_token_expire_days)
    payload = {
        "sub": str(user_id),
        "email": email,
        "iat": now,
        "exp": now + lifetime,
    }
    return jwt.encode(payload, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str | None) -> TokenPayload | None:
    """
    Validate a credential and return its identity claim.

    Any failure (missing token, bad signature, expiry, malformed claims)
    yields ``None`` so callers treat the request as anonymous.
    """
    if not token:
        return None
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.algorithm],
            options={"require": ["sub", "exp"]},
        )
        return TokenPayload(user_id=payload["sub"], email=payload.get("email", ""))
    except (InvalidTokenError, ValidationError, KeyError) as e:
        logger.debug("Rejected credential: %s", str(e))
        return None


def set_auth_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.auth_cookie_name,
        value=token,
        max_age=settings.access_token_max_age,
        path="/",
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )


def clear_auth_cookie(response: Response) -> None:
    response.delete_cookie(
        key=settings.auth_cookie_name,
        path="/",
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )
