# app/core/dependencies.py
import logging

from fastapi import Depends, Request
from fastapi.security import APIKeyCookie
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.security import TokenPayload, decode_access_token
from app.database import get_db
from app.domains.user.service import UserService
from app.exceptions.base import AuthenticationError
from models import User

logger = logging.getLogger(__name__)

cookie_scheme = APIKeyCookie(name=settings.auth_cookie_name, auto_error=False)

__all__ = ["get_db", "validate_token", "get_current_user"]


async def validate_token(token: str | None = Depends(cookie_scheme)) -> TokenPayload:
    """Validate the credential carried in the auth cookie.

    Returns:
        TokenPayload: Decoded identity claim

    Raises:
        AuthenticationError: If the cookie is missing, expired or tampered with
    """
    payload = decode_access_token(token)
    if payload is None:
        raise AuthenticationError("Unauthorized")
    return payload


async def get_current_user(
    request: Request,
    payload: TokenPayload = Depends(validate_token),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Resolve the credential to a stored user.

    Returns:
        User: Current authenticated user

    Raises:
        AuthenticationError: If the user behind the credential no longer exists
    """
    user_service = UserService(db)
    user = await user_service.get_user_by_id(payload.user_id)

    if not user:
        logger.info("Credential for unknown user %s rejected", payload.user_id)
        raise AuthenticationError("Unauthorized")

    # Add user info to request state for logging
    request.state.user_id = user.id

    return user

