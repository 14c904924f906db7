"""User authentication controller endpoints."""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import get_current_user
from app.core.security import clear_auth_cookie, create_access_token, set_auth_cookie
from app.database import get_db
from app.domains.user.service import UserService
from app.schemas.base import ERROR_RESPONSES
from app.schemas.user import (
    AuthResponse,
    LogoutResponse,
    UserLoginRequest,
    UserRegisterRequest,
    UserResponse,
)
from models.user import User

router = APIRouter(prefix="/api/auth", tags=["Authentication"], responses=ERROR_RESPONSES)


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    register_data: UserRegisterRequest,
    response: Response,
    db: AsyncSession = Depends(get_db),
):
    """Register a new user and start a session.

    The credential is returned as an HTTP-only cookie, never in the body.
    """
    user_service = UserService(db)
    user = await user_service.register(register_data)

    set_auth_cookie(response, create_access_token(user.id, user.email))
    return AuthResponse(user=UserResponse.model_validate(user), message="User created successfully")


@router.post("/login", response_model=AuthResponse)
async def login(
    login_data: UserLoginRequest,
    response: Response,
    db: AsyncSession = Depends(get_db),
):
    """Authenticate with email and password."""
    user_service = UserService(db)
    user = await user_service.authenticate(login_data)

    set_auth_cookie(response, create_access_token(user.id, user.email))
    return AuthResponse(user=UserResponse.model_validate(user), message="Login successful")


@router.post("/logout", response_model=LogoutResponse)
async def logout(response: Response):
    """Clear the session cookie. Works whether or not a session exists."""
    clear_auth_cookie(response)
    return LogoutResponse(message="Logout successful")


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(current_user: User = Depends(get_current_user)):
    """Get current authenticated user information."""
    return UserResponse.model_validate(current_user)
