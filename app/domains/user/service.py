# app/domains/user/service.py
import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import hash_password, verify_password
from app.exceptions.base import StoreError
from app.exceptions.user import InvalidCredentialsError, UserAlreadyExistsError
from app.schemas.user import UserLoginRequest, UserRegisterRequest
from models import User

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_user_by_email(self, email: str) -> User | None:
        """Get a user by email. Emails are stored lower-cased."""
        result = await self.db.execute(select(User).where(User.email == email.lower()))
        return result.scalar_one_or_none()

    async def get_user_by_id(self, user_id: UUID) -> User | None:
        """Get a user by ID."""
        result = await self.db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def register(self, data: UserRegisterRequest) -> User:
        """Create a new account."""
        if await self.get_user_by_email(data.email):
            raise UserAlreadyExistsError()

        user = User(
            name=data.name,
            email=data.email.lower(),
            password_hash=hash_password(data.password),
        )

        try:
            self.db.add(user)
            await self.db.commit()
            await self.db.refresh(user)
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("Failed to register user: %s", str(e))
            raise StoreError()

        logger.info("User %s registered", user.id)
        return user

    async def authenticate(self, data: UserLoginRequest) -> User:
        """Check an email/password pair. The same error covers both unknown email and bad password."""
        user = await self.get_user_by_email(data.email)
        if not user or not verify_password(data.password, user.password_hash):
            raise InvalidCredentialsError()
        return user
