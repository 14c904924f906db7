"""User-related exceptions."""

from .base import BaseAppException


class UserNotFoundError(BaseAppException):
    """Raised when a user is not found."""

    def __init__(self, message: str = "User not found"):
        super().__init__(message=message, status_code=404, error_code="USER_NOT_FOUND")


class UserAlreadyExistsError(BaseAppException):
    """Raised when registering an email that is already taken."""

    def __init__(self, message: str = "Email already registered"):
        super().__init__(message=message, status_code=400, error_code="USER_ALREADY_EXISTS")


class InvalidCredentialsError(BaseAppException):
    """Raised when an email/password pair does not match."""

    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message=message, status_code=401, error_code="INVALID_CREDENTIALS")
