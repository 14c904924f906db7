"""Project-related exceptions."""

from .base import BaseAppException


class ProjectNotFoundError(BaseAppException):
    """Raised when a project is not found."""

    def __init__(self, message: str = "Project not found"):
        super().__init__(message=message, status_code=404, error_code="PROJECT_NOT_FOUND")


class ProjectPermissionError(BaseAppException):
    """Raised when the caller's role in a project does not allow the operation."""

    def __init__(self, message: str = "Access denied"):
        super().__init__(message=message, status_code=403, error_code="PROJECT_PERMISSION_DENIED")


class MemberAlreadyExistsError(BaseAppException):
    """Raised when the user to add already belongs to the project."""

    def __init__(self, message: str = "User is already a member"):
        super().__init__(message=message, status_code=400, error_code="MEMBER_ALREADY_EXISTS")

