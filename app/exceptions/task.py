"""Task-related exceptions."""

from .base import BaseAppException


class TaskNotFoundError(BaseAppException):
    """Raised when a task is not found."""

    def __init__(self, message: str = "Task not found"):
        super().__init__(message=message, status_code=404, error_code="TASK_NOT_FOUND")


class TaskPermissionError(BaseAppException):
    """Raised when user doesn't have permission to access a task."""

    def __init__(self, message: str = "Access denied"):
        super().__init__(message=message, status_code=403, error_code="TASK_PERMISSION_DENIED")
