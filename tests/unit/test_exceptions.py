"""
Unit tests for Exception classes.

Each application exception is an ``HTTPException`` whose ``detail`` carries
the message, error code and details rendered by the global handler.
"""

import pytest
from fastapi import HTTPException, status

from app.exceptions.base import (
    AppPermissionError,
    AuthenticationError,
    BaseAppException,
    NotFoundError,
    StoreError,
    ValidationError,
)
from app.exceptions.project import (
    MemberAlreadyExistsError,
    ProjectNotFoundError,
    ProjectPermissionError,
)
from app.exceptions.task import TaskNotFoundError, TaskPermissionError
from app.exceptions.user import (
    InvalidCredentialsError,
    UserAlreadyExistsError,
    UserNotFoundError,
)


class TestBaseAppException:
    """Test cases for BaseAppException."""

    def test_base_exception_default_values(self):
        exc = BaseAppException("Test error")

        assert isinstance(exc, HTTPException)
        assert exc.message == "Test error"
        assert exc.status_code == 500
        assert exc.error_code == "INTERNAL_ERROR"
        assert exc.details == {}
        assert exc.detail == {"message": "Test error", "error_code": "INTERNAL_ERROR", "details": None}

    def test_base_exception_custom_values(self):
        details = {"field": "name"}
        exc = BaseAppException(
            message="Custom error", status_code=400, error_code="CUSTOM_ERROR", details=details
        )

        assert exc.status_code == 400
        assert exc.detail["error_code"] == "CUSTOM_ERROR"
        assert exc.detail["details"] == details


@pytest.mark.parametrize(
    "exc_cls, status_code, error_code, message",
    [
        (ValidationError, status.HTTP_400_BAD_REQUEST, "VALIDATION_ERROR", "Validation failed"),
        (AuthenticationError, status.HTTP_401_UNAUTHORIZED, "UNAUTHORIZED", "Unauthorized"),
        (AppPermissionError, status.HTTP_403_FORBIDDEN, "PERMISSION_DENIED", "Access denied"),
        (NotFoundError, status.HTTP_404_NOT_FOUND, "NOT_FOUND", "Resource not found"),
        (StoreError, status.HTTP_500_INTERNAL_SERVER_ERROR, "STORE_ERROR", "An error occurred"),
        (ProjectNotFoundError, 404, "PROJECT_NOT_FOUND", "Project not found"),
        (ProjectPermissionError, 403, "PROJECT_PERMISSION_DENIED", "Access denied"),
        (MemberAlreadyExistsError, 400, "MEMBER_ALREADY_EXISTS", "User is already a member"),
        (TaskNotFoundError, 404, "TASK_NOT_FOUND", "Task not found"),
        (TaskPermissionError, 403, "TASK_PERMISSION_DENIED", "Access denied"),
        (UserNotFoundError, 404, "USER_NOT_FOUND", "User not found"),
        (UserAlreadyExistsError, 400, "USER_ALREADY_EXISTS", "Email already registered"),
        (InvalidCredentialsError, 401, "INVALID_CREDENTIALS", "Invalid email or password"),
    ],
)
def test_exception_defaults(exc_cls, status_code, error_code, message):
    exc = exc_cls()

    assert isinstance(exc, BaseAppException)
    assert exc.status_code == status_code
    assert exc.error_code == error_code
    assert exc.message == message


def test_custom_message_is_kept():
    exc = NotFoundError("Assigned user not found")

    assert exc.detail["message"] == "Assigned user not found"
    assert exc.status_code == 404
