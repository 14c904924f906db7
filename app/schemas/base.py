"""Base schemas for the application."""

from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class BaseSchema(BaseModel):
    """Base schema class with common configuration."""
    model_config = ConfigDict(from_attributes=True)


class BaseModelSchema(BaseSchema):
    """Base schema for database models."""
    id: UUID
    created_at: datetime
    updated_at: datetime


class ResponseSchema(BaseSchema):
    """Standard API response schema."""
    status: str
    message: Optional[str] = None
    data: Optional[dict[str, Any]] = None


class ErrorResponse(BaseSchema):
    """Body returned for every failed request."""
    status: str = "error"
    error: str
    error_code: str
    details: Optional[Any] = None
    timestamp: datetime
    request_id: Optional[str] = None


# OpenAPI documentation for the error envelope, shared by every router
ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    code: {"model": ErrorResponse} for code in (400, 401, 403, 404, 500)
}
