"""Error response schemas shared by every exception handler."""

from datetime import UTC, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ErrorType(str, Enum):
    """Categories surfaced to API clients."""

    VALIDATION_ERROR = "validation_error"
    NOT_FOUND = "not_found"
    UPSTREAM_UNAVAILABLE = "upstream_unavailable"
    DATABASE_ERROR = "database_error"
    TIMEOUT_ERROR = "timeout_error"
    CONFLICT = "conflict"
    CLIENT_ERROR = "client_error"
    INTERNAL_ERROR = "internal_error"


class ErrorResponse(BaseModel):
    """Standardized error response model."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error_type": "upstream_unavailable",
                "message": "Failed to fetch pokemons from PokeAPI",
                "detail": "The upstream catalog did not answer; try again shortly.",
                "status_code": 503,
                "timestamp": "2025-11-03T10:30:00Z",
                "request_id": "0f5e1c52-7a4e-4a53-9d7e-0f3a1f4e2b11",
                "path": "/api/pokemon",
                "retry_after": 30,
            }
        }
    )

    error_type: ErrorType = Field(..., description="Category of error")
    message: str = Field(..., description="Human-readable error message")
    detail: str | None = Field(None, description="Additional error details or context")
    status_code: int = Field(..., description="HTTP status code")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(UTC), description="When error occurred"
    )
    request_id: str | None = Field(None, description="Identifier echoed in X-Request-ID")
    path: str | None = Field(None, description="Request path that caused the error")
    retry_after: int | None = Field(
        None, description="Seconds to wait before retrying"
    )


class ValidationErrorDetail(BaseModel):
    """One failing request field."""

    field: str = Field(..., description="Field that failed validation")
    message: str = Field(..., description="Validation error message")
    value: Any = Field(None, description="Value that failed validation")


class ValidationErrorResponse(ErrorResponse):
    """Error response carrying per-field validation failures."""

    error_type: ErrorType = Field(default=ErrorType.VALIDATION_ERROR)
    errors: list[ValidationErrorDetail] = Field(
        default_factory=list, description="List of validation errors"
    )
