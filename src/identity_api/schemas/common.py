"""Common Pydantic v2 schemas shared across the API.

Provides the error response envelope and its stable error codes.
"""

import enum
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ErrorCode(enum.StrEnum):
    """Stable machine-readable error codes."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    USER_ALREADY_EXISTS = "USER_ALREADY_EXISTS"
    AUTHENTICATION_FAILED = "AUTHENTICATION_FAILED"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


class CamelModel(BaseModel):
    """Base model serializing field names as camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FieldErrorDetail(CamelModel):
    """One rejected request field."""

    field: str = Field(description="Name of the rejected field")
    message: str = Field(description="Localized explanation")
    rejected_value: Any = Field(default=None, description="Submitted value (omitted for secrets)")


class ErrorResponse(CamelModel):
    """Standard error response body."""

    error_code: ErrorCode = Field(description="Machine-readable error code")
    message: str = Field(description="Localized human-readable error message")
    path: str = Field(default="", description="Request path that produced the error")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    field_errors: list[FieldErrorDetail] | None = Field(default=None, description="Per-field validation errors")

    def to_content(self) -> dict[str, Any]:
        """Serialize for a JSONResponse body (camelCase, without empty fields)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
