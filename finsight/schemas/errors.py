# finsight/schemas/errors.py
"""
Error response bodies.

Every error leaving the API, whether raised by a service, by FastAPI or by
the rate limiter, has the shape {"error", "message", "details"}. Built by
the global exception handlers in finsight/main.py.
"""

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """Standard error response format."""

    error: str = Field(
        ...,
        description="Error type (e.g., 'PortfolioNotFoundError', 'OversellError')"
    )
    message: str = Field(
        ...,
        description="Human-readable error message"
    )
    details: dict | None = Field(
        default=None,
        description="Structured context such as resource_id or field"
    )


class ValidationErrorDetail(BaseModel):
    """422 body: one entry per invalid field."""

    error: str = Field(default="ValidationError")
    message: str = Field(default="Request validation failed")
    details: list[dict] = Field(
        ...,
        description="List of {field, message, type}"
    )
