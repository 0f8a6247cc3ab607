"""
Pydantic models for FastAPI responses.

This module contains the response models of the supplier data generator
API: health and version information and the standard error payloads.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class HealthCheckResponse(BaseModel):
    """Response model for health checks."""

    status: str = Field(..., description="Overall health status")
    timestamp: datetime = Field(..., description="Health check timestamp")
    version: str = Field(..., description="Application version")
    checks: dict[str, dict[str, Any]] = Field(
        ..., description="Individual component health checks"
    )


class VersionResponse(BaseModel):
    """Response model for version information."""

    name: str = Field(..., description="Application name")
    version: str = Field(..., description="Application version")
    timestamp: datetime = Field(..., description="Response timestamp")


class ErrorResponse(BaseModel):
    """Standard error response model."""

    error: str = Field(..., description="Error type or code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] | None = Field(None, description="Additional error details")
    timestamp: datetime = Field(..., description="Error timestamp")


class ValidationErrorResponse(BaseModel):
    """Response model for validation errors."""

    error: str = Field(..., description="Error type")
    message: str = Field(..., description="General error message")
    field_errors: list[dict[str, Any]] = Field(
        ..., description="Detailed field validation errors"
    )
    timestamp: datetime = Field(..., description="Error timestamp")
