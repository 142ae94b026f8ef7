"""Common schemas shared across API endpoints."""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field


def _utc_now() -> datetime:
    """Return current UTC time (timezone-aware)."""
    return datetime.now(UTC)


class ErrorResponse(BaseModel):
    """Standard error response schema."""

    detail: str = Field(..., description="Error message")
    code: str | None = Field(None, description="Error code for programmatic handling")
    timestamp: datetime = Field(
        default_factory=_utc_now,
        description="When the error occurred",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"detail": "Account 'x' not found", "code": "ACCOUNT_NOT_FOUND"},
        },
    )


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str = Field(..., description="Health status")
    version: str = Field(..., description="API version")
    api_versions: list[str] = Field(..., description="Mounted API versions")
