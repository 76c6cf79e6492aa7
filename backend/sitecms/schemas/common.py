"""
SiteCMS Backend: Shared Response Schemas
=========================================

What:  Response envelopes shared across routes (success flag, errors,
       uploads, health).
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class SuccessResponse(BaseModel):
    """Returned by every update and delete, including those that matched no row."""
    success: bool = True


class UploadResponse(BaseModel):
    success: bool = True
    imageUrl: str = Field(description="Relative URL of the stored file, /uploads/<name>")


class UploadListResponse(BaseModel):
    success: bool = True
    files: List[str] = Field(description="Raw filenames present in the upload directory")


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.

    Example:
        {
            "success": false,
            "error": "validation_error",
            "message": "Username already exists",
            "request_id": "1f2e3d4c"
        }
    """
    success: bool = False
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
