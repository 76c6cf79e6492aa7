"""
SiteCMS Backend: Custom Exception Hierarchy
============================================

What:  Defines application-specific exceptions for different error scenarios.
How:   Each exception class carries a user-facing message and an optional
       context dict. Global exception handlers (registered in main.py) catch
       these and return JSON error responses with the matching HTTP status.
Who:   Raised by repositories, services and routes; caught by global handlers.

Exception Hierarchy:
    SiteCMSError (base)
    ├── ValidationError   → 400 Bad Request (duplicate username, bad path)
    ├── AuthError         → 401 Unauthorized (credential mismatch)
    ├── NotFoundError     → 404 Not Found (uploaded file missing)
    ├── UploadError       → 400 (no file) / 500 (write failure)
    └── StorageError      → 500 Internal Server Error
        └── FileStorageError   (upload directory could not be read)

Updating or deleting a record id that does not exist is NOT an error:
it affects zero rows and reports success.
"""

from typing import Any, Dict, Optional


class SiteCMSError(Exception):
    """
    Base exception for all SiteCMS application errors.

    Attributes:
        message:      User-facing error description (safe to return in API response)
        context:      Additional debug info (logged but NOT returned to client)
        status_code:  HTTP status the global handler responds with
        error_code:   Machine-readable code placed in the response body
    """

    status_code: int = 500
    error_code: str = "server_error"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(SiteCMSError):
    """
    Raised when client input violates a business rule the client can fix.

    When:  Username already taken on create or update; a requested upload
           path that resolves outside the upload directory.
    HTTP:  400 Bad Request

    Example response:
        {
            "success": false,
            "error": "validation_error",
            "message": "Username already exists",
            "request_id": "1f2e3d4c"
        }
    """

    status_code = 400
    error_code = "validation_error"

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class AuthError(SiteCMSError):
    """
    Raised when login credentials do not match a stored user.

    The message is deliberately the same whether the username is unknown
    or the password is wrong.
    HTTP:  401 Unauthorized
    """

    status_code = 401
    error_code = "auth_error"

    def __init__(
        self,
        message: str = "Invalid credentials",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(SiteCMSError):
    """
    Raised when a requested file does not exist in the upload directory.

    HTTP:  404 Not Found
    """

    status_code = 404
    error_code = "not_found"

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class UploadError(SiteCMSError):
    """
    Raised by the upload pipeline.

    Two flavours share this class:
        - No file in the request   → 400, message "No file uploaded"
        - Write failure or timeout → 500, message describes the failure

    The status is chosen per instance via `status_code`.
    """

    error_code = "upload_error"

    def __init__(
        self,
        message: str = "File upload failed",
        status_code: int = 500,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
        self.status_code = status_code

    @classmethod
    def no_file(cls) -> "UploadError":
        return cls(message="No file uploaded", status_code=400)


class StorageError(SiteCMSError):
    """
    Raised when a database statement fails for any reason other than a
    username collision.

    HTTP:  500 Internal Server Error

    The message returned to the client is always generic ("Failed to
    create user", ...). The underlying driver error is kept in `context`
    and logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class FileStorageError(StorageError):
    """
    Raised when the upload directory cannot be read.

    HTTP:  500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "Unable to scan directory",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
