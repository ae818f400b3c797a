"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Authentication errors (401)
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TOKEN = "INVALID_TOKEN"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"

    # Not found errors (404)
    USER_NOT_FOUND = "USER_NOT_FOUND"

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    FIRSTNAME_INVALID = "FIRSTNAME_INVALID"
    ABOUT_TOO_LONG = "ABOUT_TOO_LONG"

    # Conflict errors (409)
    PROFILE_CONFLICT = "PROFILE_CONFLICT"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Server errors (500)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"

    # Downstream errors (502)
    USER_LOOKUP_FAILED = "USER_LOOKUP_FAILED"
    DOWNSTREAM_WRITE_FAILED = "DOWNSTREAM_WRITE_FAILED"
    NOTIFICATION_FAILED = "NOTIFICATION_FAILED"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class AuthenticationError(AppException):
    """Authentication failed."""

    def __init__(
        self,
        message: str = "Authentication required",
        error_code: ErrorCode = ErrorCode.UNAUTHORIZED,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=401,
        )


class UserNotFoundError(AppException):
    """The acting user does not exist in the user directory."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.USER_NOT_FOUND,
            message=f"User not found: {user_id}",
            status_code=404,
            details={"user_id": user_id},
        )


class UserLookupFailedError(AppException):
    """The user directory could not produce a snapshot."""

    def __init__(self, user_id: str, reason: str = "") -> None:
        super().__init__(
            error_code=ErrorCode.USER_LOOKUP_FAILED,
            message=f"Failed to load user: {user_id}",
            status_code=502,
            details={"user_id": user_id, "reason": reason} if reason else {"user_id": user_id},
        )


class InvalidFirstNameError(AppException):
    """Names are not a pair, or a name is empty or too long."""

    def __init__(self, message: str = "First name is invalid") -> None:
        super().__init__(
            error_code=ErrorCode.FIRSTNAME_INVALID,
            message=message,
            status_code=400,
        )


class AboutTooLongError(AppException):
    """Biography exceeds the allowed length."""

    def __init__(self, length: int, max_length: int) -> None:
        super().__init__(
            error_code=ErrorCode.ABOUT_TOO_LONG,
            message=f"About must be at most {max_length} characters",
            status_code=400,
            details={"length": length, "max_length": max_length},
        )


class ProfileConflictError(AppException):
    """The stored profile changed between snapshot and write."""

    def __init__(self, user_id: str, field: str) -> None:
        super().__init__(
            error_code=ErrorCode.PROFILE_CONFLICT,
            message="Profile was modified concurrently, retry the request",
            status_code=409,
            details={"user_id": user_id, "field": field},
        )


class DownstreamWriteFailedError(AppException):
    """Persisting a profile field in the user directory failed."""

    def __init__(self, user_id: str, field: str) -> None:
        super().__init__(
            error_code=ErrorCode.DOWNSTREAM_WRITE_FAILED,
            message=f"Failed to update {field}",
            status_code=502,
            details={"user_id": user_id, "field": field},
        )


class NotificationFailedError(AppException):
    """Dispatching an update to the account's other sessions failed."""

    def __init__(self, account_id: str, update_type: str) -> None:
        super().__init__(
            error_code=ErrorCode.NOTIFICATION_FAILED,
            message=f"Failed to dispatch {update_type}",
            status_code=502,
            details={"account_id": account_id, "update_type": update_type},
        )
