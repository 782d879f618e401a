"""
FixNexus Backend: Custom Exception Hierarchy
==============================================

What:  Application-specific exceptions for the different error scenarios.
How:   Each exception carries a user-safe message and an optional context dict.
       Global handlers (registered in main.py) map them to HTTP responses.
Who:   Raised by services, dependencies and route handlers.

Exception Hierarchy:
    FixNexusError (base)
    ├── ValidationError      → 400 Bad Request (malformed document id)
    ├── UnauthorizedError    → 401 Unauthorized (missing/invalid token cookie)
    ├── ForbiddenError       → 403 Forbidden (valid token, wrong identity)
    ├── DatabaseError        → 500 Internal Server Error
    └── InvalidTokenError    → never returned directly; the auth gate
                               converts it into UnauthorizedError

Absent documents are not errors: lookups return null.
"""

from typing import Any, Dict, Optional


class FixNexusError(Exception):
    """
    Base exception for all FixNexus application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(FixNexusError):
    """
    Raised when client input cannot be used as-is.

    When:    A path id is not a valid 24-character ObjectId hex string.
    HTTP:    400 Bad Request
    """

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


class UnauthorizedError(FixNexusError):
    """
    Raised by the auth gate when the token cookie is absent or fails validation.

    HTTP:    401 Unauthorized
    Expired and tampered tokens are deliberately indistinguishable here.
    """

    def __init__(
        self,
        message: str = "Unauthorized access",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ForbiddenError(FixNexusError):
    """
    Raised by a handler's ownership check.

    HTTP:    403 Forbidden
    When:    The email in the path differs from the email in the token claims.
    """

    def __init__(
        self,
        message: str = "Forbidden access",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(FixNexusError):
    """
    Raised when a MongoDB operation fails.

    HTTP:    500 Internal Server Error
    The client only ever sees a generic message; driver details are logged.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class InvalidTokenError(FixNexusError):
    """Signature mismatch, malformed structure or expiry of an auth token."""

    def __init__(
        self,
        message: str = "Invalid token",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
