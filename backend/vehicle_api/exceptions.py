"""
Vehicle Registry Backend — Custom Exception Hierarchy
=======================================================

What:  Defines application-specific exceptions for different error scenarios.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by the security gate and services; caught by global handlers.

Exception Hierarchy:
    VehicleApiError (base)       → 500 Internal Server Error
    ├── AuthenticationError      → 401 Unauthorized (missing/unusable bearer token)
    ├── AuthorizationError       → 403 Forbidden (role claim missing)
    └── DatabaseError            → 500 Internal Server Error (generic message)

Request body validation is left to FastAPI's own handler (422).
"""

from typing import Any, Dict, List, Optional


class VehicleApiError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, returned only where a handler opts in)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class AuthenticationError(VehicleApiError):
    """
    Raised when a request lacks a usable bearer token.

    When:    No Authorization header, a non-Bearer scheme, or (with
             verification on) a token that fails signature/lifetime checks.
    HTTP:    401 Unauthorized, with `WWW-Authenticate: Bearer`.
    """

    def __init__(
        self,
        message: str = "A bearer token is required",
        reason: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if reason:
            ctx["reason"] = reason
        super().__init__(message=message, context=ctx)
        self.reason = reason


class AuthorizationError(VehicleApiError):
    """
    Raised when a token is present but does not carry the required role.

    HTTP:    403 Forbidden

    Example response:
        {
            "error": "forbidden",
            "message": "The 'admin' role is required for this operation",
            "details": {"required_role": "admin", "roles": ["viewer"]}
        }
    """

    def __init__(
        self,
        required_role: str,
        roles: Optional[List[str]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The '{required_role}' role is required for this operation"
        ctx = context or {}
        ctx["required_role"] = required_role
        ctx["roles"] = list(roles or [])
        super().__init__(message=message, context=ctx)
        self.required_role = required_role
        self.roles = list(roles or [])


class DatabaseError(VehicleApiError):
    """
    Raised when a record store operation fails unexpectedly.

    HTTP:    500 Internal Server Error

    The message returned to the client is always generic; the context
    (exception type, operation) is logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
