"""
Jotter Backend — Custom Exception Hierarchy
============================================

What:  Application-specific exceptions for the three failure classes of the
       notes API.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by services and the persistence adapter; caught by global handlers.

Exception Hierarchy:
    JotterError (base)
    ├── ValidationError  → 400 Bad Request (missing input, store untouched)
    ├── NotFoundError    → 404 Not Found (store consulted, id unknown)
    └── StoreError       → 500 Internal Server Error (generic message only)
"""

from typing import Any, Dict, Optional


class JotterError(Exception):
    """
    Base exception for all Jotter application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned for server errors)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(JotterError):
    """
    Raised when required client input is missing or empty.

    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "Title and content are required",
            "details": {"missing": ["content"]}
        }
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


class NotFoundError(JotterError):
    """
    Raised when a referenced note does not exist.

    HTTP:    404 Not Found

    The store returns None for missing records; the service layer turns that
    into this exception so the route never inspects the result itself.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource.capitalize()} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource_id = resource_id


class StoreError(JotterError):
    """
    Raised when the store is unreachable or an operation fails unexpectedly.

    HTTP:    500 Internal Server Error

    The message returned to the client is always generic. Detailed error info
    (driver message, exception type) goes into `context` and is logged
    server-side only.
    """

    def __init__(
        self,
        message: str = "A store error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
