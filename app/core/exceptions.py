"""Custom exceptions for the trip planning API.

This module defines the HTTP exceptions raised by the trip endpoints
and the helper that turns request validation errors into a message.
"""

from collections.abc import Sequence
from typing import Any

from fastapi import HTTPException, status


class BadRequestError(HTTPException):
    """Raised for general bad request errors."""

    def __init__(self, detail: str = "Bad request") -> None:
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
        )


class NotFoundError(HTTPException):
    """Raised when a resource is not found."""

    def __init__(self, detail: str = "Resource not found") -> None:
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
        )


class TripNotFoundError(NotFoundError):
    """Raised when no trip plan exists for the requested identifier."""

    def __init__(self) -> None:
        super().__init__(detail="Trip plan not found")


class TripExpiredError(HTTPException):
    """Raised when a shared trip plan link is past its expiration."""

    def __init__(self, ttl_days: int = 7) -> None:
        super().__init__(
            status_code=status.HTTP_410_GONE,
            detail=f"Shared link has expired ({ttl_days} days)",
        )


class GenerationFailedError(HTTPException):
    """Raised when a plan was generated but could not be stored or returned."""

    def __init__(self, detail: str = "Failed to generate trip plan") -> None:
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
        )


def describe_validation_errors(errors: Sequence[Any]) -> str:
    """Collapse pydantic validation errors into one client-facing message."""
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        field = loc[-1] if loc else ""
        if field == "days" and error.get("type") in {"greater_than_equal", "less_than_equal"}:
            return "Days must be between 1 and 14"
        if field == "interests" and error.get("type") == "too_short":
            return "At least one interest must be selected"
        if error.get("type") == "missing":
            return f"Missing required field: {'.'.join(loc) or 'preferences'}"
        if error.get("type") == "value_error" and "error" in error.get("ctx", {}):
            return str(error["ctx"]["error"])

    first = errors[0] if errors else {}
    loc = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid request")
    return f"{loc}: {message}" if loc else message
