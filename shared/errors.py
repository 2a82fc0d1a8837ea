"""
Shared error handling for the Generation Roster service.
"""

from typing import Dict, Any, Optional
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error response format."""

    request_id: Optional[str] = None
    code: str
    message: str
    details: Dict[str, Any] = {}


class RosterException(Exception):
    """Base exception for roster components."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self, request_id: Optional[str] = None) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(
            request_id=request_id,
            code=self.code,
            message=self.message,
            details=self.details
        )


class InvalidGenerationKey(RosterException):
    """Generation key has no configuration entry."""

    def __init__(self, key: str, details: Optional[Dict[str, Any]] = None):
        self.key = key
        super().__init__(
            "INVALID_GENERATION_KEY",
            f"Invalid generation key: {key}",
            {"generation": key, **(details or {})}
        )


class UpstreamUnavailable(RosterException):
    """Listing fetch or static aggregate load failed for a whole generation."""

    def __init__(self, source: str, message: str = "Upstream unavailable", details: Optional[Dict[str, Any]] = None):
        self.source = source
        super().__init__("UPSTREAM_UNAVAILABLE", f"{source}: {message}", details)


class ItemFetchFailed(RosterException):
    """A single detail fetch or decode failed. Recovered locally, never surfaced."""

    def __init__(self, name: str, message: str = "Item fetch failed", details: Optional[Dict[str, Any]] = None):
        self.name = name
        super().__init__("ITEM_FETCH_FAILED", f"{name}: {message}", details)
