"""
Error types for the leaky bucket library.
"""

from typing import Dict, Any, Optional
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error payload for hosts that surface bucket errors."""

    code: str
    message: str
    details: Dict[str, Any] = {}


class LeakyBucketException(Exception):
    """Base exception for the leaky bucket library."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(
            code=self.code,
            message=self.message,
            details=self.details
        )


class InvalidArgumentError(LeakyBucketException, ValueError):
    """Invalid drop count or bucket configuration."""

    def __init__(self, message: str = "Invalid argument", details: Optional[Dict[str, Any]] = None):
        super().__init__("INVALID_ARGUMENT", message, details)


class StorageError(LeakyBucketException):
    """The storage backend failed to store, fetch or purge a bucket."""

    def __init__(self, key: str, operation: str, message: Optional[str] = None):
        super().__init__(
            "STORAGE_ERROR",
            message or f'Could not {operation} "{key}" using the storage provider.',
            {"key": key, "operation": operation}
        )
        self.key = key
        self.operation = operation
