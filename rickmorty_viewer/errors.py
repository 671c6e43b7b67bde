"""Custom exceptions for network and storage operations."""

from typing import Optional


class ApiError(Exception):
    """Raised when the REST API answers with a non-success status."""

    def __init__(self, status: int, reason: Optional[str] = None, url: Optional[str] = None):
        self.status = status
        self.reason = reason or ""
        self.url = url
        super().__init__(f"HTTP {status} {self.reason}".strip())


class ImageFetchError(Exception):
    """Raised when downloading a character image fails."""


class StorageError(Exception):
    """Raised when reading or writing the local database fails."""
