"""
Error taxonomy shared by the persistence layer, the services and the HTTP layer.

StorageError covers anything the persistence client reports (connection,
permission, constraint). ValidationError covers malformed input detected
before any I/O. Services propagate both unchanged; the HTTP layer maps them
to status codes in api.api.
"""

from typing import Optional


class AppError(Exception):
    """Base class for errors raised by this application."""

    def __init__(self, message: str, *, table: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.table = table


class StorageError(AppError):
    pass


class ConflictError(StorageError):
    """A write lost against a concurrent writer (unique key or stale version)."""


class NotFoundError(StorageError):
    pass


class ValidationError(AppError):
    pass
