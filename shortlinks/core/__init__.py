"""Core package - configuration, storage and error types."""

from .config import settings, get_settings
from .database import Database, db, get_db, get_test_db
from .errors import (
    StorageError,
    AliasExistsError,
    AliasNotFoundError,
    ShortLinkError,
    AssignmentError,
    AliasTakenError,
    AliasSpaceExhaustedError,
    AssignmentCancelledError,
    StorageFailureError,
    LinkNotFoundError,
)
from .storage import URLSaver, URLGetter, URLStore

__all__ = [
    "settings",
    "get_settings",
    "Database",
    "db",
    "get_db",
    "get_test_db",
    "StorageError",
    "AliasExistsError",
    "AliasNotFoundError",
    "ShortLinkError",
    "AssignmentError",
    "AliasTakenError",
    "AliasSpaceExhaustedError",
    "AssignmentCancelledError",
    "StorageFailureError",
    "LinkNotFoundError",
    "URLSaver",
    "URLGetter",
    "URLStore",
]
