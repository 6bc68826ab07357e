"""Domain models and errors."""

from .entries import FILE, FOLDER, Entry, MovedEntry, SearchHit
from .errors import (
    AccessDeniedError,
    AlreadyExistsError,
    DevToolboxError,
    IOFailureError,
    MalformedDocumentError,
    NotFoundError,
)

__all__ = [
    "FILE",
    "FOLDER",
    "Entry",
    "MovedEntry",
    "SearchHit",
    "AccessDeniedError",
    "AlreadyExistsError",
    "DevToolboxError",
    "IOFailureError",
    "MalformedDocumentError",
    "NotFoundError",
]
