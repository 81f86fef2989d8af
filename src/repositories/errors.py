"""
Error taxonomy for entity stores and snapshot persistence.

Every error carries an ``ErrorKind`` tag so callers can branch on the
kind of failure without matching on exception classes.
"""

from enum import Enum, auto
from typing import Any, Optional


class ErrorKind(Enum):
    """Kinds of repository failure."""
    DUPLICATE_IDENTITY = auto()
    NOT_FOUND = auto()
    INVALID_VALUE = auto()
    PERSISTENCE_WRITE = auto()
    PERSISTENCE_READ = auto()
    PERSISTENCE_FORMAT = auto()


class RepositoryError(Exception):
    """Base class for all store and persistence failures."""

    kind: ErrorKind


class DuplicateIdentityError(RepositoryError):
    """An entity with the same identity is already in the store."""

    kind = ErrorKind.DUPLICATE_IDENTITY

    def __init__(self, identity: Any):
        self.identity = identity
        super().__init__(f"An entity with ID {identity} already exists.")


class NotFoundError(RepositoryError):
    """No entity with the given identity is in the store."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, identity: Any):
        self.identity = identity
        super().__init__(f"Entity with ID {identity} was not found.")


class InvalidValueError(RepositoryError):
    """A field value falls outside the field's valid domain."""

    kind = ErrorKind.INVALID_VALUE

    def __init__(self, field: str, value: Any, reason: Optional[str] = None, identity: Any = None):
        self.field = field
        self.value = value
        self.identity = identity
        message = reason or f"Invalid value for '{field}' (attempted {value!r})."
        super().__init__(message)


class PersistenceError(RepositoryError):
    """Base class for snapshot I/O failures."""

    def __init__(self, path, message: str):
        self.path = path
        super().__init__(message)


class PersistenceWriteError(PersistenceError):
    """The snapshot could not be written to its destination."""

    kind = ErrorKind.PERSISTENCE_WRITE


class PersistenceReadError(PersistenceError):
    """The snapshot exists but could not be read."""

    kind = ErrorKind.PERSISTENCE_READ


class PersistenceFormatError(PersistenceError):
    """The snapshot was read but its content is not a valid store."""

    kind = ErrorKind.PERSISTENCE_FORMAT
