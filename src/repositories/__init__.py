"""
Repository pattern implementations for data access layer.

This package provides the identity-keyed entity store and the snapshot
repository that persists whole stores, separating data access concerns
from business logic.
"""

from .base import Repository, Entity, non_negative, field_value
from .entity_store import EntityStore
from .snapshot_repository import SnapshotRepository
from .errors import (
    ErrorKind,
    RepositoryError,
    DuplicateIdentityError,
    NotFoundError,
    InvalidValueError,
    PersistenceError,
    PersistenceWriteError,
    PersistenceReadError,
    PersistenceFormatError,
)

__all__ = [
    'Repository',
    'Entity',
    'non_negative',
    'field_value',
    'EntityStore',
    'SnapshotRepository',
    'ErrorKind',
    'RepositoryError',
    'DuplicateIdentityError',
    'NotFoundError',
    'InvalidValueError',
    'PersistenceError',
    'PersistenceWriteError',
    'PersistenceReadError',
    'PersistenceFormatError',
]
