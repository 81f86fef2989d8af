"""
Repository for persisting whole entity stores as JSON snapshots.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Generic, List, Type, Union

from config import SNAPSHOT_INDENT
from .base import T
from .entity_store import EntityStore
from .errors import (
    DuplicateIdentityError,
    InvalidValueError,
    PersistenceFormatError,
    PersistenceReadError,
    PersistenceWriteError,
)

PathLike = Union[str, os.PathLike]


class SnapshotRepository(Generic[T]):
    """
    Saves and restores the full contents of an ``EntityStore``.

    A snapshot is one JSON document tagged with the entity type name:

    ``{"entity_type": "GroceryItem", "count": 2, "entities": [...]}``

    Writing always replaces the previous snapshot; reading always builds
    a fresh store. An empty ``entities`` list is a valid snapshot, and a
    missing file loads as an empty store.
    """

    def __init__(self, entity_type: Type[T]):
        """
        Initialize the snapshot repository.

        Parameters
        ----------
        entity_type : Type[T]
            The entity class stored in the snapshots. Its ``from_dict``
            rebuilds records and its name tags the artifact.
        """
        self.entity_type = entity_type

    @property
    def type_name(self) -> str:
        return self.entity_type.__name__

    def save(self, store: EntityStore[T], destination: PathLike) -> Path:
        """
        Write every entity of ``store`` to ``destination``.

        The document is written to a temporary file next to the
        destination and moved into place, so a failed save leaves any
        previous snapshot untouched.

        Returns
        -------
        Path
            The path written.

        Raises
        ------
        PersistenceWriteError
            If the snapshot cannot be serialized or written.
        """
        path = Path(destination)
        # Frozen entities: updates after this point do not reach the list.
        entities = store.list_all()
        try:
            payload = json.dumps(self._to_document(entities), indent=SNAPSHOT_INDENT)
        except (TypeError, ValueError) as e:
            raise PersistenceWriteError(path, f"Could not serialize snapshot for '{path}': {e}") from e

        tmp_path = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, path)
        except OSError as e:
            if tmp_path and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise PersistenceWriteError(path, f"Error saving to file '{path}': {e}") from e
        return path

    def load(self, source: PathLike) -> EntityStore[T]:
        """
        Build a new store from the snapshot at ``source``.

        Returns
        -------
        EntityStore[T]
            The restored store, empty if no snapshot exists.

        Raises
        ------
        PersistenceReadError
            If the snapshot exists but cannot be read.
        PersistenceFormatError
            If the content is not a valid snapshot of this entity type,
            including records that share an identity.
        """
        path = Path(source)
        store: EntityStore[T] = EntityStore()
        if not path.exists():
            return store

        try:
            with open(path, 'r', encoding='utf-8') as f:
                text = f.read()
        except UnicodeDecodeError as e:
            raise PersistenceFormatError(path, f"Snapshot '{path}' is not UTF-8 text: {e}") from e
        except OSError as e:
            raise PersistenceReadError(path, f"Error loading from file '{path}': {e}") from e

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise PersistenceFormatError(path, f"Snapshot '{path}' is not valid JSON: {e}") from e

        for record in self._records(path, data):
            try:
                entity = self.entity_type.from_dict(record)
            except (KeyError, TypeError, ValueError) as e:
                raise PersistenceFormatError(path, f"Malformed {self.type_name} record in '{path}': {e!r}") from e
            try:
                store.insert(entity)
            except DuplicateIdentityError as e:
                raise PersistenceFormatError(path, f"Snapshot '{path}' is corrupt: {e}") from e
            except (InvalidValueError, TypeError) as e:
                raise PersistenceFormatError(path, f"Snapshot '{path}' holds an invalid record: {e}") from e
        return store

    def load_into(self, store: EntityStore[T], source: PathLike) -> EntityStore[T]:
        """Replace the contents of ``store`` with the snapshot at ``source``."""
        loaded = self.load(source)
        store.replace_all(loaded.list_all())
        return store

    def _to_document(self, entities: List[T]) -> Dict[str, Any]:
        return {
            'entity_type': self.type_name,
            'count': len(entities),
            'entities': [entity.to_dict() for entity in entities],
        }

    def _records(self, path: Path, data: Any) -> List[Dict[str, Any]]:
        """Check the document envelope and return its records."""
        if not isinstance(data, dict):
            raise PersistenceFormatError(path, f"Snapshot '{path}' must be a JSON object.")
        if data.get('entity_type') != self.type_name:
            raise PersistenceFormatError(
                path,
                f"Snapshot '{path}' holds {data.get('entity_type')!r}, expected {self.type_name!r}.",
            )
        records = data.get('entities')
        if not isinstance(records, list):
            raise PersistenceFormatError(path, f"Snapshot '{path}' has no 'entities' list.")
        count = data.get('count')
        if not isinstance(count, int) or isinstance(count, bool) or count != len(records):
            raise PersistenceFormatError(
                path, f"Snapshot '{path}' declares count {count!r} but holds {len(records)} records."
            )
        for record in records:
            if not isinstance(record, dict):
                raise PersistenceFormatError(path, f"Snapshot '{path}' holds a non-object record.")
        return records
