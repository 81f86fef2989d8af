"""
In-memory identity-keyed store for a single entity type.
"""

import dataclasses
import threading
from typing import Any, Dict, Hashable, Iterable, Iterator, List

from .base import Repository, T
from .errors import DuplicateIdentityError, InvalidValueError, NotFoundError


class EntityStore(Repository[T]):
    """
    Keyed collection of entities enforcing identity and field rules.

    Every entity is keyed by its ``id``; no two entities share one.
    Fields listed in the entity type's ``MUTABLE_FIELDS`` are checked
    against their rule on insert and on every update, and a rejected
    request leaves the store untouched. Enumeration follows insertion
    order.

    Entities are frozen dataclasses and updates swap in a new copy. All
    mutations and enumerations run under one re-entrant lock, so the list
    returned by ``list_all`` is a point-in-time snapshot that later
    updates cannot change.
    """

    def __init__(self):
        self._entities: Dict[Hashable, T] = {}
        self._lock = threading.RLock()

    def __len__(self) -> int:
        return len(self._entities)

    def __contains__(self, identity: Hashable) -> bool:
        return identity in self._entities

    def __iter__(self) -> Iterator[T]:
        return iter(self.list_all())

    def insert(self, entity: T) -> None:
        """Add an entity whose identity is not yet in the store."""
        with self._lock:
            if entity.id in self._entities:
                raise DuplicateIdentityError(entity.id)
            for field, rule in self._rules(entity).items():
                value = getattr(entity, field)
                if not rule(value):
                    raise InvalidValueError(field, value, identity=entity.id)
            self._entities[entity.id] = entity

    def get(self, identity: Hashable) -> T:
        """Return the entity with this identity."""
        with self._lock:
            try:
                return self._entities[identity]
            except KeyError:
                raise NotFoundError(identity) from None

    def exists(self, identity: Hashable) -> bool:
        """Check if an entity with this identity is present."""
        return identity in self

    def remove(self, identity: Hashable) -> bool:
        """Delete the entity with this identity."""
        with self._lock:
            if identity not in self._entities:
                raise NotFoundError(identity)
            del self._entities[identity]
            return True

    def update_field(self, identity: Hashable, field: str, value: Any) -> T:
        """
        Replace a mutable field of an entity.

        Entities are frozen dataclasses, so the stored entity is swapped
        for a copy carrying the new value. Entities handed out earlier
        keep their old values.

        Parameters
        ----------
        identity : Hashable
            Identity of the entity to update.
        field : str
            Name of a field declared in the entity's ``MUTABLE_FIELDS``.
        value : Any
            The new value. Equal values are accepted.

        Returns
        -------
        T
            The updated entity.

        Raises
        ------
        NotFoundError
            If no entity has this identity.
        InvalidValueError
            If the field is not mutable or the value breaks its rule.
        """
        with self._lock:
            entity = self.get(identity)
            rules = self._mutable_rules(entity, field, value)
            if not rules[field](value):
                raise InvalidValueError(
                    field, value,
                    reason=f"{field.capitalize()} cannot be {value!r} for ID {identity}.",
                    identity=identity,
                )
            updated = dataclasses.replace(entity, **{field: value})
            self._entities[identity] = updated
            return updated

    def adjust_field(self, identity: Hashable, field: str, delta: Any) -> T:
        """Add ``delta`` to a numeric mutable field, validating the result."""
        with self._lock:
            entity = self.get(identity)
            self._mutable_rules(entity, field, delta)
            try:
                value = getattr(entity, field) + delta
            except TypeError:
                raise InvalidValueError(field, delta, identity=identity) from None
            return self.update_field(identity, field, value)

    def list_all(self) -> List[T]:
        """List all entities in insertion order."""
        with self._lock:
            return list(self._entities.values())

    def clear(self) -> None:
        """Remove every entity."""
        with self._lock:
            self._entities.clear()

    def replace_all(self, entities: Iterable[T]) -> None:
        """
        Swap the store's contents for ``entities``.

        The new entities are checked as if inserted one by one into an
        empty store; on any failure the current contents are kept.
        """
        staged: EntityStore[T] = EntityStore()
        for entity in entities:
            staged.insert(entity)
        with self._lock:
            self._entities = staged._entities

    @staticmethod
    def _rules(entity: Any) -> Dict[str, Any]:
        return getattr(entity, 'MUTABLE_FIELDS', {}) or {}

    def _mutable_rules(self, entity: Any, field: str, value: Any) -> Dict[str, Any]:
        rules = self._rules(entity)
        if field not in rules:
            raise InvalidValueError(
                field, value,
                reason=f"Field '{field}' of {type(entity).__name__} cannot be updated.",
                identity=entity.id,
            )
        return rules
