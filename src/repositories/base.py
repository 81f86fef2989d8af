"""
Base repository interface and entity capabilities.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, ClassVar, Dict, Generic, Hashable, List, Protocol, TypeVar


class Entity(Protocol):
    """
    Capabilities a record needs to live in an entity store.

    ``id`` is the record's identity. ``MUTABLE_FIELDS`` maps the name of
    each field that may change after creation to a rule returning True
    when a value is within the field's domain.

    Entities are frozen dataclasses; a store changes a field by replacing
    the whole entity with ``dataclasses.replace``.
    """

    id: Hashable
    MUTABLE_FIELDS: ClassVar[Dict[str, Callable[[Any], bool]]]

    def to_dict(self) -> Dict[str, Any]:
        ...

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Entity':
        ...


T = TypeVar('T', bound=Entity)


def non_negative(value: Any) -> bool:
    """Rule for counts and quantities."""
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def field_value(data: Dict[str, Any], key: str, kind: type) -> Any:
    """
    Read ``data[key]`` and check it is an instance of ``kind``.

    Booleans are never accepted where ``kind`` is ``int``.

    Raises
    ------
    KeyError
        If ``key`` is absent.
    TypeError
        If the value has the wrong type.
    """
    value = data[key]
    if (isinstance(value, bool) and kind is not bool) or not isinstance(value, kind):
        raise TypeError(f"{key} must be {kind.__name__}, got {value!r}")
    return value


class Repository(ABC, Generic[T]):
    """
    Base repository interface for data access.

    This abstract base class defines the identity-keyed operations
    that all repositories should implement.
    """

    @abstractmethod
    def get(self, identity: Hashable) -> T:
        """
        Retrieve an entity by its identity.

        Parameters
        ----------
        identity : Hashable
            The unique identifier of the entity.

        Returns
        -------
        T
            The entity.

        Raises
        ------
        NotFoundError
            If no entity has this identity.
        """

    @abstractmethod
    def insert(self, entity: T) -> None:
        """
        Add a new entity.

        Parameters
        ----------
        entity : T
            The entity to add.

        Raises
        ------
        DuplicateIdentityError
            If an entity with the same identity is already present.
        """

    @abstractmethod
    def remove(self, identity: Hashable) -> bool:
        """
        Delete an entity by its identity.

        Parameters
        ----------
        identity : Hashable
            The unique identifier of the entity to delete.

        Returns
        -------
        bool
            True once the entity is deleted.

        Raises
        ------
        NotFoundError
            If no entity has this identity.
        """

    @abstractmethod
    def list_all(self) -> List[T]:
        """
        List all entities.

        Returns
        -------
        List[T]
            A list of all entities.
        """
