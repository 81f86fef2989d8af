"""
inventory.py – Stock-keeping records.

- InventoryItem: generic item stamped with the time it was logged
- ElectronicItem: item with a brand and a warranty period
- GroceryItem: item with an expiry date

All three carry a mutable ``quantity`` that may never go below zero.
Records are frozen; a store swaps in a new record when the quantity
changes.
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Callable, ClassVar, Dict

from repositories import non_negative, field_value


QUANTITY_RULES: Dict[str, Callable[[Any], bool]] = {'quantity': non_negative}


@dataclass(frozen=True)
class InventoryItem:
    """An item recorded in the inventory log."""
    id: int
    name: str
    quantity: int
    date_added: datetime

    MUTABLE_FIELDS: ClassVar[Dict[str, Callable[[Any], bool]]] = QUANTITY_RULES

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'quantity': self.quantity,
            'date_added': self.date_added.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'InventoryItem':
        return cls(
            id=field_value(data, 'id', int),
            name=field_value(data, 'name', str),
            quantity=field_value(data, 'quantity', int),
            date_added=datetime.fromisoformat(field_value(data, 'date_added', str)),
        )

    def __str__(self) -> str:
        return f"ID:{self.id} Name:{self.name} Qty:{self.quantity} Added:{self.date_added:%Y-%m-%d}"


@dataclass(frozen=True)
class ElectronicItem:
    """An electronic product held in the warehouse."""
    id: int
    name: str
    quantity: int
    brand: str
    warranty_months: int

    MUTABLE_FIELDS: ClassVar[Dict[str, Callable[[Any], bool]]] = QUANTITY_RULES

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'quantity': self.quantity,
            'brand': self.brand,
            'warranty_months': self.warranty_months,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ElectronicItem':
        return cls(
            id=field_value(data, 'id', int),
            name=field_value(data, 'name', str),
            quantity=field_value(data, 'quantity', int),
            brand=field_value(data, 'brand', str),
            warranty_months=field_value(data, 'warranty_months', int),
        )

    def __str__(self) -> str:
        return (
            f"[Electronic] ID:{self.id} Name:{self.name} Brand:{self.brand} "
            f"Qty:{self.quantity} Warranty:{self.warranty_months}mo"
        )


@dataclass(frozen=True)
class GroceryItem:
    """A grocery product held in the warehouse."""
    id: int
    name: str
    quantity: int
    expiry_date: date

    MUTABLE_FIELDS: ClassVar[Dict[str, Callable[[Any], bool]]] = QUANTITY_RULES

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'quantity': self.quantity,
            'expiry_date': self.expiry_date.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GroceryItem':
        return cls(
            id=field_value(data, 'id', int),
            name=field_value(data, 'name', str),
            quantity=field_value(data, 'quantity', int),
            expiry_date=date.fromisoformat(field_value(data, 'expiry_date', str)),
        )

    def __str__(self) -> str:
        return f"[Grocery] ID:{self.id} Name:{self.name} Qty:{self.quantity} Expiry:{self.expiry_date:%Y-%m-%d}"
