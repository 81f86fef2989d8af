"""
Service for managing the electronics and groceries warehouse.
"""

import calendar
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Union

from config import WAREHOUSE_DIR
from events import EventBus, Event, EventType
from models import ElectronicItem, GroceryItem
from repositories import (
    EntityStore,
    SnapshotRepository,
    DuplicateIdentityError,
    InvalidValueError,
    NotFoundError,
    RepositoryError,
)


WarehouseItem = Union[ElectronicItem, GroceryItem]


class ItemCategory(Enum):
    """The warehouse keeps one store per category."""
    ELECTRONIC = 'electronic'
    GROCERY = 'grocery'


SNAPSHOT_FILES = {
    ItemCategory.ELECTRONIC: 'electronics.json',
    ItemCategory.GROCERY: 'groceries.json',
}


def add_months(start: date, months: int) -> date:
    """Shift a date by whole months, clamping to the last day of the month."""
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


class WarehouseService:
    """
    Service for warehouse stock operations.

    Handles:
    - Separate stores for electronics and groceries
    - Duplicate-safe additions and stock adjustments
    - Snapshotting both stores to a directory
    """

    def __init__(
        self,
        electronics: Optional[EntityStore[ElectronicItem]] = None,
        groceries: Optional[EntityStore[GroceryItem]] = None,
        snapshot_dir: Optional[str] = None,
        event_bus: Optional[EventBus] = None,
    ):
        self._stores = {
            ItemCategory.ELECTRONIC: electronics if electronics is not None else EntityStore(),
            ItemCategory.GROCERY: groceries if groceries is not None else EntityStore(),
        }
        self._snapshots = {
            ItemCategory.ELECTRONIC: SnapshotRepository(ElectronicItem),
            ItemCategory.GROCERY: SnapshotRepository(GroceryItem),
        }
        self.snapshot_dir = Path(snapshot_dir or WAREHOUSE_DIR)
        self._event_bus = event_bus

    @property
    def electronics(self) -> EntityStore[ElectronicItem]:
        return self._stores[ItemCategory.ELECTRONIC]

    @property
    def groceries(self) -> EntityStore[GroceryItem]:
        return self._stores[ItemCategory.GROCERY]

    def store_for(self, category: ItemCategory) -> EntityStore:
        return self._stores[ItemCategory(category)]

    def seed_data(self) -> None:
        """Add three sample items of each category."""
        today = date.today()

        self.add_item(ElectronicItem(1, "Smartphone", 10, "Samsung", 24))
        self.add_item(ElectronicItem(2, "Laptop", 5, "Dell", 12))
        self.add_item(ElectronicItem(3, "Bluetooth Speaker", 15, "JBL", 6))

        self.add_item(GroceryItem(101, "Rice (5kg)", 50, add_months(today, 12)))
        self.add_item(GroceryItem(102, "Beans (2kg)", 30, add_months(today, 6)))
        self.add_item(GroceryItem(103, "Cooking Oil (1L)", 20, add_months(today, 8)))

    def add_item(self, item: WarehouseItem) -> None:
        """Add an item to the store matching its type. Store errors propagate."""
        category = self._category_of(item)
        self._stores[category].insert(item)
        self._emit(EventType.ITEM_ADDED, {'category': category.value, 'id': item.id, 'item': item})

    def add_item_safe(self, item: WarehouseItem) -> bool:
        """Add an item, reporting a duplicate identity instead of raising."""
        try:
            self.add_item(item)
        except (DuplicateIdentityError, InvalidValueError) as e:
            self._emit_error('add', e)
            return False
        return True

    def increase_stock(self, category: ItemCategory, item_id: int, quantity: int) -> Optional[int]:
        """
        Add ``quantity`` (which may be negative) to an item's stock.

        Returns
        -------
        Optional[int]
            The new quantity, or None if the item is missing or the
            result would be negative.
        """
        category = ItemCategory(category)
        try:
            item = self._stores[category].adjust_field(item_id, 'quantity', quantity)
        except (NotFoundError, InvalidValueError) as e:
            self._emit_error('increase_stock', e)
            return None
        self._emit(EventType.STOCK_UPDATED, {
            'category': category.value,
            'id': item_id,
            'name': item.name,
            'quantity': item.quantity,
        })
        return item.quantity

    def remove_item(self, category: ItemCategory, item_id: int) -> bool:
        """Remove an item by ID. Returns False if it was not found."""
        category = ItemCategory(category)
        try:
            self._stores[category].remove(item_id)
        except NotFoundError as e:
            self._emit_error('remove', e)
            return False
        self._emit(EventType.ITEM_REMOVED, {'category': category.value, 'id': item_id})
        return True

    def list_items(self, category: ItemCategory) -> List[WarehouseItem]:
        return self._stores[ItemCategory(category)].list_all()

    def save(self, directory: Optional[str] = None) -> Dict[ItemCategory, Path]:
        """Snapshot both stores. Persistence errors propagate."""
        target = Path(directory) if directory else self.snapshot_dir
        written = {}
        for category, repository in self._snapshots.items():
            path = repository.save(self._stores[category], target / SNAPSHOT_FILES[category])
            written[category] = path
            self._emit(EventType.SNAPSHOT_SAVED, {'path': str(path), 'count': len(self._stores[category])})
        return written

    def load(self, directory: Optional[str] = None) -> None:
        """
        Restore both stores from their snapshots.

        Both snapshots are read before either store is replaced, so a
        corrupt file leaves the warehouse as it was.
        """
        source = Path(directory) if directory else self.snapshot_dir
        loaded = {
            category: repository.load(source / SNAPSHOT_FILES[category])
            for category, repository in self._snapshots.items()
        }
        for category, store in loaded.items():
            self._stores[category].replace_all(store.list_all())
            self._emit(EventType.SNAPSHOT_LOADED, {
                'path': str(source / SNAPSHOT_FILES[category]),
                'count': len(store),
            })

    @staticmethod
    def _category_of(item: WarehouseItem) -> ItemCategory:
        if isinstance(item, ElectronicItem):
            return ItemCategory.ELECTRONIC
        if isinstance(item, GroceryItem):
            return ItemCategory.GROCERY
        raise TypeError(f"Unsupported warehouse item: {type(item).__name__}")

    def _emit_error(self, operation: str, error: RepositoryError) -> None:
        self._emit(EventType.ERROR_OCCURRED, {
            'operation': operation,
            'kind': error.kind,
            'error': error,
            'message': str(error),
        })

    def _emit(self, event_type: EventType, data: Dict) -> None:
        """Emit an event if event bus is available."""
        if self._event_bus:
            self._event_bus.publish(Event(type=event_type, data=data, source='warehouse_service'))
