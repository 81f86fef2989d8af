"""
Service for the persisted inventory log.
"""

from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional

from config import INVENTORY_LOG_FILE
from events import EventBus, Event, EventType
from models import InventoryItem
from repositories import EntityStore, SnapshotRepository


SAMPLE_ITEMS = [
    (1, "Hammer", 25),
    (2, "Nails (100pcs)", 200),
    (3, "Screwdriver", 40),
    (4, "Rice (5kg)", 50),
    (5, "LED Bulb", 120),
]


class InventoryLogService:
    """
    Keeps a log of inventory items and persists it between sessions.

    The log is an ``EntityStore[InventoryItem]`` saved as one snapshot
    file. Loading replaces whatever the log currently holds.
    """

    def __init__(self, file_path: Optional[str] = None, event_bus: Optional[EventBus] = None):
        self.file_path = Path(file_path or INVENTORY_LOG_FILE)
        self._store: EntityStore[InventoryItem] = EntityStore()
        self._repository = SnapshotRepository(InventoryItem)
        self._event_bus = event_bus

    @property
    def store(self) -> EntityStore[InventoryItem]:
        return self._store

    def add(self, item: InventoryItem) -> None:
        self._store.insert(item)
        self._emit(EventType.ITEM_ADDED, {'id': item.id, 'item': item})

    def get_all(self) -> List[InventoryItem]:
        return self._store.list_all()

    def seed_sample_data(self, now: Optional[datetime] = None) -> None:
        """Add the five sample items, all stamped with ``now`` (UTC by default)."""
        stamp = now or datetime.now(timezone.utc)
        for item_id, name, quantity in SAMPLE_ITEMS:
            self.add(InventoryItem(item_id, name, quantity, stamp))

    def save_data(self) -> Path:
        """Write the log to its snapshot file. Persistence errors propagate."""
        path = self._repository.save(self._store, self.file_path)
        self._emit(EventType.SNAPSHOT_SAVED, {'path': str(path), 'count': len(self._store)})
        return path

    def load_data(self) -> int:
        """
        Replace the log with the snapshot's contents.

        Returns
        -------
        int
            Number of items loaded; 0 when no snapshot exists yet.
        """
        existed = self.file_path.exists()
        self._repository.load_into(self._store, self.file_path)
        self._emit(EventType.SNAPSHOT_LOADED, {
            'path': str(self.file_path),
            'count': len(self._store),
            'found': existed,
        })
        return len(self._store)

    def _emit(self, event_type: EventType, data: Dict) -> None:
        """Emit an event if event bus is available."""
        if self._event_bus:
            self._event_bus.publish(Event(type=event_type, data=data, source='inventory_log_service'))
