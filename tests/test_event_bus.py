"""Tests for the EventBus."""

import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from events import EventBus, Event, EventType


class TestEventBus:
    def test_publish_to_subscriber(self):
        bus = EventBus()
        received = []
        bus.subscribe(EventType.ITEM_ADDED, received.append)

        bus.publish(Event(type=EventType.ITEM_ADDED, data={'id': 1}))
        bus.publish(Event(type=EventType.ITEM_REMOVED, data={'id': 1}))

        assert [e.type for e in received] == [EventType.ITEM_ADDED]

    def test_duplicate_subscription_ignored(self):
        bus = EventBus()
        received = []
        bus.subscribe(EventType.ITEM_ADDED, received.append)
        bus.subscribe(EventType.ITEM_ADDED, received.append)
        bus.publish(Event(type=EventType.ITEM_ADDED))
        assert len(received) == 1

    def test_subscribe_all(self):
        bus = EventBus()
        received = []
        bus.subscribe_all(received.append)
        for event_type in EventType:
            bus.publish(Event(type=event_type))
        assert len(received) == len(EventType)

    def test_unsubscribe_and_clear(self):
        bus = EventBus()
        received = []
        bus.subscribe(EventType.ITEM_ADDED, received.append)
        bus.unsubscribe(EventType.ITEM_ADDED, received.append)
        bus.publish(Event(type=EventType.ITEM_ADDED))

        bus.subscribe(EventType.STOCK_UPDATED, received.append)
        bus.clear()
        bus.publish(Event(type=EventType.STOCK_UPDATED))
        assert received == []

    def test_failing_handler_does_not_stop_others(self, capsys):
        bus = EventBus()
        received = []

        def broken(event):
            raise RuntimeError("boom")

        bus.subscribe(EventType.ERROR_OCCURRED, broken)
        bus.subscribe(EventType.ERROR_OCCURRED, received.append)
        bus.publish(Event(type=EventType.ERROR_OCCURRED))

        assert len(received) == 1
        assert "boom" in capsys.readouterr().out
