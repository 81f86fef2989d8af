"""
Event system for decoupling services from the command-line output.
"""

from .event_system import EventType, Event, EventBus, Handler

__all__ = ['EventType', 'Event', 'EventBus', 'Handler']
