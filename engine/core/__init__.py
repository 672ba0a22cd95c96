"""
Core engine module.

Exports:
- EventBus, Event, StoryEvent, AudioEvent: Event system
- Action: Input actions
"""

from engine.core.events import EventBus, Event, StoryEvent, AudioEvent
from engine.core.actions import Action

__all__ = [
    # Events
    "EventBus",
    "Event",
    "StoryEvent",
    "AudioEvent",
    # Input
    "Action",
]
