"""
Typed event bus for decoupled communication.

Uses Enums for event types so subscribers never match on magic strings.

Usage:
    bus = EventBus()
    bus.subscribe(StoryEvent.PRINT_COMPLETED, on_print_completed)
    bus.publish(StoryEvent.PRINT_COMPLETED, text="Hello")
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable
from weakref import WeakMethod, ref

logger = logging.getLogger(__name__)


class StoryEvent(Enum):
    """Dialogue printer events."""
    PARTICIPANTS_CHANGED = auto()
    SPEAKER_CHANGED = auto()
    PRINT_STARTED = auto()
    PRINT_SKIPPED = auto()
    PRINT_COMPLETED = auto()
    TAG_TRIGGERED = auto()
    SEQUENCE_FINISHED = auto()


class AudioEvent(Enum):
    """Audio events."""
    SFX_PLAYED = auto()


@dataclass
class Event:
    """
    Event data container.

    Attributes:
        type: The event type (Enum member)
        data: Event-specific keyword data
        consumed: Set by a handler to stop propagation
    """
    type: Enum
    data: dict[str, Any] = field(default_factory=dict)
    consumed: bool = False

    def consume(self) -> None:
        self.consumed = True

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def __getitem__(self, key: str) -> Any:
        return self.data[key]


EventHandler = Callable[[Event], None]


@dataclass
class _Subscription:
    priority: int
    handler: Any
    one_shot: bool

    def resolve(self) -> EventHandler | None:
        if isinstance(self.handler, (ref, WeakMethod)):
            return self.handler()
        return self.handler


class EventBus:
    """
    Publish/subscribe hub.

    Handlers run highest priority first. Handlers are held weakly by
    default, so a bound method of a discarded object is dropped silently.
    Events published from inside a handler are queued and dispatched after
    the current one.
    """

    def __init__(self):
        self._subscriptions: dict[Enum, list[_Subscription]] = {}
        self._queue: list[Event] = []
        self._dispatching = False

    def subscribe(
        self,
        event_type: Enum,
        handler: EventHandler,
        priority: int = 0,
        one_shot: bool = False,
        weak: bool = True,
    ) -> None:
        """
        Subscribe to an event type.

        Args:
            event_type: The event type to listen for
            handler: Callback receiving the Event
            priority: Higher runs earlier; equal priorities keep subscribe order
            one_shot: Drop the handler after its first call
            weak: Hold the handler through a weak reference
        """
        if weak:
            target = WeakMethod(handler) if hasattr(handler, "__self__") else ref(handler)
        else:
            target = handler

        subs = self._subscriptions.setdefault(event_type, [])
        index = len(subs)
        for i, sub in enumerate(subs):
            if priority > sub.priority:
                index = i
                break
        subs.insert(index, _Subscription(priority, target, one_shot))

    def unsubscribe(self, event_type: Enum, handler: EventHandler) -> None:
        subs = self._subscriptions.get(event_type)
        if not subs:
            return
        self._subscriptions[event_type] = [s for s in subs if s.resolve() != handler]

    def publish(self, event_type: Enum, **data: Any) -> Event:
        """Publish an event built from keyword data and return it."""
        event = Event(type=event_type, data=data)
        self.publish_event(event)
        return event

    def publish_event(self, event: Event) -> None:
        if self._dispatching:
            self._queue.append(event)
            return
        self._dispatch(event)
        while self._queue:
            self._dispatch(self._queue.pop(0))

    def clear(self, event_type: Enum | None = None) -> None:
        if event_type is None:
            self._subscriptions.clear()
        else:
            self._subscriptions.pop(event_type, None)

    def _dispatch(self, event: Event) -> None:
        subs = self._subscriptions.get(event.type)
        if not subs:
            return

        self._dispatching = True
        dead: list[_Subscription] = []
        try:
            for sub in list(subs):
                handler = sub.resolve()
                if handler is None:
                    dead.append(sub)
                    continue

                try:
                    handler(event)
                except Exception:
                    # Listener errors are logged and dispatch continues
                    logger.exception("Error in event handler for %s", event.type)

                if sub.one_shot:
                    dead.append(sub)
                if event.consumed:
                    break
        finally:
            self._dispatching = False

        for sub in dead:
            if sub in subs:
                subs.remove(sub)
