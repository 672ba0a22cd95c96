"""
Story Printer Engine

Runtime services for the dialogue printer: events, input, audio and assets.

Quick Start:
    from engine import EventBus, InputHandler
    from story import TextPrinter, TextPrinterTasks, TextBuffer

    bus = EventBus()
    printer = TextPrinter(TextBuffer(), event_bus=bus)
    tasks = TextPrinterTasks(printer)
"""

__version__ = "0.1.0"
__author__ = "Developer"

from engine.core import (
    EventBus,
    Event,
    StoryEvent,
    AudioEvent,
    Action,
)

from engine.input import InputHandler

__all__ = [
    # Events
    "EventBus",
    "Event",
    "StoryEvent",
    "AudioEvent",
    # Input
    "InputHandler",
    "Action",
]
