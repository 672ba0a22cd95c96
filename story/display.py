"""
Text display surface used by the printer.

The real widget lives in the game's UI layer; the printer only needs the
three members of TextDisplay. TextBuffer is a plain in-memory display for
headless use and tests.
"""

from __future__ import annotations

from typing import Protocol


class TextDisplay(Protocol):
    """
    Anything the printer can print into.

    character_count must describe the text most recently assigned, counted
    in the same unit as max_visible_characters.
    """

    text: str
    max_visible_characters: int

    @property
    def character_count(self) -> int: ...


class TextBuffer:
    """In-memory TextDisplay."""

    def __init__(self):
        self.text: str = ""
        self.max_visible_characters: int = 0

    @property
    def character_count(self) -> int:
        return len(self.text)

    @property
    def visible_text(self) -> str:
        """The part of the text currently revealed."""
        return self.text[:self.max_visible_characters]

    def __repr__(self) -> str:
        return f"TextBuffer({self.visible_text!r})"
