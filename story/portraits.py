"""
Portraits shown next to the dialogue box.

An AnimatedPortrait is a visual element bound to a participant slot. The
PortraitRegistry keeps the elements of the current screen and, on every
update, shows the speaker's emotion portrait and shadows everyone else.
Elements are registered and unregistered explicitly by whoever creates the
widgets.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Protocol, Sequence

from story.participant import Participant

logger = logging.getLogger(__name__)

SHADOW_HIDDEN = 0.0
SHADOW_SHOWN = 1.0


class PortraitSink(Protocol):
    """Receives the participant list and current speaker each tick."""

    def update_portraits(
        self,
        participants: Sequence[Participant],
        speaker: Optional[Participant],
    ) -> None: ...


@dataclass
class Shadow:
    """Dimming overlay drawn over a portrait."""
    alpha: float = SHADOW_SHOWN


@dataclass(eq=False)
class AnimatedPortrait:
    """
    A portrait element.

    Attributes:
        participant_id: Participant slot this element displays
        texture: Texture reference currently shown, None if unassigned
        shadow: Optional dimming overlay
    """
    participant_id: int
    texture: Optional[str] = None
    shadow: Optional[Shadow] = None


class PortraitRegistry:
    """Active portrait elements; implements PortraitSink."""

    def __init__(self):
        self._portraits: list[AnimatedPortrait] = []

    def register(self, portrait: AnimatedPortrait) -> AnimatedPortrait:
        if portrait not in self._portraits:
            self._portraits.append(portrait)
        return portrait

    def unregister(self, portrait: AnimatedPortrait) -> None:
        if portrait in self._portraits:
            self._portraits.remove(portrait)

    def clear(self) -> None:
        self._portraits.clear()

    @property
    def portraits(self) -> list[AnimatedPortrait]:
        return list(self._portraits)

    def __len__(self) -> int:
        return len(self._portraits)

    def update_portraits(
        self,
        participants: Sequence[Participant],
        speaker: Optional[Participant],
    ) -> None:
        """Show the speaker's current emotion and shadow the listeners."""
        for portrait in self._portraits:
            if not 0 <= portrait.participant_id < len(participants):
                continue

            participant = participants[portrait.participant_id]
            is_speaker = participant is speaker

            if is_speaker:
                portrait.texture = participant.character.get_portrait(participant.emotion)

            if portrait.shadow is not None:
                portrait.shadow.alpha = SHADOW_HIDDEN if is_speaker else SHADOW_SHOWN

            if portrait.texture is None:
                portrait.texture = participant.character.get_portrait()
