"""
Participants - characters bound to speaker slots for one dialogue sequence.

Participants are set from a comma-separated name string before any print.
The list index of each participant is its speaker id, used by print calls
and by name tags such as [1.firstname].

Setting only two participants is the common case, so a single name means
"the player and this character". Pass "None" to print without characters,
and "player", "playeronly" or "player only" for a player monologue. For
three or more participants, include "player" explicitly if the player
character should be present.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Protocol

from story.character import Character, NEUTRAL_EMOTION

logger = logging.getLogger(__name__)

PLAYER_ALIASES = frozenset({"player", "playeronly", "player only"})
NO_PARTICIPANTS = "none"


class CharacterSource(Protocol):
    """Anything that can resolve character names (see AssetDatabase)."""

    @property
    def player(self) -> Optional[Character]: ...

    def find_character(self, name: str) -> Optional[Character]: ...


@dataclass(eq=False)
class Participant:
    """
    A character taking part in the current dialogue.

    Compared by identity: two slots holding the same character record are
    still different participants.
    """
    character: Character
    emotion: str = NEUTRAL_EMOTION

    @property
    def portrait(self) -> Optional[str]:
        return self.character.get_portrait(self.emotion)


def set_participants(participant_names: str, characters: CharacterSource) -> list[Participant]:
    """
    Build the participant list from a comma-separated name string.

    Unresolvable names never raise: they are dropped, or in the single
    name case the dialogue falls back to the player alone.
    """
    names = [name.strip() for name in participant_names.split(",")]
    if len(names) == 1:
        chosen = _characters_from_one_name(names[0], characters)
    else:
        chosen = _characters_from_many_names(names, characters)
    return [Participant(character) for character in chosen]


def _is_player_alias(name: str) -> bool:
    return name.lower() in PLAYER_ALIASES


def _characters_from_one_name(name: str, characters: CharacterSource) -> list[Character]:
    player = characters.player
    player_only = [player] if player is not None else []

    if _is_player_alias(name):
        return player_only
    if name.lower() == NO_PARTICIPANTS:
        return []

    other = characters.find_character(name)
    if other is None:
        logger.warning("Participant '%s' not found, using player only", name)
        return player_only
    return player_only + [other]


def _characters_from_many_names(names: list[str], characters: CharacterSource) -> list[Character]:
    chosen: list[Character] = []
    for name in names:
        if _is_player_alias(name):
            character = characters.player
        else:
            character = characters.find_character(name)

        if character is None:
            logger.warning("Participant '%s' not found, skipping", name)
            continue
        if any(character is c for c in chosen):
            continue
        chosen.append(character)
    return chosen
