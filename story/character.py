"""
Character records - identity, display names, portraits, voice pitch.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

NEUTRAL_EMOTION = "neutral"


class ShortName(Enum):
    """Which name field labels the character in the dialogue box."""
    FIRSTNAME = "firstname"
    LASTNAME = "lastname"
    NICKNAME = "nickname"
    FULLNAME = "fullname"


def character_name_to_filename(fullname: str) -> str:
    """'Ann Smith ' -> 'ann-smith'"""
    return fullname.lower().strip().replace(" ", "-")


class Character(BaseModel):
    """
    A character with a more or less prominent role in the storyline.

    Name fields, portraits and voice pitch let the character take part in
    dialogue sequences. Characters are owned by the asset database and never
    change once loaded; per-scene state (emotion) lives on Participant.

    Attributes:
        firstname: First name
        lastname: Last name
        nickname: Nickname
        default_portrait: Texture shown when no emotion portrait matches
        portraits: Emotion label -> texture reference
        voice_pitch: Typing sound pitch multiplier
        short_name: Name field used as the speaker label
    """

    model_config = ConfigDict(frozen=True, extra='forbid')

    firstname: str = ""
    lastname: str = ""
    nickname: str = ""
    default_portrait: Optional[str] = None
    portraits: dict[str, str] = Field(default_factory=dict)
    voice_pitch: float = Field(default=1.0, ge=0.35, le=2.15)
    short_name: ShortName = ShortName.FIRSTNAME

    @property
    def fullname(self) -> str:
        return self.firstname + " " + self.lastname

    @property
    def filename(self) -> str:
        return character_name_to_filename(self.fullname)

    @property
    def shortname(self) -> str:
        """The display name used as dialogue-box speaker label."""
        if self.short_name is ShortName.LASTNAME:
            return self.lastname
        if self.short_name is ShortName.NICKNAME:
            return self.nickname
        if self.short_name is ShortName.FULLNAME:
            return self.fullname
        return self.firstname

    def name_field(self, field_name: str) -> Optional[str]:
        """
        Resolve a name tag field ("name", "fullname", "firstname",
        "lastname", "nickname"). Returns None for unknown fields.
        """
        fields = {
            "name": self.shortname,
            "fullname": self.fullname,
            "firstname": self.firstname,
            "lastname": self.lastname,
            "nickname": self.nickname,
        }
        return fields.get(field_name.lower())

    def has_portrait(self, emotion: str) -> bool:
        return emotion in self.portraits

    def get_portrait(self, emotion: str = NEUTRAL_EMOTION) -> Optional[str]:
        """Portrait for an emotion, falling back to the default portrait."""
        return self.portraits.get(emotion) or self.default_portrait
