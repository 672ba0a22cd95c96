"""
Core Audio Manager.
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
import pygame

from engine.core.events import EventBus, AudioEvent

logger = logging.getLogger(__name__)

MIN_PITCH = 0.1
MAX_PITCH = 4.0

VOLUME_CATEGORIES = ("sfx", "ui", "voice")


def _clamp_volume(volume: float) -> float:
    return max(0.0, min(1.0, float(volume)))


class AudioManager:
    """
    Sound effect playback for the dialogue layer.

    Handles:
    - SFX caching and playback
    - Pitch shifting (typing voices)
    - Volume categories (master, sfx, ui, voice)
    """

    def __init__(self, event_bus: EventBus | None = None):
        self.event_bus = event_bus

        self.master_volume: float = 1.0
        self._volumes: dict[str, float] = dict.fromkeys(VOLUME_CATEGORIES, 1.0)

        self._sound_cache: dict[str, pygame.mixer.Sound] = {}
        # (file_path, pitch rounded to 2 decimals) -> resampled sound
        self._pitched_cache: dict[tuple[str, float], pygame.mixer.Sound] = {}
        self._initialized: bool = False

    def init(self, frequency: int = 44100, size: int = -16, channels: int = 2, buffer: int = 512) -> None:
        """Initialize the mixer."""
        if pygame.mixer.get_init():
            self._initialized = True
            return

        try:
            pygame.mixer.init(frequency=frequency, size=size, channels=channels, buffer=buffer)
            pygame.mixer.set_num_channels(16)
            self._initialized = True
            logger.info("Audio system initialized.")
        except pygame.error as e:
            logger.error("Failed to initialize audio system: %s", e)

    def quit(self) -> None:
        pygame.mixer.quit()
        self._initialized = False
        self._sound_cache.clear()
        self._pitched_cache.clear()

    # --- Volume ---

    def set_volume(self, volume: float, category: str | None = None) -> None:
        """Set the master volume, or a category volume if one is given (0.0 to 1.0)."""
        if category is None:
            self.master_volume = _clamp_volume(volume)
        elif category in self._volumes:
            self._volumes[category] = _clamp_volume(volume)
        else:
            logger.warning("Unknown audio category: %s", category)

    def effective_volume(self, category: str) -> float:
        return self.master_volume * self._volumes.get(category, 1.0)

    def get_settings(self) -> dict:
        return {"master": self.master_volume, "categories": dict(self._volumes)}

    def apply_settings(self, settings: dict) -> None:
        self.set_volume(settings.get("master", 1.0))
        for category, volume in settings.get("categories", {}).items():
            self.set_volume(volume, category)

    # --- SFX ---

    def _get_sound(self, file_path: str) -> pygame.mixer.Sound | None:
        """Load or retrieve sound from cache."""
        if not self._initialized:
            return None

        if file_path not in self._sound_cache:
            if not Path(file_path).exists():
                logger.warning("Audio file not found: %s", file_path)
                return None
            try:
                self._sound_cache[file_path] = pygame.mixer.Sound(file_path)
            except pygame.error as e:
                logger.error("Failed to load sound %s: %s", file_path, e)
                return None

        return self._sound_cache[file_path]

    def _get_pitched_sound(self, file_path: str, pitch: float) -> pygame.mixer.Sound | None:
        """
        Return the sound resampled so it plays back at `pitch` times its speed.

        Resampling changes duration along with pitch, which is what a
        typing blip wants.
        """
        sound = self._get_sound(file_path)
        if sound is None or abs(pitch - 1.0) < 0.01:
            return sound

        pitch = round(max(MIN_PITCH, min(MAX_PITCH, pitch)), 2)
        key = (file_path, pitch)
        if key not in self._pitched_cache:
            samples = pygame.sndarray.array(sound)
            indices = np.arange(0, len(samples), pitch).astype(np.int64)
            indices = indices[indices < len(samples)]
            resampled = np.ascontiguousarray(samples[indices])
            self._pitched_cache[key] = pygame.sndarray.make_sound(resampled)
        return self._pitched_cache[key]

    def play_sfx(
        self,
        file_path: str,
        category: str = "sfx",
        volume: float = 1.0,
        pitch: float = 1.0,
    ) -> pygame.mixer.Channel | None:
        """
        Play a sound effect.

        Args:
            file_path: Sound file path
            category: Sound category
            volume: Base volume multiplier
            pitch: Playback rate multiplier (1.0 = unchanged)

        Returns:
            The channel used, or None if nothing was played.
        """
        sound = self._get_pitched_sound(file_path, pitch)
        if not sound:
            return None

        final_vol = self.effective_volume(category) * volume

        channel = pygame.mixer.find_channel(True)
        if not channel:
            return None

        channel.set_volume(final_vol)
        channel.play(sound)

        if self.event_bus:
            self.event_bus.publish(AudioEvent.SFX_PLAYED, file=file_path, pitch=pitch)

        return channel
