"""
Printer configuration.

Can be built in code or loaded from JSON:
{
    "character_print_speed": 0.04,
    "speech_default_pitch": 0.5,
    "default_delay_after_print": 2.0,
    "default_print_behaviour": "await",
    "speech_sound": "default-speech",
    "confirm_completes_after_skip": true
}
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict
from pathlib import Path

from story.policy import PrintBehaviour, parse_behaviour

logger = logging.getLogger(__name__)

_VALUE_TYPES: dict[str, type] = {
    "character_print_speed": float,
    "speech_default_pitch": float,
    "default_delay_after_print": float,
    "default_print_behaviour": PrintBehaviour,
    "speech_sound": str,
    "confirm_completes_after_skip": bool,
}


@dataclass
class PrinterConfig:
    """
    Attributes:
        character_print_speed: Seconds between two revealed characters
        speech_default_pitch: Typing sound pitch when nobody is speaking
        default_delay_after_print: Hold time for delay prints without one
        default_print_behaviour: Policy used by plain print() calls
        speech_sound: Sound name of the typing sound
        confirm_completes_after_skip: If False, confirming mid-reveal only
            reveals the rest and a second confirm completes the print
    """
    character_print_speed: float = 0.040
    speech_default_pitch: float = 0.5
    default_delay_after_print: float = 2.0
    default_print_behaviour: PrintBehaviour = PrintBehaviour.AWAIT
    speech_sound: str = "default-speech"
    confirm_completes_after_skip: bool = True

    def __post_init__(self):
        if self.character_print_speed < 0:
            raise ValueError("character_print_speed must not be negative")

    def to_dict(self) -> dict:
        data = asdict(self)
        data["default_print_behaviour"] = self.default_print_behaviour.name.lower()
        return data


def _coerce(key: str, value):
    """Convert a JSON value to the type of config field `key`; raises ValueError."""
    expected = _VALUE_TYPES[key]
    if expected is PrintBehaviour:
        behaviour = None if isinstance(value, bool) else parse_behaviour(value)
        if behaviour is None:
            raise ValueError(f"unknown print behaviour {value!r}")
        return behaviour
    # JSON numbers may be ints; bools are ints too but never numbers here
    if expected is float:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
    elif isinstance(value, expected):
        return value
    raise ValueError(f"expected {expected.__name__}, got {value!r}")


def load_config(path: str | Path) -> PrinterConfig:
    """
    Load a PrinterConfig from JSON.

    Missing, unreadable or invalid files give the defaults; unknown keys,
    wrongly typed values and bad behaviour names are logged and ignored.
    """
    config_file = Path(path)
    config = PrinterConfig()
    if not config_file.exists():
        logger.warning("Printer config not found: %s", config_file)
        return config

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.error("Error loading printer config %s: %s", config_file, e)
        return config

    if not isinstance(data, dict):
        logger.error("Printer config %s is not a JSON object", config_file)
        return config

    for key, value in data.items():
        if key not in _VALUE_TYPES:
            logger.warning("Unknown printer config key: %s", key)
            continue
        try:
            value = _coerce(key, value)
        except ValueError as e:
            logger.warning("Ignoring printer config %s: %s", key, e)
            continue
        setattr(config, key, value)

    try:
        config.__post_init__()
    except ValueError as e:
        logger.error("Invalid printer config %s: %s", config_file, e)
        return PrinterConfig()
    return config


def save_config(config: PrinterConfig, path: str | Path) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config.to_dict(), f, indent=2)
