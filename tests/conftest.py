import os
import sys
import pytest
from unittest.mock import MagicMock, patch

# Ensure engine modules can be imported
sys.path.append(os.getcwd())

@pytest.fixture(autouse=True)
def mock_pygame():
    """
    Global mock for pygame to allow headless testing.
    Autoused for all tests so no test touches real audio or input devices.
    """
    with patch('pygame.init'), \
         patch('pygame.display'), \
         patch('pygame.event'), \
         patch('pygame.mixer'), \
         patch('pygame.joystick'), \
         patch('pygame.key'), \
         patch('pygame.mouse'):

        import pygame
        pygame.joystick.get_count.return_value = 0

        yield

@pytest.fixture
def event_bus():
    """Fresh EventBus for each test."""
    from engine.core.events import EventBus
    return EventBus()

@pytest.fixture
def assets(tmp_path):
    """Asset database with a player and two NPCs, registered in code."""
    from engine.resources.database import AssetDatabase
    from story.character import Character, ShortName

    db = AssetDatabase(tmp_path)
    db.add_character("player", Character(
        firstname="Alex", lastname="Hart", nickname="Lex",
        default_portrait="alex/default.png",
        portraits={"neutral": "alex/neutral.png", "angry": "alex/angry.png"},
        voice_pitch=1.2,
    ))
    db.add_character("bob-stone", Character(
        firstname="Bob", lastname="Stone", nickname="Rocky",
        default_portrait="bob/default.png",
        portraits={"happy": "bob/happy.png"},
        voice_pitch=0.8,
        short_name=ShortName.NICKNAME,
    ))
    db.add_character("ann-lee", Character(firstname="Ann", lastname="Lee"))
    db.add_sound("default-speech", "sfx/speech.ogg")
    return db

@pytest.fixture
def display():
    from story.display import TextBuffer
    return TextBuffer()

@pytest.fixture
def fast_config():
    """One character revealed per tick, whatever the tick length."""
    from story.config import PrinterConfig
    return PrinterConfig(character_print_speed=0.0)

@pytest.fixture
def printer(display, fast_config, assets, event_bus):
    from story.printer import TextPrinter
    from story.portraits import PortraitRegistry

    return TextPrinter(
        display,
        config=fast_config,
        assets=assets,
        portraits=PortraitRegistry(),
        audio=MagicMock(),
        event_bus=event_bus,
    )
