"""
Story module - dialogue printing for visual-novel scenes.

Provides:
- Characters and per-scene participants
- Name tags and on-print tags in dialogue text
- Typewriter printing with await / delay / immediate completion
- Speaker portraits with shadowing
- Linear dialogue scripts driven once per frame
"""

from story.character import Character, ShortName, character_name_to_filename
from story.participant import Participant, set_participants
from story.tags import process_tags, parse_command, TagScan
from story.policy import (
    Await,
    Delay,
    Immediate,
    PrintBehaviour,
    PrintPolicy,
    LAST_SPEAKER,
    NO_SPEAKER,
    AWAIT_DELAY,
    IMMEDIATE_DELAY,
    behaviour_from_delay,
)
from story.config import PrinterConfig, load_config
from story.display import TextDisplay, TextBuffer
from story.portraits import AnimatedPortrait, PortraitRegistry, PortraitSink, Shadow
from story.printer import PrintSession, SessionState, SessionStatus, TextPrinter
from story.tasks import TextPrinterTasks
from story.sequence import DialogueRunner, DialogueScript, load_script, parse_script

__all__ = [
    # Characters
    "Character",
    "ShortName",
    "character_name_to_filename",
    "Participant",
    "set_participants",
    # Tags
    "process_tags",
    "parse_command",
    "TagScan",
    # Policies
    "Await",
    "Delay",
    "Immediate",
    "PrintBehaviour",
    "PrintPolicy",
    "LAST_SPEAKER",
    "NO_SPEAKER",
    "AWAIT_DELAY",
    "IMMEDIATE_DELAY",
    "behaviour_from_delay",
    # Printing
    "PrinterConfig",
    "load_config",
    "TextDisplay",
    "TextBuffer",
    "PrintSession",
    "SessionState",
    "SessionStatus",
    "TextPrinter",
    "TextPrinterTasks",
    # Portraits
    "AnimatedPortrait",
    "PortraitRegistry",
    "PortraitSink",
    "Shadow",
    # Sequences
    "DialogueRunner",
    "DialogueScript",
    "load_script",
    "parse_script",
]
