"""
Print tasks - the call surface dialogue scripts use.

A scheduler (behaviour tree, cutscene player, DialogueRunner) calls a print
task every frame until it reports success. Each call returns the in-flight
PrintSession, so the scheduler ticks it and reads the status:

    tasks = TextPrinterTasks(printer)
    tasks.set_participants("Bob")              # player + Bob
    session = tasks.print_await(1, "Hi, [0.name].")

Print uses the default behaviour set with set_default_print_behaviour();
print_await, print_delay and print_immediate pick a behaviour for one print.
Omitting the speaker (LAST_SPEAKER) keeps whoever spoke last.
"""

from __future__ import annotations

import logging
from typing import Optional

from story.participant import Participant
from story.policy import (
    Await,
    Delay,
    Immediate,
    PrintBehaviour,
    LAST_SPEAKER,
    behaviour_from_delay,
    parse_behaviour,
)
from story.printer import PrintSession, TextPrinter

logger = logging.getLogger(__name__)


class TextPrinterTasks:
    """Script-facing tasks bound to one TextPrinter."""

    def __init__(self, printer: TextPrinter):
        self.printer = printer

    def set_participants(self, participant_names: str) -> list[Participant]:
        return self.printer.set_participants(participant_names)

    def set_speaker(self, speaker_id: int, emotion: Optional[str] = None) -> Optional[Participant]:
        return self.printer.set_speaker(speaker_id, emotion)

    def print(
        self,
        text: str,
        speaker: int = LAST_SPEAKER,
        delay_after_print: Optional[float] = None,
    ) -> PrintSession:
        """
        Print with the default behaviour.

        `delay_after_print` only applies when the default behaviour is delay.
        """
        behaviour = self.printer.default_print_behaviour
        if behaviour is PrintBehaviour.DELAY:
            return self.print_delay(speaker, text, delay_after_print)
        if behaviour is PrintBehaviour.IMMEDIATE:
            return self.print_immediate(speaker, text)
        return self.print_await(speaker, text)

    def print_await(self, speaker: int, text: str) -> PrintSession:
        return self.printer.start_print(speaker, text, Await())

    def print_delay(
        self,
        speaker: int,
        text: str,
        delay_after_print: Optional[float] = None,
    ) -> PrintSession:
        if delay_after_print is None:
            delay_after_print = self.printer.default_delay_after_print
        return self.printer.start_print(speaker, text, Delay(delay_after_print))

    def print_immediate(self, speaker: int, text: str) -> PrintSession:
        return self.printer.start_print(speaker, text, Immediate())

    def print_with_delay_argument(self, speaker: int, text: str, delay: float) -> PrintSession:
        """Print using a script delay argument (-1 await, -2 immediate, else seconds)."""
        return self.printer.start_print(speaker, text, behaviour_from_delay(delay))

    def set_default_print_behaviour(self, behaviour: int | str | PrintBehaviour) -> bool:
        """Set the behaviour used by print(). Unknown values are ignored."""
        if not isinstance(behaviour, PrintBehaviour):
            parsed = parse_behaviour(behaviour)
            if parsed is None:
                logger.warning("Unknown print behaviour: %r", behaviour)
                return False
            behaviour = parsed
        self.printer.default_print_behaviour = behaviour
        return True
