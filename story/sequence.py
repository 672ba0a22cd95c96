"""
Dialogue sequences - linear scripts of print tasks driven once per frame.

Script format (JSON):
{
    "id": "intro",
    "steps": [
        {"participants": "Bob"},
        {"speaker": 1, "emotion": "happy"},
        {"print": "Hi there, [0.name]!", "speaker": 1},
        {"print": "...", "delay": 1.5},
        {"default_behaviour": "immediate"},
        {"print": "[silent]Bob walks away."}
    ]
}

"delay" on a print step follows the script convention: -1 await,
-2 immediate, anything else is seconds to hold the finished text.
Without "delay" the printer's default behaviour applies.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

import jsonschema

from engine.core.actions import Action
from engine.core.events import EventBus, StoryEvent
from engine.input.handler import InputHandler
from story.policy import LAST_SPEAKER
from story.printer import SessionStatus
from story.tasks import TextPrinterTasks

logger = logging.getLogger(__name__)

SCRIPT_SCHEMA = {
    "type": "object",
    "required": ["steps"],
    "properties": {
        "id": {"type": "string"},
        "steps": {
            "type": "array",
            "items": {
                "oneOf": [
                    {
                        "type": "object",
                        "required": ["participants"],
                        "properties": {"participants": {"type": "string"}},
                        "additionalProperties": False,
                    },
                    {
                        "type": "object",
                        "required": ["print"],
                        "properties": {
                            "print": {"type": "string"},
                            "speaker": {"type": "integer"},
                            "delay": {"type": "number"},
                        },
                        "additionalProperties": False,
                    },
                    {
                        "type": "object",
                        "required": ["speaker"],
                        "properties": {
                            "speaker": {"type": "integer", "minimum": 0},
                            "emotion": {"type": "string"},
                        },
                        "additionalProperties": False,
                    },
                    {
                        "type": "object",
                        "required": ["default_behaviour"],
                        "properties": {
                            "default_behaviour": {"type": ["string", "integer"]},
                        },
                        "additionalProperties": False,
                    },
                ]
            },
        },
    },
}


@dataclass
class ParticipantsStep:
    names: str


@dataclass
class SpeakerStep:
    speaker: int
    emotion: Optional[str] = None


@dataclass
class PrintStep:
    text: str
    speaker: int = LAST_SPEAKER
    delay: Optional[float] = None


@dataclass
class BehaviourStep:
    behaviour: Union[int, str]


Step = Union[ParticipantsStep, SpeakerStep, PrintStep, BehaviourStep]


@dataclass
class DialogueScript:
    """An ordered list of steps."""
    id: str
    steps: list[Step] = field(default_factory=list)


class ScriptError(ValueError):
    """Raised for scripts that fail validation."""


def parse_script(data: dict, script_id: str = "script") -> DialogueScript:
    """Validate and convert script JSON data."""
    try:
        jsonschema.validate(instance=data, schema=SCRIPT_SCHEMA)
    except jsonschema.ValidationError as e:
        raise ScriptError(f"Invalid dialogue script {script_id}: {e.message}") from e

    steps: list[Step] = []
    for raw in data["steps"]:
        if "participants" in raw:
            steps.append(ParticipantsStep(raw["participants"]))
        elif "print" in raw:
            steps.append(PrintStep(raw["print"], raw.get("speaker", LAST_SPEAKER), raw.get("delay")))
        elif "default_behaviour" in raw:
            steps.append(BehaviourStep(raw["default_behaviour"]))
        else:
            steps.append(SpeakerStep(raw["speaker"], raw.get("emotion")))

    return DialogueScript(id=data.get("id", script_id), steps=steps)


def load_script(path: str | Path) -> DialogueScript:
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return parse_script(data, path.stem)


class DialogueRunner:
    """
    Runs a DialogueScript one frame at a time.

    Non-print steps finish instantly, so a frame runs every step up to and
    including the next print tick. A completed print hands over to the
    following step on the next frame.

    Usage:
        runner = DialogueRunner(tasks, input_handler, event_bus)
        runner.start(load_script("game/data/dialogue/intro.json"))

        # every frame
        input_handler.update()
        runner.update(dt)
    """

    def __init__(
        self,
        tasks: TextPrinterTasks,
        input_handler: Optional[InputHandler] = None,
        event_bus: Optional[EventBus] = None,
    ):
        self.tasks = tasks
        self.input = input_handler
        self.event_bus = event_bus

        self._script: Optional[DialogueScript] = None
        self._index = 0

    @property
    def is_running(self) -> bool:
        return self._script is not None

    @property
    def current_step(self) -> Optional[Step]:
        if self._script is None or self._index >= len(self._script.steps):
            return None
        return self._script.steps[self._index]

    def start(self, script: DialogueScript) -> None:
        if self.tasks.printer.is_printing:
            logger.warning("Starting script %s while a print is in progress", script.id)
        self._script = script
        self._index = 0
        logger.debug("Dialogue script %s started (%d steps)", script.id, len(script.steps))

    def update(self, dt: float, confirm: Optional[bool] = None) -> None:
        """
        Advance the script by one frame.

        `confirm` overrides the CONFIRM action read from the input handler.
        """
        if self._script is None:
            return
        if confirm is None:
            confirm = bool(self.input and self.input.is_action_just_pressed(Action.CONFIRM))

        step = self.current_step
        while step is not None:
            if isinstance(step, PrintStep):
                if self._tick_print(step, dt, confirm) is SessionStatus.SUCCEEDED:
                    self._index += 1
                break
            self._run_instant(step)
            self._index += 1
            step = self.current_step

        if self.current_step is None:
            self._finish()

    def _tick_print(self, step: PrintStep, dt: float, confirm: bool) -> SessionStatus:
        if step.delay is None:
            session = self.tasks.print(step.text, step.speaker)
        else:
            session = self.tasks.print_with_delay_argument(step.speaker, step.text, step.delay)
        return session.tick(dt, confirm)

    def _run_instant(self, step: Step) -> None:
        if isinstance(step, ParticipantsStep):
            self.tasks.set_participants(step.names)
        elif isinstance(step, SpeakerStep):
            self.tasks.set_speaker(step.speaker, step.emotion)
        elif isinstance(step, BehaviourStep):
            self.tasks.set_default_print_behaviour(step.behaviour)

    def _finish(self) -> None:
        script = self._script
        self._script = None
        self._index = 0
        logger.debug("Dialogue script %s finished", script.id)
        if self.event_bus:
            self.event_bus.publish(StoryEvent.SEQUENCE_FINISHED, script_id=script.id)
