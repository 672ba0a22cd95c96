"""
Text printer - frame-driven typewriter printing of dialogue lines.

The TextPrinter owns the participants of the current dialogue and prints
one line at a time into a TextDisplay. Each print is a PrintSession that
the game advances once per frame:

    session = printer.start_print(0, "Hello [1.name]!", Await())
    while session.tick(dt, confirm=input.is_action_just_pressed(Action.CONFIRM)) \\
            is SessionStatus.RUNNING:
        ...

While a session is running, start_print() returns that same session, so a
script that re-issues its print call every frame keeps driving one print.
"""

from __future__ import annotations

import logging
from enum import Enum, auto
from typing import TYPE_CHECKING, Callable, Optional, Sequence

from engine.core.events import EventBus, StoryEvent
from story.config import PrinterConfig
from story.participant import Participant, set_participants
from story.policy import (
    Await,
    Delay,
    Immediate,
    PrintBehaviour,
    PrintPolicy,
    LAST_SPEAKER,
)
from story.tags import parse_command, process_tags

if TYPE_CHECKING:
    from engine.audio.manager import AudioManager
    from engine.resources.database import AssetDatabase
    from story.display import TextDisplay
    from story.portraits import PortraitSink

logger = logging.getLogger(__name__)

TagCommand = Callable[["PrintSession", list[str]], None]
CompletionCallback = Callable[["PrintSession"], None]


class SessionState(Enum):
    """Lifecycle of a print."""
    STARTING = auto()
    REVEALING = auto()
    HOLDING = auto()      # All text visible, waiting on the policy
    COMPLETED = auto()


class SessionStatus(Enum):
    """Result of PrintSession.tick()."""
    RUNNING = auto()
    SUCCEEDED = auto()    # Returned by the tick that completed the print
    INACTIVE = auto()     # Ticked after completion; nothing happened


def resolve_speaker(participants: Sequence[Participant], speaker_id: int) -> Optional[Participant]:
    """Bounds-checked speaker lookup; any invalid id means no speaker."""
    if 0 <= speaker_id < len(participants):
        return participants[speaker_id]
    return None


class PrintSession:
    """
    State of one print, from start until the policy completes it.

    The reveal cursor (max_visible_characters) never decreases and never
    passes the end of the text.
    """

    def __init__(
        self,
        printer: TextPrinter,
        speaker: Optional[Participant],
        text: str,
        policy: PrintPolicy,
    ):
        self.printer = printer
        self.speaker = speaker
        self.policy = policy
        self.state = SessionState.STARTING

        config = printer.config
        self.character_print_speed: float = config.character_print_speed
        self.character_print_timer: float = self.character_print_speed
        self.delay_timer: float = policy.duration if isinstance(policy, Delay) else 0.0
        self.sound_disabled: bool = False
        self.resets_text: bool = True

        self._ticks = 0
        self._callbacks: list[CompletionCallback] = []

        # The speaker label is visible from the start
        self.max_visible_characters = 0
        if speaker is not None:
            label = speaker.character.shortname
            text = label + "\n" + text
            self.max_visible_characters = len(label) + 1

        scan = process_tags(text, printer.participants)
        self.text: str = scan.text
        self.commands: dict[int, list[str]] = scan.commands
        self.max_visible_characters = min(self.max_visible_characters, len(self.text))

        if isinstance(policy, Immediate):
            self.max_visible_characters = len(self.text)
            self.sound_disabled = True
            self.resets_text = False
            self._fire_commands_through(len(self.text))

        self._push()
        self.state = SessionState.REVEALING

    @property
    def is_complete(self) -> bool:
        return self.state is SessionState.COMPLETED

    @property
    def behaviour(self) -> PrintBehaviour:
        return self.policy.behaviour

    @property
    def total_characters(self) -> int:
        return self.printer.display.character_count

    def on_complete(self, callback: CompletionCallback) -> None:
        """Call `callback(session)` once, when the print completes."""
        self._callbacks.append(callback)

    def tick(self, dt: float, confirm: bool = False) -> SessionStatus:
        """
        Advance the print by one frame.

        Args:
            dt: Seconds since the previous tick
            confirm: Whether the player confirmed since the previous tick

        Returns:
            SUCCEEDED on the tick that completes the print, RUNNING before,
            INACTIVE afterwards.
        """
        if self.is_complete:
            return SessionStatus.INACTIVE
        if dt < 0:
            raise ValueError(f"dt must not be negative, got {dt}")

        self._ticks += 1
        total = self.total_characters

        # Tags at the seeded cursor (start of the line) fire before the first reveal
        if self._ticks == 1:
            self._fire_commands_through(self.max_visible_characters)

        if self.character_print_timer <= 0 and self.max_visible_characters < total:
            self.character_print_timer = self.character_print_speed
            self.max_visible_characters += 1
            self._play_typing_sound()

        self._fire_commands_through(self.max_visible_characters)
        self.character_print_timer -= dt

        if self.max_visible_characters >= total:
            self.state = SessionState.HOLDING
            if isinstance(self.policy, Delay):
                self.delay_timer -= dt

        completed = self._check_completion(confirm)
        self._push()

        if completed:
            self._signal_success()
            return SessionStatus.SUCCEEDED
        return SessionStatus.RUNNING

    def skip_to_end(self) -> None:
        """Reveal the rest of the text, firing pending commands in order."""
        total = self.total_characters
        if self.max_visible_characters >= total:
            return
        while self.max_visible_characters < total:
            self.max_visible_characters += 1
            self._fire_commands_through(self.max_visible_characters)
        self.state = SessionState.HOLDING
        self.printer.publish(StoryEvent.PRINT_SKIPPED, session=self)

    def _check_completion(self, confirm: bool) -> bool:
        fully_shown = self.max_visible_characters >= self.total_characters

        if isinstance(self.policy, Await):
            # The confirm that finished the previous print must not skip this one.
            if not confirm or self._ticks <= 1:
                return False
            if not fully_shown:
                self.skip_to_end()
                if not self.printer.config.confirm_completes_after_skip:
                    return False
            self._complete()
            return True

        if isinstance(self.policy, Delay):
            if fully_shown and self.delay_timer < 0:
                self._complete()
                return True
            return False

        if fully_shown:
            self._complete()
            return True
        return False

    def _complete(self) -> None:
        if self.resets_text:
            self.text = ""
        self.state = SessionState.COMPLETED

    def _signal_success(self) -> None:
        logger.debug("Print completed after %d ticks", self._ticks)
        self.printer._session_finished(self)
        self.printer.publish(StoryEvent.PRINT_COMPLETED, session=self)
        for callback in self._callbacks:
            callback(self)
        self._callbacks.clear()

    def _push(self) -> None:
        display = self.printer.display
        display.max_visible_characters = self.max_visible_characters
        display.text = self.text
        if self.printer.portraits is not None:
            self.printer.portraits.update_portraits(self.printer.participants, self.speaker)

    def _fire_commands_through(self, position: int) -> None:
        """Fire every pending command at or before `position`, leftmost first."""
        for offset in sorted(self.commands):
            if offset > position:
                break
            for content in self.commands.pop(offset):
                self.printer.trigger_tag_command(self, content)

    def _play_typing_sound(self) -> None:
        # Alternate characters only
        if self.sound_disabled or self.max_visible_characters % 2 == 0:
            return
        if self.speaker is not None:
            pitch = self.speaker.character.voice_pitch
        else:
            pitch = self.printer.config.speech_default_pitch
        self.printer.play_typing_sound(pitch)

    def __repr__(self) -> str:
        return (
            f"PrintSession(state={self.state.name}, "
            f"visible={self.max_visible_characters}/{len(self.text)})"
        )


def _silence(session: PrintSession, params: list[str]) -> None:
    session.sound_disabled = True


class TextPrinter:
    """
    Prints dialogue lines into a text display.

    Holds everything that outlives a single print: participants, the last
    speaker id, default policy settings and registered tag commands.
    Collaborators other than the display are optional.
    """

    def __init__(
        self,
        display: TextDisplay,
        config: Optional[PrinterConfig] = None,
        assets: Optional[AssetDatabase] = None,
        portraits: Optional[PortraitSink] = None,
        audio: Optional[AudioManager] = None,
        event_bus: Optional[EventBus] = None,
    ):
        self.display = display
        self.config = config or PrinterConfig()
        self.assets = assets
        self.portraits = portraits
        self.audio = audio
        self.event_bus = event_bus

        self.participants: list[Participant] = []
        # Lets consecutive prints by the same speaker omit the speaker id
        self.last_speaker: int = 0

        self._session: Optional[PrintSession] = None
        self._tag_commands: dict[str, TagCommand] = {"silent": _silence}

    # Settings

    @property
    def default_print_behaviour(self) -> PrintBehaviour:
        return self.config.default_print_behaviour

    @default_print_behaviour.setter
    def default_print_behaviour(self, behaviour: PrintBehaviour) -> None:
        self.config.default_print_behaviour = behaviour

    @property
    def default_delay_after_print(self) -> float:
        return self.config.default_delay_after_print

    @default_delay_after_print.setter
    def default_delay_after_print(self, delay: float) -> None:
        self.config.default_delay_after_print = delay

    def default_policy(self) -> PrintPolicy:
        behaviour = self.config.default_print_behaviour
        if behaviour is PrintBehaviour.DELAY:
            return Delay(self.config.default_delay_after_print)
        if behaviour is PrintBehaviour.IMMEDIATE:
            return Immediate()
        return Await()

    # Participants

    def set_participants(self, participant_names: str) -> list[Participant]:
        """Replace the participants from a comma-separated name string."""
        if self.assets is None:
            raise RuntimeError("TextPrinter has no asset database to resolve names with")
        self.participants = set_participants(participant_names, self.assets)
        logger.debug(
            "Participants: %s",
            [p.character.fullname for p in self.participants],
        )
        self.publish(StoryEvent.PARTICIPANTS_CHANGED, participants=self.participants)
        return self.participants

    def set_speaker(self, speaker_id: int, emotion: Optional[str] = None) -> Optional[Participant]:
        """
        Make a participant the current speaker without printing.

        Out-of-range ids are ignored.
        """
        speaker = resolve_speaker(self.participants, speaker_id)
        if speaker is None:
            logger.debug("Ignoring speaker id %d (%d participants)", speaker_id, len(self.participants))
            return None

        if emotion:
            speaker.emotion = emotion
        self.last_speaker = speaker_id
        if self.portraits is not None:
            self.portraits.update_portraits(self.participants, speaker)
        self.publish(StoryEvent.SPEAKER_CHANGED, speaker=speaker, speaker_id=speaker_id)
        return speaker

    # Printing

    @property
    def active_session(self) -> Optional[PrintSession]:
        return self._session

    @property
    def is_printing(self) -> bool:
        return self._session is not None

    def start_print(
        self,
        speaker_id: int,
        text: str,
        policy: Optional[PrintPolicy] = None,
    ) -> PrintSession:
        """
        Start printing `text`, or return the print already in progress.

        Args:
            speaker_id: Participant index, LAST_SPEAKER or NO_SPEAKER
            text: Raw dialogue text, tags included
            policy: Completion policy (default: from config)
        """
        if self._session is not None:
            return self._session

        if speaker_id == LAST_SPEAKER:
            speaker_id = self.last_speaker
        else:
            self.last_speaker = speaker_id

        speaker = resolve_speaker(self.participants, speaker_id)
        session = PrintSession(self, speaker, text, policy or self.default_policy())
        self._session = session

        logger.debug("Print started (%s): %r", session.behaviour.name, session.text)
        self.publish(StoryEvent.PRINT_STARTED, session=session, speaker=speaker)
        return session

    def _session_finished(self, session: PrintSession) -> None:
        if self._session is session:
            self._session = None

    # Tag commands

    def register_tag_command(self, name: str, handler: TagCommand) -> None:
        """
        Register an on-print tag command.

        `handler(session, params)` runs when the cursor reaches [name] or
        [name=p1;p2].
        """
        self._tag_commands[name] = handler

    def trigger_tag_command(self, session: PrintSession, content: str) -> None:
        """Run an on-print tag; unknown names are tried as speaker emotions."""
        name, params = parse_command(content)
        handler = self._tag_commands.get(name)
        if handler is not None:
            handler(session, params)
        else:
            self._change_speaker_emotion(session, name)
        self.publish(StoryEvent.TAG_TRIGGERED, session=session, name=name, params=params)

    def _change_speaker_emotion(self, session: PrintSession, emotion: str) -> None:
        speaker = session.speaker
        if speaker is not None and speaker.character.has_portrait(emotion):
            speaker.emotion = emotion
        else:
            logger.debug("Ignoring unknown print tag [%s]", emotion)

    # Collaborators

    def play_typing_sound(self, pitch: float) -> None:
        if self.audio is None:
            return
        sound = self.config.speech_sound
        path = self.assets.get_sound(sound) if self.assets is not None else None
        self.audio.play_sfx(path or sound, category="voice", pitch=pitch)

    def publish(self, event_type: StoryEvent, **data) -> None:
        if self.event_bus is not None:
            self.event_bus.publish(event_type, **data)
