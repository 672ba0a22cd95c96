"""
Input handler with action-based abstraction.

Translates raw pygame keyboard, mouse and gamepad events into semantic
Actions. Input is sampled, never awaited: the game loop feeds events through
process_event() and calls update() once per frame, after which
is_action_just_pressed() answers for that frame only.

Usage:
    for event in pygame.event.get():
        input.process_event(event)
    input.update()

    if input.is_action_just_pressed(Action.CONFIRM):
        ...
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

import pygame

from engine.core.actions import (
    Action,
    DEFAULT_KEY_BINDINGS,
    DEFAULT_MOUSE_BINDINGS,
    DEFAULT_GAMEPAD_BINDINGS,
)
from engine.core.events import EventBus


class InputEvent(Enum):
    """Input-specific events."""
    ACTION_PRESSED = "input.action_pressed"
    ACTION_RELEASED = "input.action_released"


@dataclass
class InputState:
    """Input state for the current frame."""
    actions_pressed: set[Action] = field(default_factory=set)
    actions_just_pressed: set[Action] = field(default_factory=set)
    actions_just_released: set[Action] = field(default_factory=set)

    # Raw sources currently held, per device
    keys_pressed: set[int] = field(default_factory=set)
    mouse_buttons_pressed: set[int] = field(default_factory=set)
    gamepad_buttons_pressed: set[int] = field(default_factory=set)


class InputHandler:
    """
    Handles input processing for dialogue screens.

    An action stays pressed while any source bound to it is held, so
    holding Space and clicking at once still counts as a single press.
    """

    def __init__(self, event_bus: EventBus | None = None):
        self.event_bus = event_bus

        self._state = InputState()
        self._prev_actions: set[Action] = set()

        self._key_bindings = {a: list(k) for a, k in DEFAULT_KEY_BINDINGS.items()}
        self._mouse_bindings = {a: list(b) for a, b in DEFAULT_MOUSE_BINDINGS.items()}
        self._gamepad_bindings = {a: list(b) for a, b in DEFAULT_GAMEPAD_BINDINGS.items()}

        self._gamepads: dict[int, pygame.joystick.JoystickType] = {}
        pygame.joystick.init()
        self._refresh_gamepads()

    def _refresh_gamepads(self) -> None:
        self._gamepads.clear()
        for i in range(pygame.joystick.get_count()):
            joy = pygame.joystick.Joystick(i)
            joy.init()
            self._gamepads[joy.get_instance_id()] = joy

    # Public API

    def is_action_pressed(self, action: Action) -> bool:
        """Check if an action is currently held down."""
        return action in self._state.actions_pressed

    def is_action_just_pressed(self, action: Action) -> bool:
        """Check if an action was pressed since the previous update()."""
        return action in self._state.actions_just_pressed

    def is_action_just_released(self, action: Action) -> bool:
        return action in self._state.actions_just_released

    # Binding management

    def bind_key(self, action: Action, key: int) -> None:
        keys = self._key_bindings.setdefault(action, [])
        if key not in keys:
            keys.append(key)

    def unbind_key(self, action: Action, key: int) -> None:
        if key in self._key_bindings.get(action, []):
            self._key_bindings[action].remove(key)

    def get_bindings(self, action: Action) -> list[int]:
        """Get all key bindings for an action."""
        return list(self._key_bindings.get(action, []))

    # Frame update

    def process_event(self, event: pygame.event.Event) -> None:
        """Process a pygame event."""
        if event.type == pygame.KEYDOWN:
            self._state.keys_pressed.add(event.key)
        elif event.type == pygame.KEYUP:
            self._state.keys_pressed.discard(event.key)
        elif event.type == pygame.MOUSEBUTTONDOWN:
            self._state.mouse_buttons_pressed.add(event.button)
        elif event.type == pygame.MOUSEBUTTONUP:
            self._state.mouse_buttons_pressed.discard(event.button)
        elif event.type == pygame.JOYBUTTONDOWN:
            self._state.gamepad_buttons_pressed.add(event.button)
        elif event.type == pygame.JOYBUTTONUP:
            self._state.gamepad_buttons_pressed.discard(event.button)
        elif event.type in (pygame.JOYDEVICEADDED, pygame.JOYDEVICEREMOVED):
            self._refresh_gamepads()
        else:
            return

        self._recompute_actions()

    def update(self) -> None:
        """
        Advance to a new frame.

        Call once per frame, after all events of the frame were processed.
        """
        pressed = self._state.actions_pressed
        self._state.actions_just_pressed = pressed - self._prev_actions
        self._state.actions_just_released = self._prev_actions - pressed

        if self.event_bus:
            for action in self._state.actions_just_pressed:
                self.event_bus.publish(InputEvent.ACTION_PRESSED, action=action)
            for action in self._state.actions_just_released:
                self.event_bus.publish(InputEvent.ACTION_RELEASED, action=action)

        self._prev_actions = pressed.copy()

    def _recompute_actions(self) -> None:
        state = self._state
        sources = (
            (self._key_bindings, state.keys_pressed),
            (self._mouse_bindings, state.mouse_buttons_pressed),
            (self._gamepad_bindings, state.gamepad_buttons_pressed),
        )
        active: set[Action] = set()
        for bindings, held in sources:
            for action, inputs in bindings.items():
                if held.intersection(inputs):
                    active.add(action)
        state.actions_pressed = active
