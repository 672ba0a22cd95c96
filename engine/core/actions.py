"""
Input action definitions.

Actions abstract raw input (keys, mouse buttons, gamepad buttons) into
semantic actions. Dialogue code asks "was CONFIRM pressed this frame", never
"was the left mouse button pressed".

Usage:
    if input.is_action_just_pressed(Action.CONFIRM):
        ...
"""

from enum import Enum, auto

import pygame


class Action(Enum):
    """Semantic input actions used while dialogue is on screen."""

    CONFIRM = auto()


DEFAULT_KEY_BINDINGS: dict[Action, list[int]] = {
    Action.CONFIRM: [pygame.K_RETURN, pygame.K_SPACE, pygame.K_z],
}

# pygame numbers mouse buttons from 1 (left)
DEFAULT_MOUSE_BINDINGS: dict[Action, list[int]] = {
    Action.CONFIRM: [1],
}

# SDL controller layout
DEFAULT_GAMEPAD_BINDINGS: dict[Action, list[int]] = {
    Action.CONFIRM: [0],  # A
}
