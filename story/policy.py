"""
Print completion policies.

Every print is governed by exactly one policy, fixed when the print starts:
    Await()       - wait for the player to confirm
    Delay(2.0)    - hold the finished text for a while, then complete
    Immediate()   - show everything at once and complete on the first tick

Dialogue scripts select a policy with a single numeric delay argument where
-1 means await and -2 means immediate. Those sentinels are only understood
by behaviour_from_delay(), at the script boundary.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Optional, Union

# Speaker id sentinels (valid ids are >= 0)
LAST_SPEAKER = -1
NO_SPEAKER = -2

# Delay argument sentinels
AWAIT_DELAY = -1.0
IMMEDIATE_DELAY = -2.0


class PrintBehaviour(Enum):
    """Policy kind. Values follow the numbering used by dialogue scripts."""
    AWAIT = 0
    DELAY = 1
    IMMEDIATE = 2


@dataclass(frozen=True)
class Await:
    behaviour: ClassVar[PrintBehaviour] = PrintBehaviour.AWAIT


@dataclass(frozen=True)
class Delay:
    duration: float
    behaviour: ClassVar[PrintBehaviour] = PrintBehaviour.DELAY


@dataclass(frozen=True)
class Immediate:
    behaviour: ClassVar[PrintBehaviour] = PrintBehaviour.IMMEDIATE


PrintPolicy = Union[Await, Delay, Immediate]


def behaviour_from_delay(delay: float) -> PrintPolicy:
    """Convert a script delay argument to a policy."""
    if delay == AWAIT_DELAY:
        return Await()
    if delay == IMMEDIATE_DELAY:
        return Immediate()
    return Delay(float(delay))


def parse_behaviour(value: int | str) -> Optional[PrintBehaviour]:
    """
    Parse a behaviour given as its script number or name
    ("await", "delay", "immediate", any case). Returns None if unknown.
    """
    if isinstance(value, str):
        try:
            return PrintBehaviour[value.strip().upper()]
        except KeyError:
            return None
    try:
        return PrintBehaviour(value)
    except ValueError:
        return None
