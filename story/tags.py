"""
Tag processing for dialogue strings.

Dialogue text may carry bracketed tags that are resolved before printing.

Name tags are replaced with a participant's name:
    [0.firstname]   first name of participant 0
    [1.name]        speaker label (short name) of participant 1
    Fields: name, fullname, firstname, lastname, nickname.

On-print tags are removed from the text and fire when the reveal cursor
reaches the place they were removed from:
    [silent]            stop the typing sound for the rest of the print
    [happy]             switch the speaker to their "happy" portrait
    [command=p1;p2]     command with parameters

Tags do not nest. Malformed brackets are left in the text as best effort.
"""

from __future__ import annotations

import logging
import re
import string
from typing import TYPE_CHECKING, NamedTuple, Sequence

if TYPE_CHECKING:
    from story.participant import Participant

logger = logging.getLogger(__name__)

TAG_START = "["
TAG_END = "]"
PARAM_SEPARATOR = "="
PARAM_LIST_SEPARATOR = ";"

NAME_TAG_PATTERN = re.compile(r"(\d+)\.(.*)", re.ASCII | re.DOTALL)


class TagScan(NamedTuple):
    """Result of process_tags()."""
    text: str
    # Offset into `text` -> raw command contents, left to right
    commands: dict[int, list[str]]


def is_name_tag(content: str) -> bool:
    return bool(content) and content[0] in string.digits


def resolve_name_tag(content: str, participants: Sequence[Participant]) -> str:
    """
    Resolve "<index>.<field>" against the participant list.

    Out-of-range indices and unknown fields resolve to an empty string.
    """
    match = NAME_TAG_PATTERN.fullmatch(content)
    if not match:
        logger.debug("Malformed name tag [%s]", content)
        return ""

    index = int(match.group(1))
    if index >= len(participants):
        logger.debug("Name tag [%s] refers to missing participant %d", content, index)
        return ""

    # Anything after a second "." is ignored
    field = match.group(2).split(".")[0]
    name = participants[index].character.name_field(field)
    if name is None:
        logger.debug("Unknown name field in tag [%s]", content)
        return ""
    return name


def process_tags(text: str, participants: Sequence[Participant] = ()) -> TagScan:
    """
    Resolve name tags and extract on-print tags from a dialogue string.

    The string is scanned once from right to left, pairing every "]" with
    the nearest "[" before it. Each edit only touches the text from the
    tag's start onwards, so the part still to be scanned never moves, and
    every offset already recorded is shifted by the edit so it stays an
    offset into the final string.
    """
    result = text
    # [offset, content] pairs, leftmost first
    found: list[list] = []
    tag_end = -1

    for i in range(len(result) - 1, -1, -1):
        char = result[i]
        if char == TAG_END and tag_end == -1:
            tag_end = i
        elif char == TAG_START and tag_end != -1:
            content = result[i + 1:tag_end]
            name_tag = is_name_tag(content)
            inserted = resolve_name_tag(content, participants) if name_tag else ""

            result = result[:i] + inserted + result[tag_end + 1:]
            shift = len(inserted) - (tag_end + 1 - i)
            for entry in found:
                entry[0] += shift

            if not name_tag:
                found.insert(0, [i, content])
            tag_end = -1

    commands: dict[int, list[str]] = {}
    for offset, content in found:
        commands.setdefault(offset, []).append(content)
    return TagScan(result, commands)


def parse_command(content: str) -> tuple[str, list[str]]:
    """Split "name=p1;p2" into ("name", ["p1", "p2"])."""
    name, separator, params = content.partition(PARAM_SEPARATOR)
    if not separator:
        return name.strip(), []
    return name.strip(), params.split(PARAM_LIST_SEPARATOR)
