"""Line-oriented operator commands: RD, FD, RM, FM(<label>), quit()."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum

__all__ = ["Command", "CommandName", "HELP", "parse_command"]

HELP = """Commands:
  RD             start recording default changes
  FD             finish default recording
  RM             start recording media (breakpoint) changes
  FM(<label>)    finish media recording under <label>, e.g. FM(max-width: 768px)
  quit()         stop the tracker"""

_FINISH_MEDIA_RE = re.compile(r"^FM\((?P<label>.*)\)$", re.DOTALL)


class CommandName(StrEnum):
    RECORD_DEFAULT = "RD"
    FINISH_DEFAULT = "FD"
    RECORD_MEDIA = "RM"
    FINISH_MEDIA = "FM"
    QUIT = "quit"
    EMPTY = ""
    UNKNOWN = "?"


@dataclass(frozen=True)
class Command:
    name: CommandName
    argument: str | None = None
    text: str = ""


_SIMPLE = {
    "RD": CommandName.RECORD_DEFAULT,
    "FD": CommandName.FINISH_DEFAULT,
    "RM": CommandName.RECORD_MEDIA,
    "quit()": CommandName.QUIT,
    "quit": CommandName.QUIT,
}


def parse_command(line: str) -> Command:
    """Parse one input line. Never raises; unrecognized text is UNKNOWN."""
    text = line.strip()
    if not text:
        return Command(CommandName.EMPTY)
    if text in _SIMPLE:
        return Command(_SIMPLE[text], text=text)
    match = _FINISH_MEDIA_RE.match(text)
    if match:
        return Command(CommandName.FINISH_MEDIA, argument=match.group("label").strip(), text=text)
    return Command(CommandName.UNKNOWN, text=text)
