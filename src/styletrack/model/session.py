"""Session model: recording states and the result of each controller command."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, StrEnum

from styletrack.errors import TrackerError
from styletrack.model.change import PropertyChange, ResponsiveEntry


class SessionState(Enum):
    """States of the recording state machine."""

    IDLE = "idle"
    RECORDING_DEFAULT = "recording_default"
    RECORDING_MEDIA = "recording_media"


class SessionKind(StrEnum):
    DEFAULT = "default"
    MEDIA = "media"


def session_tag(kind: SessionKind, label: str | None = None) -> str:
    """Tag a recording cycle: ``default`` or ``media:<label>``."""
    if kind is SessionKind.MEDIA:
        return f"media:{label or ''}"
    return kind.value


class Status(Enum):
    """How a controller command ended."""

    SUCCESS = "success"
    REJECTED = "rejected"
    FAILED = "failed"


@dataclass
class SessionResult:
    """What a controller command did, returned instead of raising."""

    status: Status
    tag: str = ""
    changes: list[PropertyChange] = field(default_factory=list)
    entry: ResponsiveEntry | None = None
    error: TrackerError | None = None

    @property
    def succeeded(self) -> bool:
        return self.status is Status.SUCCESS

    @property
    def rejected(self) -> bool:
        return self.status is Status.REJECTED

    @property
    def failed(self) -> bool:
        return self.status is Status.FAILED
