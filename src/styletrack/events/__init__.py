"""Event system: bus and event types for the tracking session lifecycle."""

from styletrack.events.bus import EventBus
from styletrack.events.types import (
    BaselineCaptured,
    BaselineRebased,
    ChangesRecorded,
    SessionFailed,
    SessionRejected,
    SessionStarted,
    TrackerStopped,
    describe,
)

__all__ = [
    "EventBus",
    "BaselineCaptured",
    "BaselineRebased",
    "ChangesRecorded",
    "SessionFailed",
    "SessionRejected",
    "SessionStarted",
    "TrackerStopped",
    "describe",
]
