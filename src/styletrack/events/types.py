"""Event types emitted by the session controller."""

from dataclasses import dataclass


@dataclass(frozen=True)
class BaselineCaptured:
    rule_count: int


@dataclass(frozen=True)
class SessionStarted:
    tag: str


@dataclass(frozen=True)
class SessionRejected:
    command: str
    reason: str


@dataclass(frozen=True)
class SessionFailed:
    tag: str
    error: str


@dataclass(frozen=True)
class ChangesRecorded:
    tag: str
    count: int
    dropped: int
    path: str


@dataclass(frozen=True)
class BaselineRebased:
    rule_count: int


@dataclass(frozen=True)
class TrackerStopped:
    pass


def describe(event: object) -> str:
    """One-line operator-facing description of an event."""
    if isinstance(event, BaselineCaptured):
        return f"Original styles snapshot complete ({event.rule_count} rules)"
    if isinstance(event, SessionStarted):
        return f"Recording {event.tag} changes..."
    if isinstance(event, SessionRejected):
        return f"Ignored {event.command}: {event.reason}"
    if isinstance(event, SessionFailed):
        return f"Session {event.tag} failed: {event.error}"
    if isinstance(event, ChangesRecorded):
        text = f"Recorded {event.count} {event.tag} change(s) to {event.path}"
        if event.dropped:
            text += f" ({event.dropped} unconfirmed by the line diff)"
        return text
    if isinstance(event, BaselineRebased):
        return f"Baseline updated ({event.rule_count} rules)"
    if isinstance(event, TrackerStopped):
        return "Tracker stopped."
    return repr(event)
