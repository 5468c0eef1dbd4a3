"""styletrack model layer -- public type re-exports."""

from styletrack.model.change import (
    INITIAL,
    ChangeKind,
    PropertyChange,
    ResponsiveChange,
    ResponsiveEntry,
)
from styletrack.model.session import (
    SessionKind,
    SessionResult,
    SessionState,
    Status,
    session_tag,
)
from styletrack.model.snapshot import Declaration, Rule, StyleSnapshot

__all__ = [
    # snapshot
    "Declaration",
    "Rule",
    "StyleSnapshot",
    # change
    "INITIAL",
    "ChangeKind",
    "PropertyChange",
    "ResponsiveChange",
    "ResponsiveEntry",
    # session
    "SessionKind",
    "SessionState",
    "Status",
    "SessionResult",
    "session_tag",
]
