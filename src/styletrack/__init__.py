"""styletrack: turn live style edits into structured change records."""

from __future__ import annotations

__version__ = "0.1.0"

from styletrack.config import TrackerConfig
from styletrack.session.controller import SessionController

__all__ = [
    "__version__",
    "TrackerConfig",
    "SessionController",
]
