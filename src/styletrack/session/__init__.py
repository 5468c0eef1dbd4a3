"""Recording sessions: controller, capture, candidate sources, persistence."""

from styletrack.session.capture import HttpCapture, PageCapture, PlaywrightCapture, open_capture
from styletrack.session.controller import SessionController
from styletrack.session.sources import CandidateSource, LiveCaptureSource, OverrideFileSource
from styletrack.session.store import ChangeStore

__all__ = [
    "SessionController",
    "PageCapture",
    "PlaywrightCapture",
    "HttpCapture",
    "open_capture",
    "CandidateSource",
    "OverrideFileSource",
    "LiveCaptureSource",
    "ChangeStore",
]
