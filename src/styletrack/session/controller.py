"""Session controller: the record -> finish -> rebase state machine."""

from __future__ import annotations

import logging
from typing import Callable

from styletrack.config import TrackerConfig
from styletrack.css.extract import extract_style_content
from styletrack.css.normalize import canonicalize
from styletrack.diff.noise import line_diff
from styletrack.diff.pipeline import Comparison, compare_snapshots
from styletrack.diff.responsive import project_changes
from styletrack.errors import ParseError, SessionStateError, TrackerError
from styletrack.events import types as events
from styletrack.events.bus import EventBus
from styletrack.model.change import ResponsiveEntry
from styletrack.model.session import (
    SessionKind,
    SessionResult,
    SessionState,
    Status,
    session_tag,
)
from styletrack.model.snapshot import StyleSnapshot
from styletrack.session.capture import PageCapture, open_capture
from styletrack.session.sources import CandidateSource, LiveCaptureSource, OverrideFileSource
from styletrack.session.store import BASELINE_FILE, CANDIDATE_FILE, ChangeStore

logger = logging.getLogger(__name__)

# Records a finished comparison and returns the result plus the file written.
_Recorder = Callable[[Comparison], tuple[SessionResult, str]]


class SessionController:
    """Owns the baseline snapshot, the session state, and the collaborators.

    States: IDLE -> RECORDING_DEFAULT | RECORDING_MEDIA -> IDLE. Commands
    that do not fit the current state are rejected and logged; they never
    raise. Finishing a session always returns to IDLE, and the baseline is
    only replaced once the session's changes are on disk.
    """

    def __init__(
        self,
        capture: PageCapture,
        source: CandidateSource,
        store: ChangeStore,
        *,
        event_bus: EventBus | None = None,
    ) -> None:
        self.capture = capture
        self.source = source
        self.store = store
        self.event_bus = event_bus or EventBus()
        self._state = SessionState.IDLE
        self._baseline: StyleSnapshot | None = None
        self._closed = False

    @classmethod
    def from_config(
        cls, config: TrackerConfig, *, event_bus: EventBus | None = None
    ) -> SessionController:
        capture = open_capture(config)
        source: CandidateSource
        if config.overrides_path:
            source = OverrideFileSource(config.overrides_path)
        else:
            source = LiveCaptureSource(capture)
        return cls(capture, source, ChangeStore(config.data_dir), event_bus=event_bus)

    # --- state ------------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def baseline(self) -> StyleSnapshot | None:
        return self._baseline

    @property
    def is_recording(self) -> bool:
        return self._state is not SessionState.IDLE

    @property
    def closed(self) -> bool:
        return self._closed

    # --- lifecycle --------------------------------------------------------------

    def start(self, *, clean: bool = False) -> StyleSnapshot:
        """Capture the page and take its styles as the first baseline.

        Raises TrackerError subclasses: there is no session to fall back to yet.
        """
        if clean:
            self.store.reset()
            self.source.clear()
        baseline = self._snapshot(self.capture.content())
        self.store.write_snapshot(BASELINE_FILE, baseline.canonical_text)
        self._baseline = baseline
        logger.info("Baseline captured: %d rules", len(baseline))
        self.event_bus.emit(events.BaselineCaptured(rule_count=len(baseline)))
        return baseline

    def quit(self) -> None:
        """Close the capture collaborator and drop the working files."""
        if self._closed:
            return
        self._closed = True
        self._state = SessionState.IDLE
        try:
            self.capture.close()
        finally:
            self.store.discard_snapshots()
        self.event_bus.emit(events.TrackerStopped())

    # --- commands ---------------------------------------------------------------

    def record_default(self) -> SessionResult:
        return self._begin("RD", SessionState.RECORDING_DEFAULT, session_tag(SessionKind.DEFAULT))

    def record_media(self) -> SessionResult:
        tag = session_tag(SessionKind.MEDIA)
        result = self._begin("RM", SessionState.RECORDING_MEDIA, tag)
        if not result.succeeded:
            return result
        # The live page must show the current baseline before overrides go in.
        try:
            self.capture.reload()
        except TrackerError as exc:
            self._state = SessionState.IDLE
            return self._fail(tag, exc)
        return result

    def finish_default(self) -> SessionResult:
        if self._state is not SessionState.RECORDING_DEFAULT:
            return self._reject("FD", "no default recording session is active")
        return self._finish(session_tag(SessionKind.DEFAULT), self._record_default)

    def finish_media(self, label: str | None) -> SessionResult:
        if self._state is not SessionState.RECORDING_MEDIA:
            return self._reject("FM", "no media recording session is active")
        label = (label or "").strip()
        if not label:
            return self._reject("FM", "a media condition is required, e.g. FM(max-width: 768px)")

        def record(comparison: Comparison) -> tuple[SessionResult, str]:
            entry = ResponsiveEntry(media_match=label, changes=project_changes(comparison.filtered))
            path = self.store.append_responsive(entry)
            result = SessionResult(
                Status.SUCCESS,
                tag=session_tag(SessionKind.MEDIA, label),
                changes=comparison.filtered,
                entry=entry,
            )
            return result, str(path)

        return self._finish(session_tag(SessionKind.MEDIA, label), record)

    # --- internals --------------------------------------------------------------

    def _snapshot(self, markup: str) -> StyleSnapshot:
        css = extract_style_content(markup)
        try:
            return canonicalize(css)
        except ParseError as exc:
            raise exc.attach_source(css)

    def _reject(self, command: str, reason: str) -> SessionResult:
        error = SessionStateError(command, self._state.value, reason)
        logger.warning("Rejected %s in state %s: %s", command, self._state.value, reason)
        self.event_bus.emit(events.SessionRejected(command=command, reason=reason))
        return SessionResult(Status.REJECTED, error=error)

    def _fail(self, tag: str, error: TrackerError) -> SessionResult:
        logger.error("Session %s failed: %s", tag, error)
        self.event_bus.emit(events.SessionFailed(tag=tag, error=str(error)))
        return SessionResult(Status.FAILED, tag=tag, error=error)

    def _begin(self, command: str, state: SessionState, tag: str) -> SessionResult:
        if self._closed:
            return self._reject(command, "the tracker has been stopped")
        if self._baseline is None:
            return self._reject(command, "no baseline has been captured yet")
        if self._state is not SessionState.IDLE:
            return self._reject(command, f"a session is already active ({self._state.value})")
        self._state = state
        logger.info("Session %s started", tag)
        self.event_bus.emit(events.SessionStarted(tag=tag))
        return SessionResult(Status.SUCCESS, tag=tag)

    def _record_default(self, comparison: Comparison) -> tuple[SessionResult, str]:
        path = self.store.append_changes(comparison.filtered)
        result = SessionResult(Status.SUCCESS, tag=session_tag(SessionKind.DEFAULT), changes=comparison.filtered)
        return result, str(path)

    def _finish(self, tag: str, record: _Recorder) -> SessionResult:
        assert self._baseline is not None
        try:
            candidate = self._snapshot(self.source.fetch())
            self.store.write_snapshot(CANDIDATE_FILE, candidate.canonical_text)
            comparison = compare_snapshots(self._baseline, candidate)
            for sign, line in line_diff(self._baseline.canonical_text, candidate.canonical_text):
                logger.debug("%s %s", sign, line)
            result, path = record(comparison)
            self.event_bus.emit(
                events.ChangesRecorded(
                    tag=tag, count=len(comparison.filtered), dropped=comparison.dropped, path=path
                )
            )
            self._rebase(candidate)
        except TrackerError as exc:
            return self._fail(tag, exc)
        finally:
            self._state = SessionState.IDLE
            self.store.discard_snapshot(CANDIDATE_FILE)
        return result

    def _rebase(self, candidate: StyleSnapshot) -> None:
        self.store.write_snapshot(BASELINE_FILE, candidate.canonical_text)
        self._baseline = candidate
        self.event_bus.emit(events.BaselineRebased(rule_count=len(candidate)))
