"""Error types raised (or returned) by the tracker."""

from __future__ import annotations


class TrackerError(Exception):
    """Base class for every error the tracker reports to the operator."""


class ParseError(TrackerError):
    """Raised when style text cannot be parsed.

    ``line`` and ``column`` are 1-based. ``context`` stays empty until the
    caller that owns the source text calls :meth:`attach_source`.
    """

    def __init__(
        self, reason: str, line: int | None = None, column: int | None = None
    ):
        self.reason = reason
        self.line = line
        self.column = column
        self.context: list[tuple[int, str]] = []
        super().__init__(reason)

    def attach_source(self, source: str, radius: int = 2) -> ParseError:
        """Capture the source lines surrounding the failure for diagnostics."""
        if self.line is None:
            return self
        lines = source.splitlines()
        first = max(1, self.line - radius)
        last = min(len(lines), self.line + radius)
        self.context = [(n, lines[n - 1]) for n in range(first, last + 1)]
        return self

    def __str__(self) -> str:
        text = self.reason
        if self.line is not None:
            text += f" (line {self.line}, column {self.column})"
        if self.context:
            width = len(str(self.context[-1][0]))
            excerpt = []
            for number, line in self.context:
                marker = ">" if number == self.line else " "
                excerpt.append(f"{marker} {number:>{width}} | {line}")
            text += "\n" + "\n".join(excerpt)
        return text


class PreconditionError(TrackerError):
    """Raised when an expected input (the override file) is missing."""


class CaptureError(TrackerError):
    """Raised when the page capture collaborator cannot deliver markup."""


class StoreError(TrackerError):
    """Raised when persisted change logs cannot be read or written."""


class SessionStateError(TrackerError):
    """A command arrived that the current session state does not allow."""

    def __init__(self, command: str, state: str, message: str | None = None):
        self.command = command
        self.state = state
        super().__init__(message or f"{command} is not allowed while {state}")
