"""Where the edited ("candidate") markup comes from at the end of a session."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Protocol

from styletrack.errors import PreconditionError
from styletrack.session.capture import PageCapture

logger = logging.getLogger(__name__)


class CandidateSource(Protocol):
    """Protocol for collaborators that deliver the edited page markup."""

    def fetch(self) -> str: ...

    def clear(self) -> None: ...


class OverrideFileSource:
    """Reads the file the browser's local-overrides feature saves edits to."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def fetch(self) -> str:
        if not self.path.exists():
            raise PreconditionError(
                f"Overrides file not found at {self.path}. Make sure changes are saved."
            )
        logger.info("Reading overrides from %s", self.path)
        try:
            return self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise PreconditionError(f"Cannot read overrides file {self.path}: {exc}") from exc

    def clear(self) -> None:
        """Empty the folder holding the override so stale edits are not diffed."""
        folder = self.path.parent
        if not folder.is_dir():
            return
        if folder.resolve() == Path.cwd().resolve():
            # Never empty the working directory; drop just the override.
            self.path.unlink(missing_ok=True)
            return
        for child in folder.iterdir():
            if child.is_dir():
                shutil.rmtree(child)
            else:
                child.unlink()
        logger.info("Cleared overrides folder %s", folder)


class LiveCaptureSource:
    """Takes the candidate straight from the capture collaborator."""

    def __init__(self, capture: PageCapture) -> None:
        self.capture = capture

    def fetch(self) -> str:
        return self.capture.content()

    def clear(self) -> None:
        pass
