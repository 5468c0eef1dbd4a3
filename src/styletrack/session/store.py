"""JSON persistence for the change logs and the working style sheets."""

from __future__ import annotations

import json
import logging
import shutil
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from styletrack.errors import StoreError
from styletrack.model.change import PropertyChange, ResponsiveEntry

logger = logging.getLogger(__name__)

CHANGES_FILE = "changed_properties.json"
RESPONSIVE_FILE = "responsive_changes.json"
BASELINE_FILE = "baseline.css"
CANDIDATE_FILE = "candidate.css"
SNAPSHOT_FILES = (BASELINE_FILE, CANDIDATE_FILE)


class ChangeStore:
    """Append-only change logs under one data directory.

    Appending reads the existing array back and rewrites it whole, so the
    files are valid JSON after every session.
    """

    def __init__(self, data_dir: str | Path) -> None:
        self.data_dir = Path(data_dir)

    @property
    def changes_path(self) -> Path:
        return self.data_dir / CHANGES_FILE

    @property
    def responsive_path(self) -> Path:
        return self.data_dir / RESPONSIVE_FILE

    # --- logs -----------------------------------------------------------------

    def _read(self, path: Path) -> list[dict[str, Any]]:
        if not path.exists():
            return []
        try:
            data = json.loads(path.read_text(encoding="utf-8") or "[]")
        except (OSError, ValueError) as exc:
            raise StoreError(f"Cannot read {path}: {exc}") from exc
        if not isinstance(data, list):
            raise StoreError(f"Expected a JSON array in {path}")
        return data

    def _append(self, path: Path, records: list[dict[str, Any]]) -> Path:
        existing = self._read(path)
        existing.extend(records)
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(existing, indent=2), encoding="utf-8")
        except OSError as exc:
            raise StoreError(f"Cannot write {path}: {exc}") from exc
        logger.info("Appended %d record(s) to %s", len(records), path)
        return path

    def append_changes(self, changes: Iterable[PropertyChange]) -> Path:
        return self._append(self.changes_path, [c.to_dict() for c in changes])

    def append_responsive(self, entry: ResponsiveEntry) -> Path:
        return self._append(self.responsive_path, [entry.to_dict()])

    def changes(self) -> list[PropertyChange]:
        return [PropertyChange.from_dict(d) for d in self._read(self.changes_path)]

    def responsive_entries(self) -> list[ResponsiveEntry]:
        return [ResponsiveEntry.from_dict(d) for d in self._read(self.responsive_path)]

    # --- working files ----------------------------------------------------------

    def write_snapshot(self, name: str, text: str) -> Path:
        path = self.data_dir / name
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding="utf-8")
        except OSError as exc:
            raise StoreError(f"Cannot write {path}: {exc}") from exc
        return path

    def discard_snapshot(self, name: str) -> None:
        (self.data_dir / name).unlink(missing_ok=True)

    def discard_snapshots(self) -> None:
        for name in SNAPSHOT_FILES:
            self.discard_snapshot(name)

    def reset(self) -> None:
        """Empty the data directory, logs included."""
        if self.data_dir.exists():
            shutil.rmtree(self.data_dir)
        self.data_dir.mkdir(parents=True, exist_ok=True)
        logger.info("Emptied data directory %s", self.data_dir)
