"""The full comparison of two snapshots: index, diff, then filter."""

from __future__ import annotations

from dataclasses import dataclass, field

from styletrack.css.index import build_index
from styletrack.diff.engine import diff_indexes
from styletrack.diff.noise import changed_lines, filter_changes
from styletrack.model.change import PropertyChange
from styletrack.model.snapshot import StyleSnapshot


@dataclass(frozen=True)
class Comparison:
    """Structural changes before and after the noise filter."""

    raw: list[PropertyChange] = field(default_factory=list)
    filtered: list[PropertyChange] = field(default_factory=list)

    @property
    def dropped(self) -> int:
        return len(self.raw) - len(self.filtered)


def compare_snapshots(baseline: StyleSnapshot, candidate: StyleSnapshot) -> Comparison:
    raw = diff_indexes(build_index(baseline), build_index(candidate))
    lines = changed_lines(baseline.canonical_text, candidate.canonical_text)
    return Comparison(raw=raw, filtered=filter_changes(raw, lines))
