"""Cross-check structural changes against a literal line diff.

Canonicalization can move or reformat declarations that were never edited.
Only changes whose declaration text also shows up as a changed line in the
diff of the two canonical texts survive.
"""

from __future__ import annotations

import difflib
import re
from collections.abc import Iterable, Iterator

from styletrack.model.change import PropertyChange

__all__ = ["changed_lines", "filter_changes", "line_diff", "normalize_line"]

_WS_RE = re.compile(r"\s+")


def normalize_line(line: str) -> str:
    return _WS_RE.sub(" ", line.strip()).lower()


def line_diff(baseline_text: str, candidate_text: str) -> Iterator[tuple[str, str]]:
    """Yield ``("-", line)`` / ``("+", line)`` for every non-blank changed line."""
    old = baseline_text.splitlines()
    new = candidate_text.splitlines()
    # Ratcliff/Obershelp, not a minimal LCS diff. Repeated lines may align
    # differently than an LCS would; callers match by line text, not position.
    matcher = difflib.SequenceMatcher(None, old, new, autojunk=False)
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "equal":
            continue
        for line in old[i1:i2]:
            if line.strip():
                yield "-", line
        for line in new[j1:j2]:
            if line.strip():
                yield "+", line


def changed_lines(baseline_text: str, candidate_text: str) -> set[str]:
    return {normalize_line(line) for _, line in line_diff(baseline_text, candidate_text)}


def filter_changes(changes: Iterable[PropertyChange], lines: set[str]) -> list[PropertyChange]:
    """Keep changes with at least one declaration present in ``lines``."""
    kept: list[PropertyChange] = []
    for change in changes:
        sides = (change.old_property, change.new_property)
        if any(side is not None and normalize_line(side) in lines for side in sides):
            kept.append(change)
    return kept
