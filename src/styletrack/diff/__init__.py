"""Diff pipeline: structural diff, noise filter, responsive projection."""

from styletrack.diff.engine import diff_indexes, diff_rule
from styletrack.diff.noise import changed_lines, filter_changes, line_diff
from styletrack.diff.pipeline import Comparison, compare_snapshots
from styletrack.diff.responsive import parse_declaration, project_change, project_changes

__all__ = [
    "diff_indexes",
    "diff_rule",
    "changed_lines",
    "filter_changes",
    "line_diff",
    "Comparison",
    "compare_snapshots",
    "parse_declaration",
    "project_change",
    "project_changes",
]
