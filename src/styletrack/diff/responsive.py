"""Reshape generic change records into per-breakpoint style deltas."""

from __future__ import annotations

from collections.abc import Iterable

from styletrack.model.change import INITIAL, PropertyChange, ResponsiveChange

__all__ = ["parse_declaration", "project_change", "project_changes"]


def parse_declaration(text: str) -> dict[str, str]:
    """Turn ``"color: red;"`` (or its ``/* color: red; */`` marker) into ``{"color": "red"}``."""
    body = text.strip()
    if body.startswith("/*") and body.endswith("*/"):
        body = body[2:-2].strip()
    body = body.rstrip(";").strip()
    prop, sep, value = body.partition(":")
    if not sep:
        raise ValueError(f"Not a declaration: {text!r}")
    return {prop.strip(): value.strip()}


def project_change(change: PropertyChange) -> ResponsiveChange:
    default_style = parse_declaration(change.old_property) if change.old_property else None
    if change.new_property:
        responsive_style: dict[str, str] | str | None = parse_declaration(change.new_property)
    elif change.old_property:
        # Removed under the condition: the value outside it applies again.
        responsive_style = INITIAL
    else:
        responsive_style = None
    return ResponsiveChange(
        selector=change.selector,
        default_style=default_style,
        responsive_style=responsive_style,
    )


def project_changes(changes: Iterable[PropertyChange]) -> tuple[ResponsiveChange, ...]:
    return tuple(project_change(c) for c in changes)
