"""Change records produced by the diff pipeline and their JSON shapes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

INITIAL = "initial"


class ChangeKind(StrEnum):
    ADDED = "added"
    REMOVED = "removed"
    MODIFIED = "modified"


@dataclass(frozen=True)
class PropertyChange:
    """One declaration-level difference between two snapshots.

    ``old_property``/``new_property`` hold declaration strings such as
    ``"color: red;"``. Exactly one side is None for additions and removals.
    """

    old_property: str | None
    new_property: str | None
    selector: str
    condition: str | None = None

    def __post_init__(self) -> None:
        if self.old_property is None and self.new_property is None:
            raise ValueError("PropertyChange needs an old or a new declaration")

    @property
    def kind(self) -> ChangeKind:
        if self.old_property is None:
            return ChangeKind.ADDED
        if self.new_property is None:
            return ChangeKind.REMOVED
        return ChangeKind.MODIFIED

    def to_dict(self) -> dict[str, Any]:
        return {
            "oldProperty": self.old_property,
            "newProperty": self.new_property,
            "selector": self.selector,
            "condition": self.condition,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PropertyChange:
        return cls(
            old_property=data.get("oldProperty"),
            new_property=data.get("newProperty"),
            selector=data["selector"],
            condition=data.get("condition"),
        )


@dataclass(frozen=True)
class ResponsiveChange:
    """A change reshaped as a per-breakpoint style delta.

    ``responsive_style`` is a mapping, the ``"initial"`` sentinel (the value
    is suppressed under the condition), or None.
    """

    selector: str
    default_style: dict[str, str] | None
    responsive_style: dict[str, str] | str | None

    def to_dict(self) -> dict[str, Any]:
        return {
            "selector": self.selector,
            "defaultStyle": self.default_style,
            "responsiveStyle": self.responsive_style,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ResponsiveChange:
        return cls(
            selector=data["selector"],
            default_style=data.get("defaultStyle"),
            responsive_style=data.get("responsiveStyle"),
        )


@dataclass(frozen=True)
class ResponsiveEntry:
    """All changes recorded under one named breakpoint."""

    media_match: str
    changes: tuple[ResponsiveChange, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "mediaMatch": self.media_match,
            "changes": [c.to_dict() for c in self.changes],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ResponsiveEntry:
        return cls(
            media_match=data["mediaMatch"],
            changes=tuple(ResponsiveChange.from_dict(c) for c in data.get("changes", [])),
        )
