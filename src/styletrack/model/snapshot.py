"""Snapshot model: Declaration, Rule, and StyleSnapshot dataclasses."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Declaration:
    """A single ``property: value`` pair inside a rule.

    ``disabled`` marks a declaration that only survives as a comment
    (``/* color: red; */``), the form dev tools write when a property is
    unchecked.
    """

    property: str
    value: str
    important: bool = False
    disabled: bool = False

    def __str__(self) -> str:
        suffix = " !important" if self.important else ""
        return f"{self.property}: {self.value}{suffix};"

    def render(self) -> str:
        """Canonical source form, comment-wrapped when disabled."""
        if self.disabled:
            return f"/* {self} */"
        return str(self)


@dataclass(frozen=True)
class Rule:
    """A flat style rule.

    ``condition`` is the serialized text of the nearest enclosing conditional
    block (``(max-width: 600px)``, ``@supports (display: grid)``), or None
    for unconditional rules.
    """

    selector: str
    condition: str | None
    declarations: tuple[Declaration, ...] = ()

    @property
    def live_declarations(self) -> tuple[Declaration, ...]:
        return tuple(d for d in self.declarations if not d.disabled)


@dataclass(frozen=True)
class StyleSnapshot:
    """One captured state of a page's style sheet.

    ``canonical_text`` feeds the line diff; ``rules`` feeds the structural
    diff. Both come from the same parse.
    """

    raw_text: str
    canonical_text: str
    rules: tuple[Rule, ...] = ()

    def __len__(self) -> int:
        return len(self.rules)
