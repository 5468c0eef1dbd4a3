"""Lookup table from canonical (selector, condition) to the rule owning it."""

from __future__ import annotations

from dataclasses import dataclass

from styletrack.css.keys import normalize_condition, normalize_selector
from styletrack.model.snapshot import Rule, StyleSnapshot

__all__ = ["RuleIndex", "RuleKey", "build_index", "rule_key"]


@dataclass(frozen=True)
class RuleKey:
    selector: str
    condition: str | None

    def __str__(self) -> str:
        return f"{self.selector}@@{self.condition if self.condition is not None else 'null'}"


RuleIndex = dict[RuleKey, Rule]


def rule_key(rule: Rule) -> RuleKey:
    return RuleKey(normalize_selector(rule.selector), normalize_condition(rule.condition))


def build_index(snapshot: StyleSnapshot) -> RuleIndex:
    """Index the snapshot's rules in document order.

    A later rule with an equal key replaces the earlier one, whose
    declarations then never reach the diff.
    """
    index: RuleIndex = {}
    for rule in snapshot.rules:
        index[rule_key(rule)] = rule
    return index
