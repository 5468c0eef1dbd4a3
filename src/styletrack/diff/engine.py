"""Declaration-level structural diff between two rule indexes."""

from __future__ import annotations

from styletrack.css.index import RuleIndex
from styletrack.model.change import PropertyChange
from styletrack.model.snapshot import Declaration, Rule

__all__ = ["diff_indexes", "diff_rule"]


def _change(old: Declaration | None, new: Declaration | None, rule: Rule) -> PropertyChange:
    return PropertyChange(
        old_property=old.render() if old is not None else None,
        new_property=new.render() if new is not None else None,
        selector=rule.selector,
        condition=rule.condition,
    )


def diff_rule(baseline: Rule, candidate: Rule) -> list[PropertyChange]:
    """Compare two rules that share a key, in candidate declaration order.

    A disabled marker in the candidate removes the same-named baseline
    declaration whatever its value; with nothing to remove it is reported as
    added, unless the baseline already holds the same marker. Baseline
    declarations the candidate never mentions are reported as removed
    afterwards.
    """
    changes: list[PropertyChange] = []
    remaining: dict[str, Declaration] = {d.property: d for d in baseline.live_declarations}
    markers = {d for d in baseline.declarations if d.disabled}

    for decl in candidate.declarations:
        old = remaining.pop(decl.property, None)
        if decl.disabled:
            if old is not None:
                changes.append(_change(old, None, candidate))
            elif decl not in markers:
                changes.append(_change(None, decl, candidate))
        elif old is None:
            changes.append(_change(None, decl, candidate))
        elif str(old) != str(decl):
            changes.append(_change(old, decl, candidate))

    for old in remaining.values():
        changes.append(_change(old, None, candidate))
    return changes


def diff_indexes(baseline: RuleIndex, candidate: RuleIndex) -> list[PropertyChange]:
    """List every declaration change from ``baseline`` to ``candidate``.

    Candidate rules come first in document order, then rules that only exist
    in the baseline. Neither argument is modified.
    """
    unmatched = dict(baseline)
    changes: list[PropertyChange] = []

    for key, rule in candidate.items():
        old_rule = unmatched.pop(key, None)
        if old_rule is not None:
            changes.extend(diff_rule(old_rule, rule))
        else:
            changes.extend(_change(None, d, rule) for d in rule.declarations)

    for rule in unmatched.values():
        changes.extend(_change(d, None, rule) for d in rule.declarations)
    return changes
