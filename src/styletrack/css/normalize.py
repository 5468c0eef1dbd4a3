"""Parse style text, flatten nested rules, and re-serialize to canonical text.

The canonical layout puts every declaration on its own line so the line diff
used by the noise filter lines up with the structural diff:

    .card {
      color: red;
    }
    @media (max-width: 600px) {
      .card:hover {
        color: blue;
      }
    }

Nested rules resolve ``&`` to the parent selector (or become descendants of
it when no ``&`` is present). Conditional group rules nested in style rules
bubble out and wrap the resolved rule; directly nested ``@media`` blocks are
merged with ``and``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

import tinycss2
from tinycss2.ast import IdentToken

from styletrack.errors import ParseError
from styletrack.model.snapshot import Declaration, Rule, StyleSnapshot

__all__ = ["CONDITIONAL_GROUPS", "canonicalize", "serialize_tokens", "split_selector_list"]

CONDITIONAL_GROUPS = frozenset({"media", "supports", "container", "layer", "scope"})

_INDENT = "  "


@dataclass(frozen=True)
class _Group:
    """An enclosing block that scopes the rules inside it."""

    name: str
    prelude: str

    @property
    def header(self) -> str:
        return f"@{self.name} {self.prelude}".rstrip()

    @property
    def condition(self) -> str:
        # Media conditions are keyed by their query text alone.
        if self.name == "media":
            return self.prelude
        return self.header


@dataclass(frozen=True)
class _Entry:
    groups: tuple[_Group, ...]
    rule: Rule | None = None
    statement: str | None = None


# ---------------------------------------------------------------------------
# Token helpers
# ---------------------------------------------------------------------------


def serialize_tokens(nodes: Iterable[Any]) -> str:
    """Serialize component values with whitespace runs collapsed and comments dropped."""
    parts: list[str] = []
    for node in nodes:
        if node.type == "whitespace":
            if parts and parts[-1] != " ":
                parts.append(" ")
        elif node.type == "comment":
            continue
        elif node.type == "() block":
            parts.append(f"({serialize_tokens(node.content)})")
        elif node.type == "[] block":
            parts.append(f"[{serialize_tokens(node.content)}]")
        elif node.type == "{} block":
            parts.append(f"{{{serialize_tokens(node.content)}}}")
        elif node.type == "function":
            parts.append(f"{node.name}({serialize_tokens(node.arguments)})")
        else:
            parts.append(node.serialize())
    return "".join(parts).strip()


def split_selector_list(nodes: Iterable[Any]) -> list[list[Any]]:
    """Split a selector prelude on its top-level commas."""
    groups: list[list[Any]] = [[]]
    for node in nodes:
        if node.type == "literal" and node.value == ",":
            groups.append([])
        else:
            groups[-1].append(node)
    return [g for g in groups if serialize_tokens(g)]


def _has_nesting(nodes: list[Any]) -> bool:
    for node in nodes:
        if node.type == "literal" and node.value == "&":
            return True
        if node.type == "function" and _has_nesting(node.arguments):
            return True
    return False


def _substitute(nodes: list[Any], parent: str) -> str:
    parts: list[str] = []
    for node in nodes:
        if node.type == "literal" and node.value == "&":
            parts.append(parent)
        elif node.type == "function":
            parts.append(f"{node.name}({_substitute(node.arguments, parent)})")
        elif node.type == "whitespace":
            if parts and parts[-1] != " ":
                parts.append(" ")
        elif node.type != "comment":
            parts.append(serialize_tokens([node]))
    return "".join(parts).strip()


def _resolve_selectors(prelude: list[Any], parents: list[str] | None) -> list[str]:
    children = split_selector_list(prelude)
    if parents is None:
        return [serialize_tokens(child) for child in children]
    resolved: list[str] = []
    for parent in parents:
        for child in children:
            if _has_nesting(child):
                resolved.append(_substitute(child, parent))
            else:
                resolved.append(f"{parent} {serialize_tokens(child)}")
    return resolved


def _error(node: Any) -> ParseError:
    return ParseError(node.message, line=node.source_line, column=node.source_column)


def _is_literal(node: Any, value: str) -> bool:
    return node.type == "literal" and node.value == value


def _is_statement_start(previous: Any) -> bool:
    return previous is None or previous.type == "{} block" or _is_literal(previous, ";")


def _is_star_hack(tokens: list[Any], index: int) -> bool:
    """``*name: value`` up to the next ``;``, with no block in it."""
    if index + 1 >= len(tokens) or tokens[index + 1].type != "ident":
        return False
    rest = tokens[index + 2 :]
    significant = [t for t in rest if t.type not in ("whitespace", "comment")]
    if not significant or not _is_literal(significant[0], ":"):
        return False
    for token in significant:
        if _is_literal(token, ";"):
            return True
        if token.type == "{} block":
            return False
    return True


def _merge_star_hacks(tokens: list[Any]) -> list[Any]:
    """Fold the legacy IE ``*prop: value`` hack into a ``*prop`` identifier."""
    merged: list[Any] = []
    previous = None
    index = 0
    while index < len(tokens):
        token = tokens[index]
        if _is_literal(token, "*") and _is_statement_start(previous) and _is_star_hack(tokens, index):
            ident = tokens[index + 1]
            token = IdentToken(token.source_line, token.source_column, "*" + ident.value)
            index += 1
        merged.append(token)
        if token.type not in ("whitespace", "comment"):
            previous = token
        index += 1
    return merged


def _drop_stray_semicolons(tokens: list[Any]) -> list[Any]:
    """Drop top-level ``;`` that follow a rule block or another ``;``."""
    kept: list[Any] = []
    previous = None
    for token in tokens:
        if _is_literal(token, ";") and _is_statement_start(previous):
            continue
        kept.append(token)
        if token.type not in ("whitespace", "comment"):
            previous = token
    return kept


def _parse_body(content: list[Any]) -> list[Any]:
    return tinycss2.parse_blocks_contents(
        _merge_star_hacks(content), skip_comments=False, skip_whitespace=True
    )


# ---------------------------------------------------------------------------
# Declarations
# ---------------------------------------------------------------------------


def _declaration(node: Any, disabled: bool = False) -> Declaration:
    name = node.name if node.name.startswith("--") else node.lower_name
    return Declaration(
        property=name,
        value=serialize_tokens(node.value),
        important=node.important,
        disabled=disabled,
    )


def _disabled_marker(comment: Any) -> Declaration | None:
    """Read ``/* prop: value; */`` as a declaration that was switched off."""
    text = comment.value.strip()
    if ":" not in text or not text.endswith(";"):
        return None
    items = tinycss2.parse_blocks_contents(text, skip_comments=True, skip_whitespace=True)
    if len(items) != 1 or items[0].type != "declaration":
        return None
    return _declaration(items[0], disabled=True)


# ---------------------------------------------------------------------------
# Flattening
# ---------------------------------------------------------------------------


def _merge_media(outer: str, inner: str) -> str:
    if not outer:
        return inner
    if not inner:
        return outer
    outer_queries = [q.strip() for q in outer.split(",")]
    inner_queries = [q.strip() for q in inner.split(",")]
    return ", ".join(f"{o} and {i}" for o in outer_queries for i in inner_queries)


def _push(groups: tuple[_Group, ...], group: _Group) -> tuple[_Group, ...]:
    if group.name == "media" and groups and groups[-1].name == "media":
        merged = _Group("media", _merge_media(groups[-1].prelude, group.prelude))
        return groups[:-1] + (merged,)
    return groups + (group,)


def _make_rule(selectors: list[str], groups: tuple[_Group, ...], declarations: list[Declaration]) -> _Entry:
    condition = groups[-1].condition if groups else None
    rule = Rule(
        selector=", ".join(selectors),
        condition=condition,
        declarations=tuple(declarations),
    )
    return _Entry(groups=groups, rule=rule)


def _flatten_body(
    items: list[Any],
    selectors: list[str] | None,
    groups: tuple[_Group, ...],
    out: list[_Entry],
) -> None:
    """Emit the rule owning ``items``' declarations, then its nested rules."""
    declarations: list[Declaration] = []
    nested: list[Any] = []
    for item in items:
        if item.type == "error":
            raise _error(item)
        if item.type == "declaration":
            if selectors is None:
                raise ParseError(
                    f"Declaration '{item.name}' outside of a style rule",
                    line=item.source_line,
                    column=item.source_column,
                )
            declarations.append(_declaration(item))
        elif item.type == "comment":
            marker = _disabled_marker(item)
            if marker is not None and selectors is not None:
                declarations.append(marker)
        elif item.type in ("qualified-rule", "at-rule"):
            nested.append(item)

    if selectors is not None and (declarations or not nested):
        out.append(_make_rule(selectors, groups, declarations))

    for item in nested:
        if item.type == "qualified-rule":
            _flatten_rule(item, selectors, groups, out)
        else:
            _flatten_at_rule(item, selectors, groups, out)


def _flatten_rule(
    node: Any, parents: list[str] | None, groups: tuple[_Group, ...], out: list[_Entry]
) -> None:
    selectors = _resolve_selectors(node.prelude, parents)
    if not selectors:
        raise ParseError("Empty selector", line=node.source_line, column=node.source_column)
    items = _parse_body(node.content)
    _flatten_body(items, selectors, groups, out)


def _flatten_keyframes(node: Any, group: _Group, groups: tuple[_Group, ...], out: list[_Entry]) -> None:
    inner = groups + (group,)
    for step in tinycss2.parse_rule_list(node.content, skip_comments=True, skip_whitespace=True):
        if step.type == "error":
            raise _error(step)
        if step.type != "qualified-rule":
            continue
        items = _parse_body(step.content)
        _flatten_body(items, [serialize_tokens(step.prelude)], inner, out)


def _flatten_at_rule(
    node: Any, parents: list[str] | None, groups: tuple[_Group, ...], out: list[_Entry]
) -> None:
    name = node.lower_at_keyword
    group = _Group(name, serialize_tokens(node.prelude))

    if node.content is None:
        out.append(_Entry(groups=groups, statement=f"{group.header};"))
        return

    if name in CONDITIONAL_GROUPS:
        items = _parse_body(node.content)
        _flatten_body(items, parents, _push(groups, group), out)
    elif name.endswith("keyframes"):
        _flatten_keyframes(node, group, groups, out)
    else:
        # Declaration-block at-rules (@font-face, @page, ...) key by their header.
        items = _parse_body(node.content)
        _flatten_body(items, [group.header], groups, out)


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def _render(entries: list[_Entry]) -> str:
    lines: list[str] = []
    open_groups: tuple[_Group, ...] = ()

    for entry in entries:
        shared = 0
        while (
            shared < len(open_groups)
            and shared < len(entry.groups)
            and open_groups[shared] == entry.groups[shared]
        ):
            shared += 1
        for depth in range(len(open_groups) - 1, shared - 1, -1):
            lines.append(f"{_INDENT * depth}}}")
        for depth in range(shared, len(entry.groups)):
            lines.append(f"{_INDENT * depth}{entry.groups[depth].header} {{")
        open_groups = entry.groups

        indent = _INDENT * len(entry.groups)
        if entry.statement is not None:
            lines.append(f"{indent}{entry.statement}")
            continue
        assert entry.rule is not None
        lines.append(f"{indent}{entry.rule.selector} {{")
        for decl in entry.rule.declarations:
            lines.append(f"{indent}{_INDENT}{decl.render()}")
        lines.append(f"{indent}}}")

    for depth in range(len(open_groups) - 1, -1, -1):
        lines.append(f"{_INDENT * depth}}}")

    return "\n".join(lines) + "\n" if lines else ""


def canonicalize(text: str) -> StyleSnapshot:
    """Parse ``text`` and return its canonical text and flat rules together.

    Raises ParseError (1-based line/column) on the first parse error.
    """
    entries: list[_Entry] = []
    # Comments must survive tokenizing: rule bodies may hold disabled markers.
    tokens = tinycss2.parse_component_value_list(text, skip_comments=False)
    for node in tinycss2.parse_stylesheet(
        _drop_stray_semicolons(tokens), skip_comments=False, skip_whitespace=True
    ):
        if node.type == "error":
            raise _error(node)
        if node.type == "qualified-rule":
            _flatten_rule(node, None, (), entries)
        elif node.type == "at-rule":
            _flatten_at_rule(node, None, (), entries)

    return StyleSnapshot(
        raw_text=text,
        canonical_text=_render(entries),
        rules=tuple(e.rule for e in entries if e.rule is not None),
    )
