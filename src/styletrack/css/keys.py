"""Canonical forms of selectors and conditions used as rule keys.

Two rules from different snapshots are "the same rule" when their selector
and condition canonicalize to equal strings, so incidental formatting
(whitespace, quoting, keyword case) never shows up as a change.
"""

from __future__ import annotations

import functools
from pathlib import Path
from typing import Any

import tinycss2
from lark import Lark, Token, Transformer
from lark.exceptions import LarkError

from styletrack.css.normalize import serialize_tokens, split_selector_list

__all__ = ["normalize_condition", "normalize_selector"]

GRAMMAR_PATH = Path(__file__).parent / "media.lark"

_COMBINATORS = frozenset({">", "+", "~", "||"})
_SELECTOR_FUNCTIONS = frozenset({"not", "is", "where", "has", "matches", "-webkit-any", "-moz-any"})


# ---------------------------------------------------------------------------
# Selectors
# ---------------------------------------------------------------------------


def _quote(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _attribute(block: Any) -> str:
    items = [t for t in block.content if t.type not in ("whitespace", "comment")]
    if not items:
        return "[]"
    if len(items) == 1:
        return f"[{serialize_tokens(items).lower()}]"
    if len(items) in (3, 4) and items[1].type == "literal" and items[2].type in ("ident", "string"):
        name = serialize_tokens([items[0]]).lower()
        text = f"{name}{items[1].value}{_quote(items[2].value)}"
        if len(items) == 4 and items[3].type == "ident":
            text += f" {items[3].lower_value}"
        return f"[{text}]"
    return f"[{''.join(serialize_tokens([t]) for t in items)}]"


def _pseudo_function(node: Any) -> str:
    name = node.lower_name
    if name in _SELECTOR_FUNCTIONS:
        return f"{name}({_normalize_list(node.arguments)})"
    args = [t for t in node.arguments if t.type not in ("whitespace", "comment")]
    return f"{name}({''.join(serialize_tokens([t]) for t in args).lower()})"


def _normalize_complex(nodes: list[Any]) -> str:
    parts: list[str] = []
    pending_space = False
    after_colon = False
    after_dot = False
    for node in nodes:
        if node.type in ("whitespace", "comment"):
            pending_space = True
            continue
        if node.type == "literal" and node.value in _COMBINATORS:
            parts.append(f" {node.value} ")
            pending_space = False
            after_colon = False
            after_dot = False
            continue
        if pending_space and parts and not parts[-1].endswith(" "):
            parts.append(" ")
        pending_space = False

        if node.type == "[] block":
            parts.append(_attribute(node))
        elif node.type == "ident" and not after_dot:
            # Type selectors and pseudo-classes are case-insensitive; class names are not.
            parts.append(node.lower_value)
        elif after_colon and node.type == "function":
            parts.append(_pseudo_function(node))
        else:
            parts.append(serialize_tokens([node]))
        after_colon = node.type == "literal" and node.value == ":"
        after_dot = node.type == "literal" and node.value == "."
    return "".join(parts).strip()


def _normalize_list(nodes: list[Any]) -> str:
    return ", ".join(_normalize_complex(part) for part in split_selector_list(nodes))


def normalize_selector(selector: str) -> str:
    """Re-serialize a selector list through a token-level parse."""
    return _normalize_list(tinycss2.parse_component_value_list(selector, skip_comments=True))


# ---------------------------------------------------------------------------
# Conditions
# ---------------------------------------------------------------------------


class MediaTransformer(Transformer):  # type: ignore[type-arg]
    """Render a media query parse tree back to one canonical string."""

    def start(self, items: list[str]) -> str:
        return ", ".join(items)

    def condition_query(self, items: list[str]) -> str:
        return items[0]

    def type_query(self, items: list[str]) -> str:
        return items[0]

    def typed_query(self, items: list[str]) -> str:
        return f"{items[0]} and {items[1]}"

    def media_type(self, items: list[Token]) -> str:
        return " ".join(str(t).lower() for t in items)

    def negation(self, items: list[object]) -> str:
        return f"not {items[-1]}"

    def conjunction(self, items: list[str]) -> str:
        return " and ".join(items)

    def disjunction(self, items: list[str]) -> str:
        return " or ".join(items)

    def group(self, items: list[str]) -> str:
        return f"({items[0]})"

    def plain_feature(self, items: list[object]) -> str:
        return f"({str(items[0]).lower()}: {items[1]})"

    def boolean_feature(self, items: list[Token]) -> str:
        return f"({str(items[0]).lower()})"

    def range_feature(self, items: list[object]) -> str:
        name, cmp, value = items
        return f"({str(name).lower()} {cmp} {value})"

    def reversed_range_feature(self, items: list[object]) -> str:
        value, cmp, name = items
        return f"({value} {cmp} {str(name).lower()})"

    def interval_feature(self, items: list[object]) -> str:
        low, low_cmp, name, high_cmp, high = items
        return f"({low} {low_cmp} {str(name).lower()} {high_cmp} {high})"

    def value(self, items: list[Token]) -> str:
        text = ""
        for token in items:
            if token.type == "SLASH":
                text = text.rstrip() + "/"
            elif text and not text.endswith("/"):
                text += " " + str(token).lower()
            else:
                text += str(token).lower()
        return text

    def range_value(self, items: list[Token]) -> str:
        return "".join(str(t).lower() for t in items)


@functools.lru_cache(maxsize=1)
def _media_parser() -> Lark:
    return Lark(GRAMMAR_PATH.read_text(encoding="utf-8"), parser="lalr", start="start")


def normalize_condition(condition: str | None) -> str | None:
    """Canonicalize a media condition; unparseable text comes back unchanged."""
    if condition is None:
        return None
    try:
        tree = _media_parser().parse(condition)
        return MediaTransformer().transform(tree)
    except LarkError:
        return condition
