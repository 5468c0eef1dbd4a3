"""Style sheet handling: extraction, canonicalization, and rule keys."""

from styletrack.css.extract import extract_style_blocks, extract_style_content
from styletrack.css.index import RuleIndex, RuleKey, build_index, rule_key
from styletrack.css.keys import normalize_condition, normalize_selector
from styletrack.css.normalize import canonicalize

__all__ = [
    "extract_style_blocks",
    "extract_style_content",
    "canonicalize",
    "normalize_selector",
    "normalize_condition",
    "RuleKey",
    "RuleIndex",
    "build_index",
    "rule_key",
]
