"""Pull inline style-block text out of a markup document."""

from __future__ import annotations

import re

__all__ = ["extract_style_blocks", "extract_style_content"]

_STYLE_RE = re.compile(r"<style[^>]*>(.*?)</style>", re.DOTALL | re.IGNORECASE)


def extract_style_blocks(markup: str) -> list[str]:
    """Return the trimmed contents of every ``<style>`` block, in order."""
    return [block.strip() for block in _STYLE_RE.findall(markup)]


def extract_style_content(markup: str) -> str:
    """Concatenate all ``<style>`` blocks into one style sheet."""
    return "\n".join(extract_style_blocks(markup)).strip()
