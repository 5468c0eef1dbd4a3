"""CLI command: styletrack diff -- offline comparison of two style sheets."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from styletrack.css.extract import extract_style_content
from styletrack.css.normalize import canonicalize as canonicalize_css
from styletrack.diff.pipeline import compare_snapshots
from styletrack.errors import ParseError
from styletrack.model.snapshot import StyleSnapshot


def load_snapshot(path: str, html: bool) -> StyleSnapshot:
    """Read a CSS file (or the style blocks of a markup file) and canonicalize it."""
    text = Path(path).read_text(encoding="utf-8")
    if html:
        text = extract_style_content(text)
    try:
        return canonicalize_css(text)
    except ParseError as exc:
        raise exc.attach_source(text)


@click.command()
@click.argument("baseline", type=click.Path(exists=True, dir_okay=False))
@click.argument("candidate", type=click.Path(exists=True, dir_okay=False))
@click.option("--html", is_flag=True, help="Inputs are markup; compare their <style> blocks")
@click.option("--unfiltered", is_flag=True, help="Skip the line-diff noise filter")
def diff(baseline: str, candidate: str, html: bool, unfiltered: bool) -> None:
    """Print the property changes from BASELINE to CANDIDATE as JSON."""
    try:
        before = load_snapshot(baseline, html)
        after = load_snapshot(candidate, html)
    except ParseError as exc:
        click.echo(f"Parse error: {exc}", err=True)
        sys.exit(1)

    comparison = compare_snapshots(before, after)
    changes = comparison.raw if unfiltered else comparison.filtered
    click.echo(json.dumps([c.to_dict() for c in changes], indent=2))
