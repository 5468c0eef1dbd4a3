"""CLI command: styletrack canonicalize -- print the canonical form of a sheet."""

from __future__ import annotations

import sys

import click

from styletrack.cli.diff import load_snapshot
from styletrack.errors import ParseError


@click.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option("--html", is_flag=True, help="Input is markup; use its <style> blocks")
def canonicalize(file: str, html: bool) -> None:
    """Print FILE flattened and re-serialized, as the tracker diffs it."""
    try:
        snapshot = load_snapshot(file, html)
    except ParseError as exc:
        click.echo(f"Parse error: {exc}", err=True)
        sys.exit(1)
    click.echo(snapshot.canonical_text)
