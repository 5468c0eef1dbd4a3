"""styletrack CLI entry point: Click group with subcommands."""

import click

from styletrack import __version__


@click.group()
@click.version_option(version=__version__, prog_name="styletrack")
def cli() -> None:
    """styletrack - record live style edits as structured change logs."""


# Import and register subcommands
from styletrack.cli.track import track  # noqa: E402
from styletrack.cli.diff import diff  # noqa: E402
from styletrack.cli.canonicalize import canonicalize  # noqa: E402

cli.add_command(track)
cli.add_command(diff)
cli.add_command(canonicalize)
