"""CLI command: styletrack track -- interactive recording against a live page."""

from __future__ import annotations

import logging
import sys

import click

from styletrack.cli.console import CommandConsole
from styletrack.config import TrackerConfig
from styletrack.errors import TrackerError
from styletrack.events import EventBus, describe
from styletrack.session.controller import SessionController


@click.command()
@click.argument("url", envvar="STYLETRACK_URL")
@click.option(
    "--overrides",
    "overrides_path",
    default=None,
    envvar="STYLETRACK_OVERRIDES",
    type=click.Path(dir_okay=False),
    help="Local override file the browser dev tools save edits to",
)
@click.option("--data-dir", default="data", envvar="STYLETRACK_DATA_DIR", show_default=True, help="Where change logs are written")
@click.option(
    "--capture",
    type=click.Choice(["browser", "http"]),
    default="browser",
    envvar="STYLETRACK_CAPTURE",
    show_default=True,
    help="Fetch the page with a headless browser or a plain HTTP GET",
)
@click.option(
    "--wait-until",
    type=click.Choice(["load", "domcontentloaded", "networkidle", "commit"]),
    default="networkidle",
    envvar="STYLETRACK_WAIT_UNTIL",
    show_default=True,
    help="Browser navigation readiness event",
)
@click.option("--headed", is_flag=True, envvar="STYLETRACK_HEADED", help="Show the browser window")
@click.option("--timeout", "timeout_ms", type=int, default=60000, envvar="STYLETRACK_TIMEOUT_MS", show_default=True, help="Navigation timeout in milliseconds")
@click.option("--clean", is_flag=True, envvar="STYLETRACK_CLEAN", help="Empty the data and overrides folders first")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging, including the line diff")
def track(
    url: str,
    overrides_path: str | None,
    data_dir: str,
    capture: str,
    wait_until: str,
    headed: bool,
    timeout_ms: int,
    clean: bool,
    verbose: bool,
) -> None:
    """Capture URL's styles, then record edits session by session.

    Type RD/FD around default edits and RM/FM(<media condition>) around
    breakpoint edits; quit() stops the tracker.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    config = TrackerConfig(
        url=url,
        overrides_path=overrides_path,
        data_dir=data_dir,
        capture=capture,
        wait_until=wait_until,
        headless=not headed,
        timeout_ms=timeout_ms,
        clean=clean,
    )

    bus = EventBus()
    bus.on_all(lambda event: click.echo(describe(event)))
    controller = SessionController.from_config(config, event_bus=bus)

    try:
        controller.start(clean=config.clean)
    except TrackerError as exc:
        click.echo(f"Error: {exc}", err=True)
        controller.quit()
        sys.exit(1)

    CommandConsole(controller, echo=click.echo).run()
