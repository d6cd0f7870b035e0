"""Build the composite calendar once and write it out."""

import logging
import sys
from pathlib import Path

import typer
from typing_extensions import Annotated

from calproxy.exceptions import ProxyError
from cli.context import get_context
from cli.display.summary_renderer import SummaryRenderer

logger = logging.getLogger(__name__)


def fetch_command(
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write calendar to this file instead of stdout"),
    ] = None,
) -> None:
    """Fetch every calendar in the upstream index and merge them into one ICS file."""
    ctx = get_context()

    try:
        pipeline = ctx.pipeline
        result = pipeline.build()
    except ProxyError as e:
        logger.error(f"Aggregation failed: {e}")
        raise typer.Exit(1)

    if output is None:
        sys.stdout.write(result.text)
        return

    output.write_text(result.text, encoding="utf-8")
    if not ctx.quiet:
        renderer = SummaryRenderer()
        renderer.render_summary(result.aggregate.summary())
        renderer.render_written(output)
