"""List the calendar resources referenced by the upstream index."""

import logging

import typer

from calproxy.exceptions import ProxyError
from cli.context import get_context
from cli.display import console

logger = logging.getLogger(__name__)


def index_command() -> None:
    """Fetch the upstream index and print the resolved resource URLs."""
    ctx = get_context()

    try:
        pipeline = ctx.pipeline
        urls = pipeline.resolve_urls(pipeline.new_context())
    except ProxyError as e:
        logger.error(f"Index resolution failed: {e}")
        raise typer.Exit(1)

    if not urls:
        console.print("[yellow]No calendar resources found in index[/yellow]")
        return

    for url in urls:
        typer.echo(url)
    console.print(f"\n[dim]{len(urls)} resources[/dim]")
