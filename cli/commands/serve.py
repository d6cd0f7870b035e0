"""Run the calendar proxy HTTP server."""

import logging

import typer
from typing_extensions import Annotated

from calproxy import create_app
from calproxy.exceptions import ConfigurationError
from cli.context import get_context

logger = logging.getLogger(__name__)


def serve_command(
    host: Annotated[
        str | None,
        typer.Option("--host", help="Interface to bind (default: from ADDR or 0.0.0.0)"),
    ] = None,
    port: Annotated[
        int | None,
        typer.Option("--port", "-p", help="Port to listen on (default: from PORT or 8080)"),
    ] = None,
) -> None:
    """Serve the composite calendar over HTTP.

    GET / returns the merged calendar, /health and /metrics report status.
    """
    ctx = get_context()
    config = ctx.config

    try:
        app = create_app(pipeline=ctx.pipeline)
    except ConfigurationError as e:
        logger.error(str(e))
        raise typer.Exit(1)

    bind_host = host or config.host
    bind_port = port or config.port
    logger.info(f"Serving {config.target} on {bind_host}:{bind_port}")
    app.run(host=bind_host, port=bind_port, threaded=True)
    logger.info("Server exit")
