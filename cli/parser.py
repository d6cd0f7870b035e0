"""CLI application and global options."""

import logging

import typer
from typing_extensions import Annotated

from cli import setup_logging
from cli.commands import fetch_command, index_command, serve_command
from cli.context import CLIContext, set_context

logger = logging.getLogger(__name__)

app = typer.Typer(
    help="Serve or build one composite calendar from an upstream calendar index.",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    target: Annotated[
        str | None,
        typer.Option("--target", help="Upstream index URL (default: TARGET)"),
    ] = None,
    user: Annotated[
        str | None,
        typer.Option("--user", help="Basic auth user (default: AUTH_USER)"),
    ] = None,
    password: Annotated[
        str | None,
        typer.Option("--password", help="Basic auth password (default: AUTH_PASS)"),
    ] = None,
    max_concurrent_fetches: Annotated[
        int | None,
        typer.Option(
            "--max-concurrent-fetches",
            min=1,
            help="Cap on concurrent resource fetches (default: one per resource)",
        ),
    ] = None,
    request_timeout: Annotated[
        float | None,
        typer.Option("--timeout", help="Overall deadline per aggregation, seconds"),
    ] = None,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Show info-level logging")
    ] = False,
    quiet: Annotated[
        bool, typer.Option("--quiet", "-q", help="Only show errors")
    ] = False,
) -> None:
    """Set up logging and the shared command context."""
    ctx = CLIContext(
        verbose=verbose,
        quiet=quiet,
        overrides={
            "target": target,
            "auth_user": user,
            "auth_pass": password,
            "max_concurrent_fetches": max_concurrent_fetches,
            "request_timeout": request_timeout,
        },
    )
    set_context(ctx)
    setup_logging(verbose=verbose, quiet=quiet, config=ctx.config)


app.command("serve")(serve_command)
app.command("fetch")(fetch_command)
app.command("index")(index_command)
