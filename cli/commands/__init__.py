"""CLI commands package."""

from cli.commands.fetch import fetch_command
from cli.commands.index import index_command
from cli.commands.serve import serve_command

__all__ = [
    "fetch_command",
    "index_command",
    "serve_command",
]
