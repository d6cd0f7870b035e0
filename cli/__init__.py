"""CLI package for the calendar proxy."""

import logging
import sys

from calproxy.config import ProxyConfig


def _console_level(verbose: bool, quiet: bool) -> int:
    if quiet:
        return logging.ERROR
    if verbose:
        return logging.INFO
    return logging.WARNING


def setup_logging(
    verbose: bool = False, quiet: bool = False, config: ProxyConfig | None = None
) -> None:
    """Send proxy logs to a log file and the console.

    The file gets everything with timestamps and worker thread names, since
    fetches run on pool threads. The console gets warnings by default (failed
    resources, dropped entries); werkzeug's per-request access lines go to the
    file only, the proxy logs its own request outcome line.

    Args:
        verbose: If True, show info-level proxy logging on the console
        quiet: If True, only show errors on the console
        config: ProxyConfig for log directory/filename (default: from env)
    """
    config = config or ProxyConfig.from_env()
    config.log_dir.mkdir(parents=True, exist_ok=True)

    file_handler = logging.FileHandler(config.log_dir / config.log_filename)
    file_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s %(levelname)s [%(threadName)s] %(name)s: %(message)s"
        )
    )
    file_handler.setLevel(logging.DEBUG)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    console_handler.setLevel(_console_level(verbose, quiet))
    console_handler.addFilter(lambda record: not record.name.startswith("werkzeug"))

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.handlers.clear()
    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    # urllib3 connection chatter is noise at DEBUG in the log file
    logging.getLogger("urllib3").setLevel(logging.INFO)


def main() -> None:
    """Main entry point for the CLI."""
    from cli.parser import app

    app()


__all__ = ["main", "setup_logging"]
