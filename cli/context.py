"""Shared CLI context with lazy-initialized dependencies."""

from calproxy.config import ProxyConfig
from calproxy.metrics import ProxyMetrics
from calproxy.pipeline import CalendarPipeline


class CLIContext:
    """Shared context with lazy-initialized dependencies for CLI commands.

    Configuration comes from the environment; options given on the command
    line override individual fields.

    Usage:
        ctx = CLIContext(overrides={"target": "https://dav.example.com/cals/"})
        text = ctx.pipeline.run()
    """

    def __init__(
        self,
        verbose: bool = False,
        quiet: bool = False,
        overrides: dict | None = None,
    ):
        """Initialize CLI context.

        Args:
            verbose: If True, enable info logging on the console
            quiet: If True, suppress non-error output
            overrides: Config fields set on the command line (None values ignored)
        """
        self.verbose = verbose
        self.quiet = quiet
        self.overrides = {k: v for k, v in (overrides or {}).items() if v is not None}

        # Lazy-loaded dependencies
        self._config: ProxyConfig | None = None
        self._metrics: ProxyMetrics | None = None
        self._pipeline: CalendarPipeline | None = None

    @property
    def config(self) -> ProxyConfig:
        """Get configuration (lazy-loaded)."""
        if self._config is None:
            config = ProxyConfig.from_env()
            if self.overrides:
                config = ProxyConfig(**{**config.model_dump(), **self.overrides})
            self._config = config
        return self._config

    @property
    def metrics(self) -> ProxyMetrics:
        """Get metrics collaborator (lazy-loaded)."""
        if self._metrics is None:
            self._metrics = ProxyMetrics()
        return self._metrics

    @property
    def pipeline(self) -> CalendarPipeline:
        """Get calendar pipeline (lazy-loaded)."""
        if self._pipeline is None:
            self._pipeline = CalendarPipeline.from_config(
                self.config, metrics=self.metrics
            )
        return self._pipeline


# Global context instance (set by Typer callback)
_ctx: CLIContext | None = None


def get_context() -> CLIContext:
    """Get the current CLI context.

    Raises:
        RuntimeError: If context not initialized
    """
    if _ctx is None:
        raise RuntimeError("CLI context not initialized. This should not happen.")
    return _ctx


def set_context(ctx: CLIContext) -> None:
    """Set the global CLI context."""
    global _ctx
    _ctx = ctx
