"""Discovery, fetch, merge and render pipeline."""

import logging
from dataclasses import dataclass

from calproxy.config import ProxyConfig
from calproxy.context import RequestContext
from calproxy.exceptions import FetchError, IndexFetchError
from calproxy.ingestion.fetcher import ResourceFetcher, resolve_locator
from calproxy.ingestion.ics_parser import ICSParser
from calproxy.ingestion.index_resolver import IndexResolver
from calproxy.metrics import ProxyMetrics
from calproxy.models.aggregate import AggregateCalendar
from calproxy.output.ics_renderer import ICSRenderer
from calproxy.processing.aggregator import Aggregator

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    """Rendered calendar together with the aggregate it came from."""

    text: str
    aggregate: AggregateCalendar


class CalendarPipeline:
    """Builds one composite calendar from the upstream index on each call.

    Collaborators (fetcher, metrics, logger) are injected so the pipeline can
    run against fakes in tests; ``from_config`` wires the production ones.
    """

    def __init__(
        self,
        target: str,
        fetcher: ResourceFetcher,
        resolver: IndexResolver | None = None,
        parser: ICSParser | None = None,
        renderer: ICSRenderer | None = None,
        metrics: ProxyMetrics | None = None,
        max_concurrent_fetches: int | None = None,
        request_timeout: float | None = None,
        log: logging.Logger | None = None,
    ):
        self.target = target
        self.fetcher = fetcher
        self.resolver = resolver or IndexResolver()
        self.renderer = renderer or ICSRenderer()
        self.metrics = metrics or fetcher.metrics
        self.request_timeout = request_timeout
        self.log = log or logger
        self.aggregator = Aggregator(
            fetcher,
            parser or ICSParser(),
            max_concurrent_fetches=max_concurrent_fetches,
            log=self.log,
        )

    @classmethod
    def from_config(
        cls,
        config: ProxyConfig,
        metrics: ProxyMetrics | None = None,
        session=None,
        log: logging.Logger | None = None,
    ) -> "CalendarPipeline":
        """Create a pipeline from configuration.

        Raises:
            ConfigurationError: If the upstream target is missing or invalid
        """
        target = config.target_url().geturl()
        metrics = metrics or ProxyMetrics()
        fetcher = ResourceFetcher(
            config.auth_user,
            config.auth_pass,
            metrics=metrics,
            session=session,
            timeout=config.fetch_timeout,
        )
        return cls(
            target,
            fetcher,
            metrics=metrics,
            max_concurrent_fetches=config.max_concurrent_fetches,
            request_timeout=config.request_timeout,
            log=log,
        )

    def new_context(self) -> RequestContext:
        return RequestContext(timeout=self.request_timeout)

    def resolve_urls(self, ctx: RequestContext | None = None) -> list[str]:
        """Fetch the index and return absolute resource URLs.

        Raises:
            IndexFetchError: If the index cannot be retrieved
            IndexParseError: If the index is not well-formed markup
        """
        try:
            data = self.fetcher.fetch(self.target, ctx)
        except FetchError as e:
            raise IndexFetchError(
                f"Failed to fetch index {self.target}: {e}", url=e.url, status=e.status
            ) from e

        locators = self.resolver.resolve(data)
        return [resolve_locator(self.target, locator) for locator in locators]

    def build(self, ctx: RequestContext | None = None) -> PipelineResult:
        """Run the full pipeline and keep the aggregate for inspection."""
        ctx = ctx or self.new_context()
        urls = self.resolve_urls(ctx)
        aggregate = self.aggregator.aggregate(urls, ctx)
        if aggregate.resources_failed:
            self.log.warning(
                f"{aggregate.resources_failed} of {len(urls)} resources failed, "
                f"serving partial calendar"
            )
        return PipelineResult(text=self.renderer.render(aggregate), aggregate=aggregate)

    def run(self, ctx: RequestContext | None = None) -> str:
        """Run the full pipeline and return the rendered calendar.

        Raises:
            ProxyError: On index fetch, index parse or render failure
        """
        return self.build(ctx).text
