"""Concurrent fetch, parse and merge of calendar resources."""

import logging
from concurrent.futures import ThreadPoolExecutor, wait

from calproxy.constants import FETCH_THREAD_PREFIX
from calproxy.context import RequestContext
from calproxy.exceptions import EntryParseError, FetchError
from calproxy.ingestion.fetcher import ResourceFetcher
from calproxy.ingestion.ics_parser import ICSParser
from calproxy.models.aggregate import AggregateCalendar
from calproxy.processing.calendar_merger import CalendarMerger

logger = logging.getLogger(__name__)


class Aggregator:
    """Fans out one fetch+parse task per resource URL and merges the results.

    Worker threads never touch the aggregate; they submit entries to a single
    CalendarMerger. A failing resource is logged and contributes no entries.
    """

    def __init__(
        self,
        fetcher: ResourceFetcher,
        parser: ICSParser | None = None,
        max_concurrent_fetches: int | None = None,
        log: logging.Logger | None = None,
    ):
        self.fetcher = fetcher
        self.parser = parser or ICSParser()
        self.max_concurrent_fetches = max_concurrent_fetches
        self.log = log or logger

    def aggregate(
        self, urls: list[str], ctx: RequestContext | None = None
    ) -> AggregateCalendar:
        """Fetch, parse and merge every URL into one calendar.

        Args:
            urls: Absolute resource URLs
            ctx: Optional request context threaded into every fetch

        Returns:
            The merged calendar, handed over after the merge path has stopped
        """
        merger = CalendarMerger(AggregateCalendar(), log=self.log)
        merger.start()

        outcomes: list[bool] = []
        try:
            if urls:
                with ThreadPoolExecutor(
                    max_workers=self._worker_count(len(urls)),
                    thread_name_prefix=FETCH_THREAD_PREFIX,
                ) as executor:
                    futures = [
                        executor.submit(self._collect, url, merger, ctx) for url in urls
                    ]
                    wait(futures)
                # Unexpected (non-domain) worker errors surface here
                outcomes = [future.result() for future in futures]
        finally:
            aggregate = merger.stop()

        aggregate.resources_requested = len(urls)
        aggregate.resources_succeeded = sum(outcomes)
        aggregate.resources_failed = len(outcomes) - aggregate.resources_succeeded
        self.log.info(
            f"Aggregated {aggregate.entry_count} entries from "
            f"{aggregate.resources_succeeded}/{len(urls)} resources"
        )
        return aggregate

    def _worker_count(self, fan_out: int) -> int:
        if self.max_concurrent_fetches is None:
            return fan_out
        return max(1, min(fan_out, self.max_concurrent_fetches))

    def _collect(
        self, url: str, merger: CalendarMerger, ctx: RequestContext | None
    ) -> bool:
        """Fetch and parse one resource, submitting its entries for merging.

        Returns:
            True if the resource contributed its entries, False if it failed
        """
        try:
            data = self.fetcher.fetch(url, ctx)
            entries = self.parser.parse(data, source=url)
        except FetchError as e:
            self.log.warning(f"Skipping resource {url}: {e}")
            return False
        except EntryParseError as e:
            self.log.warning(f"Skipping unparseable resource {url}: {e}")
            return False

        if ctx is not None and ctx.cancelled:
            self.log.warning(f"Request cancelled, discarding entries from {url}")
            return False

        for entry in entries:
            merger.submit(entry)
        return True
