"""Ingestion layer: index resolution, resource fetching and parsing."""

from calproxy.ingestion.fetcher import ResourceFetcher, resolve_locator
from calproxy.ingestion.ics_parser import ICSParser
from calproxy.ingestion.index_resolver import IndexResolver

__all__ = [
    "IndexResolver",
    "ResourceFetcher",
    "ICSParser",
    "resolve_locator",
]
