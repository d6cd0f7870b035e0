"""Authenticated retrieval of upstream index and calendar resources."""

import logging
from urllib.parse import quote, urlsplit, urlunsplit

import requests
from requests.auth import HTTPBasicAuth

from calproxy.context import RequestContext
from calproxy.exceptions import RequestCancelledError, ResourceFetchError
from calproxy.metrics import ProxyMetrics

logger = logging.getLogger(__name__)

# Characters left as-is when building a resource path; "%" keeps
# already-encoded hrefs from the index intact.
_PATH_SAFE = "/%:@!$&'()*+,;=~"

_CHUNK_SIZE = 64 * 1024


def resolve_locator(base_url: str, locator: str) -> str:
    """Build the absolute URL for a locator on the base URL's scheme and host.

    Only scheme and host are inherited; the base URL's own path and query are
    not.

    Args:
        base_url: Upstream index URL
        locator: Relative resource path taken from the index

    Returns:
        Absolute resource URL
    """
    base = urlsplit(base_url)
    path = locator if locator.startswith("/") else "/" + locator
    return urlunsplit((base.scheme, base.netloc, quote(path, safe=_PATH_SAFE), "", ""))


class ResourceFetcher:
    """Fetches raw bytes from the upstream under shared Basic-Auth credentials."""

    def __init__(
        self,
        user: str = "",
        password: str = "",
        metrics: ProxyMetrics | None = None,
        session: requests.Session | None = None,
        timeout: float = 10.0,
    ):
        self.auth = HTTPBasicAuth(user, password)
        self.metrics = metrics or ProxyMetrics()
        self.session = session or requests.Session()
        self.timeout = timeout

    def fetch(self, url: str, ctx: RequestContext | None = None) -> bytes:
        """GET a URL and return its body.

        Args:
            url: Absolute URL to retrieve
            ctx: Optional request context bounding the call

        Returns:
            Response body bytes

        Raises:
            RequestCancelledError: If the request context is cancelled or expired
            ResourceFetchError: On transport error, non-2xx status, or body-read error
        """
        self.metrics.record_outbound()

        timeout = self.timeout
        if ctx is not None:
            ctx.check()
            timeout = ctx.clamp_timeout(timeout)

        logger.debug(f"GET {url} (timeout {timeout:.1f}s)")
        try:
            response = self.session.get(
                url, auth=self.auth, timeout=timeout, stream=True
            )
        except requests.Timeout as e:
            if ctx is not None and ctx.cancelled:
                raise RequestCancelledError(
                    f"Request deadline exceeded fetching {url}", url=url
                ) from e
            raise ResourceFetchError(f"Timed out fetching {url}: {e}", url=url) from e
        except requests.RequestException as e:
            raise ResourceFetchError(f"Request to {url} failed: {e}", url=url) from e

        with response:
            status = response.status_code
            if not 200 <= status < 300:
                raise ResourceFetchError(
                    f"Unexpected response from {url}: {status} {response.reason}",
                    url=url,
                    status=status,
                )
            body = self._read_body(response, url, ctx)

        logger.debug(f"Fetched {len(body)} bytes from {url}")
        return body

    def _read_body(self, response, url: str, ctx: RequestContext | None) -> bytes:
        """Read a streamed body, re-checking the request context between chunks."""
        chunks = []
        try:
            for chunk in response.iter_content(chunk_size=_CHUNK_SIZE):
                if ctx is not None:
                    ctx.check()
                chunks.append(chunk)
        except requests.RequestException as e:
            raise ResourceFetchError(
                f"Failed to read body from {url}: {e}",
                url=url,
                status=response.status_code,
            ) from e
        return b"".join(chunks)
