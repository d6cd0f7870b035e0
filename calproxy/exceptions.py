"""Exception hierarchy for calendar proxy operations."""


class ProxyError(Exception):
    """Base exception for calendar proxy operations."""

    pass


class ConfigurationError(ProxyError):
    """Proxy configuration is missing or invalid."""

    pass


class FetchError(ProxyError):
    """Base exception for upstream retrievals."""

    def __init__(self, message: str, url: str | None = None, status: int | None = None):
        super().__init__(message)
        self.url = url
        self.status = status


class ResourceFetchError(FetchError):
    """A single upstream resource could not be retrieved."""

    pass


class IndexFetchError(FetchError):
    """The upstream index document could not be retrieved."""

    pass


class RequestCancelledError(FetchError):
    """The request was cancelled or ran past its deadline."""

    pass


class IndexParseError(ProxyError):
    """Index document is not well-formed markup."""

    pass


class EntryParseError(ProxyError):
    """Calendar resource could not be parsed into entries."""

    pass


class RenderError(ProxyError):
    """Aggregate calendar could not be serialized."""

    pass
