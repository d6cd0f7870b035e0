"""Test helpers: document builders and a fake requests session."""

import threading
import time

TARGET = "https://dav.example.com/remote.php/calendars/index.html"
BASE = "https://dav.example.com"


def make_index(locators, table_class="nodeTable"):
    """Build an index document listing the given locators."""
    rows = "".join(
        f'<tr><td class="nameColumn"><a href="{loc}">{loc}</a></td>'
        f'<td class="sizeColumn">1 KB</td></tr>'
        for loc in locators
    )
    return (
        "<html><head><title>Index</title></head><body>"
        f'<section><table class="{table_class}">{rows}</table></section>'
        "</body></html>"
    ).encode()


def make_ics(events=(), timezones=(), todos=()):
    """Build an ICS document with events, timezones and todos by identifier."""
    lines = ["BEGIN:VCALENDAR", "VERSION:2.0", "PRODID:-//test//EN"]
    for tzid in timezones:
        lines += [
            "BEGIN:VTIMEZONE",
            f"TZID:{tzid}",
            "BEGIN:STANDARD",
            "DTSTART:19701025T030000",
            "TZOFFSETFROM:+0200",
            "TZOFFSETTO:+0100",
            "END:STANDARD",
            "END:VTIMEZONE",
        ]
    for uid in events:
        lines += [
            "BEGIN:VEVENT",
            f"UID:{uid}",
            "DTSTAMP:20250101T000000Z",
            "DTSTART:20250101T090000Z",
            "DTEND:20250101T100000Z",
            f"SUMMARY:Event {uid}",
            "END:VEVENT",
        ]
    for uid in todos:
        lines += [
            "BEGIN:VTODO",
            f"UID:{uid}",
            "DTSTAMP:20250101T000000Z",
            f"SUMMARY:Todo {uid}",
            "END:VTODO",
        ]
    lines.append("END:VCALENDAR")
    return ("\r\n".join(lines) + "\r\n").encode()


def entry_ids(aggregate):
    """Identifiers of every entry in an aggregate: event UIDs and timezone TZIDs."""
    return [e.uid for e in aggregate.events] + [t.tzid for t in aggregate.timezones]


class FakeResponse:
    """Stand-in for requests.Response used as a context manager.

    Streams its content through iter_content, then raises read_error if set.
    """

    def __init__(self, status_code=200, content=b"", reason="OK", read_error=None):
        self.status_code = status_code
        self.reason = reason
        self._content = content
        self._read_error = read_error
        self.closed = False

    def iter_content(self, chunk_size=1):
        for start in range(0, len(self._content), chunk_size):
            yield self._content[start : start + chunk_size]
        if self._read_error is not None:
            raise self._read_error

    def close(self):
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()


class FakeSession:
    """Stand-in for requests.Session serving canned responses by URL.

    A route is a (status, body) tuple, a FakeResponse, an exception to raise,
    or a callable taking the URL and returning one of those.
    """

    def __init__(self, routes=None, delays=None):
        self.routes = dict(routes or {})
        self.delays = dict(delays or {})
        self.calls = []
        self.max_active = 0
        self._active = 0
        self._lock = threading.Lock()

    def get(self, url, auth=None, timeout=None, stream=False):
        with self._lock:
            self.calls.append({"url": url, "auth": auth, "timeout": timeout})
            self._active += 1
            self.max_active = max(self.max_active, self._active)
        try:
            delay = self.delays.get(url, 0)
            if delay:
                time.sleep(delay)
            return self._respond(url)
        finally:
            with self._lock:
                self._active -= 1

    def _respond(self, url):
        route = self.routes.get(url)
        if callable(route) and not isinstance(route, type):
            route = route(url)
        if route is None:
            return FakeResponse(404, reason="Not Found")
        if isinstance(route, BaseException):
            raise route
        if isinstance(route, FakeResponse):
            return route
        status, body = route
        return FakeResponse(status, body, reason="OK" if status < 300 else "Error")

    @property
    def urls(self):
        return [call["url"] for call in self.calls]
