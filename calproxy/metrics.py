"""In-process request counters with Prometheus text exposition."""

import threading
from collections import Counter


class ProxyMetrics:
    """Counters for inbound and outbound requests.

    Passed explicitly to the pipeline and the Flask app; each instance is
    independent so tests can inspect their own counts.
    """

    IN_REQUESTS = "calproxy_in_requests"
    OUT_REQUESTS = "calproxy_outgoing_reqs"

    def __init__(self):
        self._lock = threading.Lock()
        self._inbound: Counter[str] = Counter()
        self._outbound = 0

    def record_inbound(self, status: str) -> None:
        """Count one inbound request by outcome ("ok" or "err")."""
        with self._lock:
            self._inbound[status] += 1

    def record_outbound(self) -> None:
        """Count one outbound request."""
        with self._lock:
            self._outbound += 1

    def inbound(self, status: str) -> int:
        with self._lock:
            return self._inbound[status]

    @property
    def outbound(self) -> int:
        with self._lock:
            return self._outbound

    def render_text(self) -> str:
        """Render counters in the Prometheus text exposition format."""
        with self._lock:
            inbound = sorted(self._inbound.items())
            outbound = self._outbound

        lines = [
            f"# HELP {self.IN_REQUESTS} incoming requests",
            f"# TYPE {self.IN_REQUESTS} counter",
        ]
        for status, count in inbound:
            lines.append(f'{self.IN_REQUESTS}{{status="{status}"}} {count}')
        lines += [
            f"# HELP {self.OUT_REQUESTS} outgoing requests",
            f"# TYPE {self.OUT_REQUESTS} counter",
            f"{self.OUT_REQUESTS} {outbound}",
        ]
        return "\n".join(lines) + "\n"
