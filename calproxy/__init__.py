import logging
import time

from flask import Flask, Response, request

from .config import ProxyConfig
from .constants import CALENDAR_CONTENT_TYPE
from .exceptions import ProxyError
from .metrics import ProxyMetrics
from .pipeline import CalendarPipeline

logger = logging.getLogger(__name__)


def create_app(
    config: ProxyConfig | None = None, pipeline: CalendarPipeline | None = None
):
    if pipeline is None:
        config = config or ProxyConfig.from_env()
        pipeline = CalendarPipeline.from_config(config)
    metrics = pipeline.metrics

    app = Flask(__name__)
    app.config["PIPELINE"] = pipeline

    @app.route("/health", methods=["GET"])
    def health():
        return "", 200

    @app.route("/metrics", methods=["GET"])
    def metrics_endpoint():
        return Response(
            metrics.render_text(), content_type="text/plain; version=0.0.4"
        )

    @app.route("/", defaults={"path": ""}, methods=["GET"])
    @app.route("/<path:path>", methods=["GET"])
    def get_calendar(path):
        """Serve the composite calendar built from the upstream index."""
        started = time.monotonic()
        remote = request.headers.get("X-Forwarded-For") or request.remote_addr
        user_agent = request.headers.get("User-Agent", "")

        try:
            ical_content = pipeline.run()
        except ProxyError as e:
            duration = time.monotonic() - started
            logger.error(
                f"getall failed user_agent={user_agent!r} remote={remote} "
                f"dur={duration:.3f}s: {e}"
            )
            metrics.record_inbound("err")
            return "", 500
        except Exception as e:
            duration = time.monotonic() - started
            logger.exception(
                f"getall crashed user_agent={user_agent!r} remote={remote} "
                f"dur={duration:.3f}s: {e}"
            )
            metrics.record_inbound("err")
            return "", 500

        duration = time.monotonic() - started
        logger.info(
            f"getall user_agent={user_agent!r} remote={remote} dur={duration:.3f}s"
        )
        metrics.record_inbound("ok")
        return Response(ical_content, content_type=CALENDAR_CONTENT_TYPE)

    return app


__all__ = ["create_app"]
