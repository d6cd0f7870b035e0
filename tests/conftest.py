import pytest

from calproxy import create_app
from calproxy.ingestion.fetcher import ResourceFetcher
from calproxy.metrics import ProxyMetrics
from calproxy.pipeline import CalendarPipeline
from helpers import BASE, TARGET, FakeSession, make_index


@pytest.fixture
def metrics():
    return ProxyMetrics()


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def fetcher(session, metrics):
    return ResourceFetcher("alice", "s3cret", metrics=metrics, session=session)


@pytest.fixture
def make_pipeline(fetcher, metrics):
    """Factory for pipelines against the fake session."""

    def _make(**kwargs):
        return CalendarPipeline(TARGET, fetcher, metrics=metrics, **kwargs)

    return _make


@pytest.fixture
def serve_calendars(session):
    """Register an index and its calendar resources on the fake session."""

    def _serve(resources, index_status=200):
        session.routes[TARGET] = (index_status, make_index(list(resources)))
        for locator, body in resources.items():
            if body is not None:
                session.routes[BASE + locator] = (200, body)
        return session

    return _serve


@pytest.fixture
def app(make_pipeline):
    """Create and configure a Flask app for testing."""
    app = create_app(pipeline=make_pipeline())
    return app


@pytest.fixture
def client(app):
    return app.test_client()
