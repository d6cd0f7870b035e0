"""Tests for the Flask application."""

import logging

from calproxy import create_app
from calproxy.config import ProxyConfig
from helpers import BASE, TARGET, make_ics


def test_app_factory_exists():
    assert callable(create_app)


def test_get_calendar(client, serve_calendars, metrics):
    serve_calendars(
        {"/a.ics": make_ics(events=["A"]), "/b.ics": make_ics(events=["B"])}
    )

    response = client.get("/")

    assert response.status_code == 200
    assert response.content_type == "text/calendar; charset=utf-8"
    body = response.get_data(as_text=True)
    assert body.startswith("BEGIN:VCALENDAR")
    assert "UID:A" in body and "UID:B" in body
    assert metrics.inbound("ok") == 1


def test_any_path_serves_calendar(client, serve_calendars):
    serve_calendars({"/a.ics": make_ics(events=["A"])})

    response = client.get("/calendar.ics")

    assert response.status_code == 200
    assert "UID:A" in response.get_data(as_text=True)


def test_index_failure_returns_500_with_empty_body(client, session, metrics):
    session.routes[TARGET] = (401, b"")

    response = client.get("/")

    assert response.status_code == 500
    assert response.data == b""
    assert metrics.inbound("err") == 1
    assert metrics.inbound("ok") == 0


def test_partial_failure_returns_200(client, serve_calendars):
    serve_calendars({"/a.ics": make_ics(events=["A"]), "/gone.ics": None})

    response = client.get("/")

    assert response.status_code == 200
    assert "UID:A" in response.get_data(as_text=True)


def test_request_logs_forwarded_remote(client, serve_calendars, caplog):
    serve_calendars({})

    with caplog.at_level(logging.INFO, logger="calproxy"):
        client.get("/", headers={"X-Forwarded-For": "203.0.113.7", "User-Agent": "cal/1.0"})

    assert "203.0.113.7" in caplog.text
    assert "cal/1.0" in caplog.text


def test_health(client, session):
    response = client.get("/health")

    assert response.status_code == 200
    assert session.calls == []


def test_metrics_endpoint(client, serve_calendars):
    serve_calendars({"/a.ics": make_ics(events=["A"])})
    client.get("/")

    response = client.get("/metrics")

    text = response.get_data(as_text=True)
    assert response.status_code == 200
    assert 'calproxy_in_requests{status="ok"} 1' in text
    assert "calproxy_outgoing_reqs 2" in text


def test_create_app_from_config():
    app = create_app(ProxyConfig(target=TARGET))

    assert app.config["PIPELINE"].target == TARGET


def test_unexpected_error_returns_500_with_empty_body(
    client, serve_calendars, session, metrics
):
    serve_calendars({"/a.ics": None})
    session.routes[BASE + "/a.ics"] = ValueError("invalid timeout")

    response = client.get("/")

    assert response.status_code == 500
    assert response.data == b""
    assert metrics.inbound("err") == 1
