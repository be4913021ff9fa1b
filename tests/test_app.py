"""
Tests for application-wide behaviour: health, unknown routes, headers and error handling.
"""

from __future__ import annotations

import logging

from fastapi.testclient import TestClient

from washield.main import ContextFormatter, create_app


def test_health(client):
    r = client.get("/health")

    assert r.status_code == 200
    assert r.json()["status"] == "OK"
    assert r.json()["timestamp"]


def test_unknown_route_returns_json_not_found(client):
    r = client.get("/no/such/route")

    assert r.status_code == 404
    assert r.json() == {"error": "Route not found"}


def test_security_headers_present(client):
    r = client.get("/health")

    assert r.headers["X-Content-Type-Options"] == "nosniff"
    assert r.headers["X-Frame-Options"] == "SAMEORIGIN"
    assert r.headers["Referrer-Policy"] == "no-referrer"


def test_cors_is_permissive(client):
    r = client.options(
        "/api/messages",
        headers={"Origin": "https://app.example.test", "Access-Control-Request-Method": "POST"},
    )

    assert r.status_code == 200
    assert r.headers["access-control-allow-origin"] in {"*", "https://app.example.test"}


def test_unhandled_error_echoes_message(test_settings):
    app = create_app(app_settings=test_settings)

    @app.get("/boom")
    def boom():
        raise RuntimeError("kaboom")

    client = TestClient(app, raise_server_exceptions=False)
    r = client.get("/boom")

    assert r.status_code == 500
    assert r.json() == {"error": "Internal server error", "message": "kaboom"}


def test_context_formatter_appends_extras():
    formatter = ContextFormatter("%(levelname)s:%(name)s:%(message)s")
    record = logging.LogRecord("washield.test", logging.INFO, __file__, 1, "Message stored", None, None)
    record.message_id = "msg_1"
    record.error = ""

    assert formatter.format(record) == "INFO:washield.test:Message stored | message_id=msg_1"


def test_unhandled_error_keeps_security_headers(test_settings):
    app = create_app(app_settings=test_settings)

    @app.get("/boom")
    def boom():
        raise RuntimeError("kaboom")

    r = TestClient(app, raise_server_exceptions=False).get("/boom")

    assert r.status_code == 500
    assert r.headers["X-Content-Type-Options"] == "nosniff"
    assert r.headers["X-Frame-Options"] == "SAMEORIGIN"


def test_health_timestamp_uses_z_suffix(client):
    stamp = client.get("/health").json()["timestamp"]

    assert stamp.endswith("Z")
    assert "+00:00" not in stamp


def test_request_log_carries_method_and_path(client, caplog):
    with caplog.at_level(logging.INFO, logger="washield.main"):
        client.get("/health")

    records = [r for r in caplog.records if getattr(r, "path", None) == "/health"]
    assert records
    assert records[0].method == "GET"
