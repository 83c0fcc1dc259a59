import json
import logging

from flask import g

from campus_connect.core.logger import JSONFormatter, RequestContextFilter
from campus_connect.entities.identity import Identity
from tests.helpers import bearer, login, make_user


def _record(**extra):
    record = logging.LogRecord("campus_connect.test", logging.INFO, __file__, 1, "hello %s", ("world",), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_renders_one_json_object():
    line = JSONFormatter().format(_record(request_id="rid-1", user_id=5, status_code=200, ignored="x"))

    payload = json.loads(line)
    assert payload["message"] == "hello world"
    assert payload["level"] == "INFO"
    assert payload["request_id"] == "rid-1"
    assert payload["user_id"] == 5
    assert payload["status_code"] == 200
    assert "ignored" not in payload


def test_filter_stamps_request_id_and_authenticated_user(app):
    with app.test_request_context(headers={"X-Correlation-ID": "corr-9"}):
        g.identity = Identity(id=42, email="x@rishihood.edu.in")
        record = _record()
        RequestContextFilter().filter(record)

        explicit = _record(user_id=7)
        RequestContextFilter().filter(explicit)

    assert record.request_id == "corr-9"
    assert record.user_id == 42
    assert explicit.user_id == 7


def test_filter_outside_request():
    record = _record()

    assert RequestContextFilter().filter(record)
    assert record.request_id is None


def test_request_id_is_echoed(client):
    assert client.get("/health", headers={"X-Request-ID": "abc"}).headers["X-Request-ID"] == "abc"
    assert client.get("/health").headers["X-Request-ID"]


def test_access_line_per_request_skips_health(client, caplog):
    user = make_user()
    token = login(client, user.email)

    with caplog.at_level(logging.INFO, logger="campus_connect.access"):
        client.get("/health")
        client.get("/api/auth/me", headers=bearer(token))

    lines = [r for r in caplog.records if r.name == "campus_connect.access"]
    assert len(lines) == 1
    assert lines[0].status_code == 200
    assert lines[0].method == "GET"
    assert lines[0].endpoint == "profile.me"
    assert lines[0].elapsed_ms >= 0
