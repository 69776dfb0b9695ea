from __future__ import annotations

import pytest
import requests

from pos_import.common.constants import USER_AGENT
from pos_import.common.http import HttpClient, HttpRequestError, TimeoutConfig


class FakeResponse:
    def __init__(self, status_code: int, text: str = ""):
        self.status_code = status_code
        self.text = text


def test_http_get_text_success(monkeypatch):
    client = HttpClient()
    monkeypatch.setattr(client.session, "request", lambda **_kwargs: FakeResponse(200, "<osm/>"))

    assert client.get_text("https://example.com") == "<osm/>"


def test_http_get_text_sends_user_agent_and_timeouts(monkeypatch):
    captured = {}

    def fake_request(**kwargs):
        captured.update(kwargs)
        return FakeResponse(200, "<osm/>")

    client = HttpClient(timeout=TimeoutConfig(connect=1.5, read=2.5))
    monkeypatch.setattr(client.session, "request", fake_request)
    client.get_text("https://example.com", headers={"Accept": "application/xml"})

    assert captured["method"] == "GET"
    assert captured["headers"]["User-Agent"] == USER_AGENT
    assert captured["headers"]["Accept"] == "application/xml"
    assert captured["timeout"] == (1.5, 2.5)


def test_http_default_timeouts():
    assert TimeoutConfig() == TimeoutConfig(connect=5.0, read=10.0)


def test_http_non_200_status_raises_with_status_code(monkeypatch):
    client = HttpClient()
    monkeypatch.setattr(client.session, "request", lambda **_kwargs: FakeResponse(404, "gone"))

    with pytest.raises(HttpRequestError) as excinfo:
        client.get_text("https://example.com")
    assert excinfo.value.status_code == 404


def test_http_transport_error_propagates(monkeypatch):
    def boom(**_kwargs):
        raise requests.ConnectionError("refused")

    client = HttpClient()
    monkeypatch.setattr(client.session, "request", boom)

    with pytest.raises(requests.ConnectionError):
        client.get_text("https://example.com")


def test_http_client_context_manager_closes_session(monkeypatch):
    closed = []
    with HttpClient() as client:
        monkeypatch.setattr(client.session, "close", lambda: closed.append(True))
    assert closed == [True]
