"""Tests for the capture-service client."""

import dataclasses
from urllib.parse import parse_qs, urlsplit

import pytest
import requests

from ledboard.config import SETTINGS
from ledboard.errors import CaptureError
from ledboard.infrastructure import capture as capture_module
from ledboard.infrastructure.capture import CaptureClient, _merge_query_params


class FakeResponse:
    def __init__(self, content=b"", status=200):
        self.content = content
        self.status_code = status

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"status {self.status_code}")


class FakeSession:
    def __init__(self, responses):
        self.headers = {}
        self.calls = []
        self._responses = list(responses)

    def get(self, url, timeout=None):
        self.calls.append((url, timeout))
        result = self._responses.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


def _client(responses, **overrides):
    values = {
        "capture_url": "http://capture.local/shot?format=png",
        "capture_retries": 1,
        "capture_timeout": 5.0,
        "viewport_width": 800,
        "viewport_height": 480,
    }
    values.update(overrides)
    settings = dataclasses.replace(SETTINGS, **values)
    session = FakeSession(responses)
    return CaptureClient(settings, session_factory=lambda: session), session


@pytest.fixture(autouse=True)
def no_sleep(monkeypatch):
    monkeypatch.setattr(capture_module.time, "sleep", lambda _: None)


def test_merge_query_params_no_overrides():
    url = "http://example.com/render?dashboard=main"
    assert _merge_query_params(url, None) == url


def test_merge_query_params_adds_new_keys_and_removes_none_values():
    url = "http://example.com/render?format=png"
    merged = _merge_query_params(url, {"url": "http://site", "selector": None})
    assert merged == "http://example.com/render?format=png&url=http%3A%2F%2Fsite"


def test_capture_returns_service_bytes():
    client, session = _client([FakeResponse(b"png-bytes")])

    assert client.capture("http://example.com", selector="#board") == b"png-bytes"

    url, timeout = session.calls[0]
    query = parse_qs(urlsplit(url).query)
    assert query == {
        "format": ["png"],
        "url": ["http://example.com"],
        "selector": ["#board"],
        "width": ["800"],
        "height": ["480"],
    }
    assert timeout == 5.0
    assert session.headers["User-Agent"].startswith("ledboard/")


def test_capture_omits_selector_when_absent():
    client, session = _client([FakeResponse(b"png-bytes")])

    client.capture("http://example.com")

    assert "selector" not in parse_qs(urlsplit(session.calls[0][0]).query)


def test_capture_retries_then_succeeds():
    client, session = _client([requests.ConnectionError("down"), FakeResponse(b"ok")])

    assert client.capture("http://example.com") == b"ok"
    assert len(session.calls) == 2


def test_capture_gives_up_after_retries():
    client, session = _client([FakeResponse(status=500), FakeResponse(status=503)])

    with pytest.raises(CaptureError):
        client.capture("http://example.com")
    assert len(session.calls) == 2


def test_capture_rejects_empty_body():
    client, _ = _client([FakeResponse(b"")])

    with pytest.raises(CaptureError):
        client.capture("http://example.com")


def test_capture_requires_configured_service():
    client, session = _client([], capture_url="")

    with pytest.raises(CaptureError):
        client.capture("http://example.com")
    assert session.calls == []
