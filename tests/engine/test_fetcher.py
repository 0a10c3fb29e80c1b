from __future__ import annotations

import httpx
import pytest

from gitignore_cli.config import GlobalConfig
from gitignore_cli.engine.fetcher import FetchError, FetchRequest, Fetcher


def test_fetcher_applies_timeout_and_headers(monkeypatch: pytest.MonkeyPatch) -> None:
    config = GlobalConfig(request_timeout=7)
    fetcher = Fetcher(config)
    captured: dict = {}

    def fake_request(**kwargs):
        captured.update(kwargs)
        request = httpx.Request(kwargs["method"], kwargs["url"])
        return httpx.Response(200, request=request, text="payload", headers={"Server": "mock"})

    monkeypatch.setattr(fetcher._client, "request", fake_request)
    response = fetcher.fetch(FetchRequest(url="https://example.com/api", headers={"X-Test": "1"}))
    fetcher.close()

    assert captured["method"] == "GET"
    assert captured["timeout"] == 7
    assert captured["headers"] == {"X-Test": "1"}
    assert response.status_code == 200
    assert response.text == "payload"
    assert response.headers["server"] == "mock"
    assert response.raw is not None


def test_fetcher_uses_configured_user_agent() -> None:
    fetcher = Fetcher(GlobalConfig(user_agent="tester/1.0"))
    assert fetcher._client.headers["User-Agent"] == "tester/1.0"
    fetcher.close()


def test_fetcher_wraps_transport_errors() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("offline", request=request)

    with httpx.Client(transport=httpx.MockTransport(handler)) as client:
        fetcher = Fetcher(GlobalConfig(), client=client)
        with pytest.raises(FetchError) as excinfo:
            fetcher.get("https://example.com/down")
    assert excinfo.value.url == "https://example.com/down"
    assert excinfo.value.status_code is None
    assert isinstance(excinfo.value.__cause__, httpx.ConnectError)


def test_fetcher_rejects_non_success_status() -> None:
    with httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(404))) as client:
        fetcher = Fetcher(GlobalConfig(), client=client)
        with pytest.raises(FetchError) as excinfo:
            fetcher.get("https://example.com/missing")
    assert excinfo.value.status_code == 404


def test_fetcher_does_not_close_injected_client() -> None:
    client = httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
    with Fetcher(GlobalConfig(), client=client):
        pass
    assert not client.is_closed
    client.close()


def test_fetch_response_json() -> None:
    payload = {"sha": "abc"}
    with httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(200, json=payload))) as client:
        response = Fetcher(GlobalConfig(), client=client).get("https://example.com/json")
    assert response.json() == payload


def test_fetcher_failure_classification() -> None:
    class Dummy:
        def __init__(self, status_code):
            self.status_code = status_code

    assert Fetcher._is_failure(Dummy(500))
    assert Fetcher._is_failure(Dummy(404))
    assert Fetcher._is_failure(Dummy(301))
    assert not Fetcher._is_failure(Dummy(200))
    assert not Fetcher._is_failure(Dummy(204))


def test_fetcher_wraps_invalid_url() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.InvalidURL("bad")

    with httpx.Client(transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(FetchError) as excinfo:
            Fetcher(GlobalConfig(), client=client).get("https://example.com/x")
    assert isinstance(excinfo.value.__cause__, httpx.InvalidURL)


def test_fetch_response_keeps_raw_bytes() -> None:
    body = b"caf\xe9\n"
    with httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(200, content=body))) as client:
        response = Fetcher(GlobalConfig(), client=client).get("https://example.com/bytes")
    assert response.content == body
