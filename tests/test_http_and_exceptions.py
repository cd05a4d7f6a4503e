from __future__ import annotations

from typing import ClassVar

import httpx
import pytest

from caniuse_table import http
from caniuse_table.exceptions import (
    CacheIOError,
    CaniuseTableError,
    ConfigurationError,
    ContentError,
    DuplicateKeyError,
    GenerationIOError,
    HttpStatusError,
    NetworkError,
    RequestTimeoutError,
    SchemaError,
    SymbolCollisionError,
    TransportError,
)

URL = "https://raw.githubusercontent.com/Fyrd/caniuse/abc123/data.json"


class _FakeClient:
    plans: ClassVar[list[object]] = []
    seen_urls: ClassVar[list[str]] = []
    init_kwargs: ClassVar[list[dict[str, object]]] = []

    def __init__(self, **kwargs: object) -> None:
        _FakeClient.init_kwargs.append(kwargs)

    def __enter__(self) -> _FakeClient:
        return self

    def __exit__(
        self,
        _exc_type: type[BaseException] | None,
        _exc: BaseException | None,
        _tb: object | None,
    ) -> None:
        return None

    def get(self, url: str, params: dict[str, str] | None = None) -> httpx.Response:
        _FakeClient.seen_urls.append(url)
        plan = _FakeClient.plans.pop(0)
        if isinstance(plan, Exception):
            raise plan
        if isinstance(plan, tuple):
            status_code, content = plan
            return httpx.Response(
                status_code,
                content=content,
                request=httpx.Request("GET", url, params=params),
            )
        raise AssertionError


def _reset_plans(*plans: object) -> None:
    _FakeClient.plans = list(plans)
    _FakeClient.seen_urls = []
    _FakeClient.init_kwargs = []


def test_exception_messages() -> None:
    assert "Unable to connect" in str(NetworkError(URL))
    assert "Boom" in str(NetworkError(URL, cause="Boom"))
    assert "timed out" in str(RequestTimeoutError(URL))
    assert "HTTP 503" in str(HttpStatusError(503, URL))
    assert "empty response" in str(ContentError(URL))
    assert "git_head_1.0.0" in str(CacheIOError("/tmp/git_head_1.0.0"))
    assert "data.status" in str(SchemaError(URL, "data.status: bad"))
    config_error = ConfigurationError("environment", "no output directory")
    assert str(config_error) == "Invalid build configuration (environment): no output directory"
    assert isinstance(config_error, SchemaError)
    assert (config_error.source, config_error.detail) == ("environment", "no output directory")
    assert "'css-grid'" in str(DuplicateKeyError("css-grid"))
    assert "'a-b', 'a_b'" in str(SymbolCollisionError("A_B", ("a-b", "a_b")))
    assert "out.py" in str(GenerationIOError("out.py", cause="OSError"))


def test_transport_errors_share_a_base() -> None:
    for exc in (NetworkError(URL), RequestTimeoutError(URL), HttpStatusError(500, URL)):
        assert isinstance(exc, TransportError)
        assert isinstance(exc, CaniuseTableError)


def test_fetch_bytes_success(monkeypatch: pytest.MonkeyPatch) -> None:
    _reset_plans((200, b'{"ok": true}'))
    monkeypatch.setattr(http.httpx, "Client", _FakeClient)

    result = http.fetch_bytes(URL)

    assert result == b'{"ok": true}'
    assert _FakeClient.seen_urls == [URL]
    headers = _FakeClient.init_kwargs[0]["headers"]
    assert isinstance(headers, dict)
    assert headers["Connection"] == "close"
    assert headers["User-Agent"].startswith("caniuse-table/")


def test_fetch_bytes_timeout(monkeypatch: pytest.MonkeyPatch) -> None:
    _reset_plans(httpx.TimeoutException("slow"))
    monkeypatch.setattr(http.httpx, "Client", _FakeClient)

    with pytest.raises(RequestTimeoutError):
        http.fetch_bytes(URL)


def test_fetch_bytes_connect_error_is_not_retried(monkeypatch: pytest.MonkeyPatch) -> None:
    connect_exc = httpx.ConnectError("conn", request=httpx.Request("GET", URL))
    _reset_plans(connect_exc, (200, b"{}"))
    monkeypatch.setattr(http.httpx, "Client", _FakeClient)

    with pytest.raises(NetworkError, match="ConnectError"):
        http.fetch_bytes(URL)
    assert len(_FakeClient.seen_urls) == 1


def test_fetch_bytes_request_error(monkeypatch: pytest.MonkeyPatch) -> None:
    _reset_plans(httpx.RequestError("bad", request=httpx.Request("GET", URL)))
    monkeypatch.setattr(http.httpx, "Client", _FakeClient)

    with pytest.raises(NetworkError):
        http.fetch_bytes(URL)


def test_fetch_bytes_non_200(monkeypatch: pytest.MonkeyPatch) -> None:
    _reset_plans((404, b"404: Not Found"))
    monkeypatch.setattr(http.httpx, "Client", _FakeClient)

    with pytest.raises(HttpStatusError) as excinfo:
        http.fetch_bytes(URL)
    assert excinfo.value.status_code == 404
    assert excinfo.value.url == URL


def test_fetch_bytes_empty_content(monkeypatch: pytest.MonkeyPatch) -> None:
    _reset_plans((200, b"  \n"))
    monkeypatch.setattr(http.httpx, "Client", _FakeClient)

    with pytest.raises(ContentError):
        http.fetch_bytes(URL)


def test_shared_client_is_reused_and_reset(monkeypatch: pytest.MonkeyPatch) -> None:
    _reset_plans((200, b"one"), (200, b"two"))
    monkeypatch.setattr(http.httpx, "Client", _FakeClient)

    with http.use_shared_client() as client:
        assert http._SHARED_CLIENT.get() is client
        assert http.fetch_bytes(URL) == b"one"
        assert http.fetch_bytes(URL) == b"two"

    assert len(_FakeClient.init_kwargs) == 1
    assert http._SHARED_CLIENT.get() is None


def test_explicit_timeout_bypasses_shared_client(monkeypatch: pytest.MonkeyPatch) -> None:
    _reset_plans((200, b"body"))
    monkeypatch.setattr(http.httpx, "Client", _FakeClient)

    with http.use_shared_client():
        assert http.fetch_bytes(URL, timeout=3.0) == b"body"

    assert [kwargs["timeout"] for kwargs in _FakeClient.init_kwargs] == [None, 3.0]
