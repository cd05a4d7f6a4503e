"""HTTP client layer for caniuse-table."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
import logging

import httpx

from ._version import __version__
from .constants import DEFAULT_TIMEOUT_SECONDS
from .exceptions import ContentError, HttpStatusError, NetworkError, RequestTimeoutError

LOGGER = logging.getLogger(__name__)

_SHARED_CLIENT: ContextVar[httpx.Client | None] = ContextVar(
    "caniuse_table_shared_client", default=None
)


def _build_headers() -> dict[str, str]:
    return {
        "User-Agent": f"caniuse-table/{__version__}",
        "Accept": "application/json",
        "Connection": "close",
    }


@contextmanager
def use_shared_client(
    timeout: float | None = DEFAULT_TIMEOUT_SECONDS,
) -> Iterator[httpx.Client]:
    """Provide one HTTP client for every download within a build."""
    with httpx.Client(timeout=timeout, follow_redirects=True, headers=_build_headers()) as client:
        token = _SHARED_CLIENT.set(client)
        try:
            yield client
        finally:
            _SHARED_CLIENT.reset(token)


def fetch_bytes(
    url: str,
    params: Mapping[str, str] | None = None,
    timeout: float | None = DEFAULT_TIMEOUT_SECONDS,
) -> bytes:
    """GET url once and return the raw body; any failure is fatal."""
    request_params = dict(params) if params else None
    shared_client = _SHARED_CLIENT.get()

    LOGGER.debug("GET %s", url)
    try:
        if shared_client is None or timeout != DEFAULT_TIMEOUT_SECONDS:
            with httpx.Client(
                timeout=timeout, follow_redirects=True, headers=_build_headers()
            ) as client:
                response = client.get(url, params=request_params)
        else:
            response = shared_client.get(url, params=request_params)
    except httpx.TimeoutException as exc:
        raise RequestTimeoutError(url) from exc
    except httpx.RequestError as exc:
        raise NetworkError(url, cause=exc.__class__.__name__) from exc

    if response.status_code != 200:
        raise HttpStatusError(response.status_code, str(response.url))

    body = response.content
    if not body.strip():
        raise ContentError(str(response.url))
    LOGGER.debug("Received %d bytes from %s", len(body), response.url)
    return body
