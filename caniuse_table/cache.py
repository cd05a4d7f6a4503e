"""Local download cache keyed by file name.

A cache entry is a plain file holding the raw response bytes. Its presence is
the only hit signal: there is no expiry, so every key must already encode the
version or revision that determines its content.
"""

from __future__ import annotations

from collections.abc import Callable
import logging
import os
from pathlib import Path
import tempfile

from .exceptions import CacheIOError

LOGGER = logging.getLogger(__name__)


def cache_path(cache_dir: Path, key: str) -> Path:
    """Return the file backing key, rejecting keys that are not plain names."""
    if not key or key in {".", ".."} or "/" in key or "\\" in key or os.sep in key:
        raise CacheIOError(Path(cache_dir) / key, cause=f"invalid cache key {key!r}")
    return Path(cache_dir) / key


def _read(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as exc:
        raise CacheIOError(path, cause=exc.__class__.__name__) from exc


def _write(path: Path, body: bytes) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
    except OSError as exc:
        raise CacheIOError(path, cause=exc.__class__.__name__) from exc

    tmp_path = Path(tmp_name)
    try:
        try:
            handle = os.fdopen(fd, "wb")
        except BaseException:
            os.close(fd)
            raise
        with handle:
            handle.write(body)
        os.replace(tmp_path, path)
    except OSError as exc:
        tmp_path.unlink(missing_ok=True)
        raise CacheIOError(path, cause=exc.__class__.__name__) from exc


def fetch_or_cache(cache_dir: Path, key: str, producer: Callable[[], bytes]) -> bytes:
    """Return cached bytes for key, or call producer once and persist its result.

    Errors raised by producer propagate unchanged and leave no cache entry.
    """
    path = cache_path(cache_dir, key)
    if path.is_file():
        LOGGER.debug("Cache hit for %s", path)
        return _read(path)

    LOGGER.debug("Cache miss for %s", path)
    body = producer()
    _write(path, body)
    return body
