"""Download and decode the caniuse snapshot of a given revision."""

from __future__ import annotations

import logging
from pathlib import Path
import re

from .cache import fetch_or_cache
from .constants import DATASET_CACHE_KEY, DATASET_URL_TEMPLATE
from .exceptions import ConfigurationError
from .http import fetch_bytes
from .model import Dataset, parse_dataset

LOGGER = logging.getLogger(__name__)

_REVISION_RE = re.compile(r"^[A-Za-z0-9._-]+$")


def dataset_url(revision: str, *, template: str = DATASET_URL_TEMPLATE) -> str:
    if not _REVISION_RE.fullmatch(revision or "") or revision in {".", ".."}:
        raise ConfigurationError("revision", f"{revision!r} is not a usable revision id")
    return template.format(revision=revision)


def load(revision: str, cache_dir: Path, *, template: str = DATASET_URL_TEMPLATE) -> Dataset:
    """Fetch (or reuse) data.json for revision and validate it."""
    url = dataset_url(revision, template=template)
    downloaded: list[Dataset] = []

    def _download() -> bytes:
        # Only bodies that decode cleanly reach the cache.
        body = fetch_bytes(url)
        downloaded.append(parse_dataset(body, url))
        return body

    raw = fetch_or_cache(cache_dir, DATASET_CACHE_KEY.format(revision=revision), _download)
    dataset = downloaded[0] if downloaded else parse_dataset(raw, url)
    LOGGER.info(
        "Loaded %d features and %d agents for revision %s",
        len(dataset.data),
        len(dataset.agents),
        revision,
    )
    return dataset
