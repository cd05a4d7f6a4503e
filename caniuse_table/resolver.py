"""Map a package version onto the caniuse revision it was released from."""

from __future__ import annotations

import logging
from pathlib import Path
import re

from .cache import fetch_or_cache
from .constants import GIT_HEAD_CACHE_KEY, REGISTRY_URL_TEMPLATE, UPSTREAM_PACKAGE
from .exceptions import ConfigurationError, SchemaError
from .http import fetch_bytes
from .model import RegistryRecord, parse_registry_record

LOGGER = logging.getLogger(__name__)

_SEMVER_RE = re.compile(
    r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    r"(?:-[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*)?"
    r"(?:\+[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*)?$"
)


def registry_url(
    package_version: str,
    *,
    template: str = REGISTRY_URL_TEMPLATE,
    package: str = UPSTREAM_PACKAGE,
) -> str:
    if not _SEMVER_RE.fullmatch(package_version or ""):
        raise ConfigurationError(
            "package version", f"{package_version!r} is not a semantic version"
        )
    return template.format(package=package, version=package_version)


def resolve_head(
    package_version: str,
    cache_dir: Path,
    *,
    template: str = REGISTRY_URL_TEMPLATE,
    package: str = UPSTREAM_PACKAGE,
) -> str:
    """Return the upstream git revision published with package_version."""
    LOGGER.info("Version: %s", package_version)
    url = registry_url(package_version, template=template, package=package)
    downloaded: list[RegistryRecord] = []

    def _download() -> bytes:
        body = fetch_bytes(url)
        downloaded.append(parse_registry_record(body, url))
        return body

    try:
        raw = fetch_or_cache(
            cache_dir, GIT_HEAD_CACHE_KEY.format(version=package_version), _download
        )
        record = downloaded[0] if downloaded else parse_registry_record(raw, url)
    except SchemaError as exc:
        raise ConfigurationError(
            url, f"no usable gitHead for {package} {package_version} ({exc.detail})"
        ) from exc

    LOGGER.info("Head: %s", record.git_head)
    return record.git_head
