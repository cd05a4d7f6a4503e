"""Constants used across caniuse-table."""

from __future__ import annotations

from typing import Final

UPSTREAM_PACKAGE: Final[str] = "caniuse-db"

REGISTRY_URL_TEMPLATE: Final[str] = "https://registry.npmjs.org/{package}/{version}"
DATASET_URL_TEMPLATE: Final[str] = (
    "https://raw.githubusercontent.com/Fyrd/caniuse/{revision}/data.json"
)
FEATURE_DOC_URL_TEMPLATE: Final[str] = "https://caniuse.com/#feat={id}"

GIT_HEAD_CACHE_KEY: Final[str] = "git_head_{version}"
DATASET_CACHE_KEY: Final[str] = "data_{revision}"

DEFAULT_OUTPUT_NAME: Final[str] = "caniuse_data.py"
CONSTANT_PREFIX: Final[str] = "FEATURE_"
TABLE_NAME: Final[str] = "FEATURES"

ENV_PACKAGE_VERSION: Final[str] = "CANIUSE_TABLE_PACKAGE_VERSION"
ENV_OUT_DIR: Final[str] = "CANIUSE_TABLE_OUT_DIR"
ENV_BUILD_OUT_DIR: Final[str] = "OUT_DIR"
ENV_DISABLE: Final[str] = "CANIUSE_TABLE_DISABLE"
ENV_DEBUG: Final[str] = "CANIUSE_TABLE_DEBUG"

# None disables the httpx timeout; a stalled download stalls the build.
DEFAULT_TIMEOUT_SECONDS: Final[float | None] = None
