"""Build settings gathered from the command line and the environment."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
import os
from pathlib import Path
from typing import Any

from ._version import __version__
from .constants import (
    DATASET_URL_TEMPLATE,
    DEFAULT_OUTPUT_NAME,
    DEFAULT_TIMEOUT_SECONDS,
    ENV_BUILD_OUT_DIR,
    ENV_DISABLE,
    ENV_OUT_DIR,
    ENV_PACKAGE_VERSION,
    REGISTRY_URL_TEMPLATE,
)
from .exceptions import ConfigurationError

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class BuildSettings:
    package_version: str
    out_dir: Path
    output_name: str = DEFAULT_OUTPUT_NAME
    registry_url: str = REGISTRY_URL_TEMPLATE
    dataset_url: str = DATASET_URL_TEMPLATE
    timeout: float | None = DEFAULT_TIMEOUT_SECONDS
    enabled: bool = True

    @property
    def cache_dir(self) -> Path:
        # Downloads are cached next to the generated artifact.
        return self.out_dir

    @property
    def output_path(self) -> Path:
        return self.out_dir / self.output_name

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        **overrides: Any,
    ) -> BuildSettings:
        """Build settings from environ, letting non-None overrides win."""
        env = os.environ if environ is None else environ
        values = {key: value for key, value in overrides.items() if value is not None}

        if "package_version" not in values:
            values["package_version"] = env.get(ENV_PACKAGE_VERSION, "").strip() or __version__

        if "out_dir" not in values:
            out_dir = env.get(ENV_OUT_DIR, "").strip() or env.get(ENV_BUILD_OUT_DIR, "").strip()
            if not out_dir:
                raise ConfigurationError(
                    "environment",
                    f"no output directory; pass --out-dir or set {ENV_OUT_DIR} or {ENV_BUILD_OUT_DIR}",
                )
            values["out_dir"] = out_dir
        values["out_dir"] = Path(values["out_dir"])

        if "enabled" not in values:
            values["enabled"] = env.get(ENV_DISABLE, "").strip().lower() not in _TRUTHY

        return cls(**values)
