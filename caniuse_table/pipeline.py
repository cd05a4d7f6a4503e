"""Resolve, download, validate and emit, in that order."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path

from .config import BuildSettings
from .constants import UPSTREAM_PACKAGE
from .emit import write_table
from .http import use_shared_client
from .loader import load
from .resolver import resolve_head

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class BuildResult:
    package_version: str
    output_path: Path
    revision: str | None = None
    feature_count: int = 0
    skipped: bool = False


def build(settings: BuildSettings) -> BuildResult:
    """Run the whole generation step once for settings."""
    if not settings.enabled:
        LOGGER.info("Feature table generation disabled; nothing to do")
        return BuildResult(
            package_version=settings.package_version,
            output_path=settings.output_path,
            skipped=True,
        )

    with use_shared_client(settings.timeout):
        revision = resolve_head(
            settings.package_version,
            settings.cache_dir,
            template=settings.registry_url,
        )
        dataset = load(revision, settings.cache_dir, template=settings.dataset_url)
    output_path = write_table(
        dataset,
        settings.output_path,
        source=f"{UPSTREAM_PACKAGE} {settings.package_version} (revision {revision})",
    )
    return BuildResult(
        package_version=settings.package_version,
        output_path=output_path,
        revision=revision,
        feature_count=len(dataset.data),
    )
