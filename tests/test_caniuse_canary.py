from __future__ import annotations

from pathlib import Path

import pytest

from caniuse_table.config import BuildSettings
from caniuse_table.pipeline import build

CANARY_VERSION = "1.0.30001559"


@pytest.mark.canary
def test_registry_and_dataset_still_match_schema_live(tmp_path: Path) -> None:
    """
    Canary test: resolve a real caniuse-db release and generate its table.

    This is intentionally a single, live-network test to detect upstream schema drift
    (new statuses, browsers or prefixes) before it breaks a build.
    """
    result = build(BuildSettings(package_version=CANARY_VERSION, out_dir=tmp_path))

    assert result.revision
    assert result.feature_count > 400
    namespace: dict[str, object] = {}
    source = result.output_path.read_text(encoding="utf-8")
    exec(compile(source, "caniuse_data.py", "exec"), namespace)
    features = namespace["FEATURES"]
    assert "flexbox" in features  # type: ignore[operator]
    assert (tmp_path / f"git_head_{CANARY_VERSION}").is_file()
    assert (tmp_path / f"data_{result.revision}").is_file()
