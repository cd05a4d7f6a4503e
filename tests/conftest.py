from __future__ import annotations

from collections.abc import Iterator
import copy
import json
from typing import Any

import pytest

from caniuse_table.util.log import reset_logging

_AGENT: dict[str, Any] = {
    "browser": "Chrome",
    "abbr": "Chr.",
    "prefix": "webkit",
    "type": "desktop",
    "usage_global": {"79": 0.5, "80": 12.1},
    "versions": [None, "79", "80", None],
}

_FEATURE: dict[str, Any] = {
    "title": "CSS Grid",
    "description": "Method of using a grid concept to lay out content.",
    "spec": "https://www.w3.org/TR/css3-grid-layout/",
    "status": "rec",
    "links": [{"url": "https://example.com", "title": "Guide"}],
    "categories": ["CSS"],
    "stats": {"chrome": {"79": "n", "80": "y"}},
    "notes": "",
    "usage_perc_y": 95.2,
    "parent": "css",
}

_PAYLOAD: dict[str, Any] = {
    "eras": {"e-2": "2 versions back"},
    "agents": {"chrome": _AGENT},
    "statuses": {"rec": "W3C Recommendation", "cr": "W3C Candidate Recommendation"},
    "cats": {"CSS": ["CSS", "CSS3"]},
    "updated": 1585170000,
    "data": {"css-grid": _FEATURE},
}


def make_feature(**overrides: Any) -> dict[str, Any]:
    feature = copy.deepcopy(_FEATURE)
    feature.update(overrides)
    return feature


@pytest.fixture
def payload() -> dict[str, Any]:
    """A minimal but complete data.json document."""
    return copy.deepcopy(_PAYLOAD)


def dump(document: Any) -> bytes:
    return json.dumps(document).encode("utf-8")


@pytest.fixture(autouse=True)
def _clean_package_logger() -> Iterator[None]:
    reset_logging()
    yield
    reset_logging()
