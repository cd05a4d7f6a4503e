"""Runtime types referenced by the generated feature table."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .constants import FEATURE_DOC_URL_TEMPLATE


class Status(str, Enum):
    """Standardization state of a feature, as reported by caniuse."""

    REC = "rec"
    PR = "pr"
    CR = "cr"
    WD = "wd"
    LS = "ls"
    OTHER = "other"
    UNOFF = "unoff"


@dataclass(frozen=True)
class Feature:
    id: str
    title: str
    parent: str
    status: Status

    @property
    def url(self) -> str:
        """Canonical caniuse.com page for this feature."""
        return FEATURE_DOC_URL_TEMPLATE.format(id=self.id)
