"""Typed records for the caniuse snapshot and the npm registry answer.

Decoding goes through pydantic so that the records double as a schema: an
enum value or browser id this package does not know about fails the build
instead of being carried into the generated table.
"""

from __future__ import annotations

from enum import Enum
import json
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .exceptions import DuplicateKeyError, SchemaError
from .shared import Status

__all__ = [
    "Agent",
    "Browser",
    "Dataset",
    "Feature",
    "Prefix",
    "RegistryRecord",
    "Status",
    "parse_dataset",
    "parse_registry_record",
]


class Browser(str, Enum):
    IE = "ie"
    EDGE = "edge"
    FIREFOX = "firefox"
    CHROME = "chrome"
    SAFARI = "safari"
    OPERA = "opera"
    IOS_SAF = "ios_saf"
    OP_MINI = "op_mini"
    ANDROID = "android"
    BB = "bb"
    OP_MOB = "op_mob"
    AND_CHR = "and_chr"
    AND_FF = "and_ff"
    IE_MOB = "ie_mob"
    AND_UC = "and_uc"
    SAMSUNG = "samsung"
    AND_QQ = "and_qq"
    BAIDU = "baidu"
    KAIOS = "kaios"


class Prefix(str, Enum):
    WEBKIT = "webkit"
    MOZ = "moz"
    MS = "ms"
    O = "o"  # noqa: E741


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class Agent(_Record):
    """One browser entry. Only checked for shape, never emitted."""

    browser: str
    abbr: str
    prefix: Prefix
    agent_type: str = Field(alias="type")
    versions: list[str | None]
    prefix_exceptions: dict[str, Prefix] | None = None


class Feature(_Record):
    title: str
    description: str
    spec: str
    status: Status
    stats: dict[Browser, dict[str, str]]
    parent: str


class Dataset(_Record):
    # statuses and agents are decoded for validation only
    statuses: dict[Status, str]
    agents: dict[Browser, Agent]
    data: dict[str, Feature]


class RegistryRecord(_Record):
    git_head: str = Field(alias="gitHead", min_length=1)


_RecordT = TypeVar("_RecordT", bound=_Record)


class _JsonObject(dict):
    """Decoded JSON object that remembers keys seen more than once."""

    duplicates: tuple[str, ...] = ()


def _object_pairs(pairs: list[tuple[str, Any]]) -> _JsonObject:
    obj = _JsonObject()
    repeated: list[str] = []
    for key, value in pairs:
        if key in obj:
            repeated.append(key)
        obj[key] = value
    if repeated:
        obj.duplicates = tuple(repeated)
    return obj


def _load_json(raw: bytes | str, source: str) -> Any:
    try:
        return json.loads(raw, object_pairs_hook=_object_pairs)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise SchemaError(source, f"invalid JSON ({exc})") from exc


def _describe(exc: ValidationError) -> str:
    errors = exc.errors()
    first = errors[0]
    location = ".".join(str(part) for part in first["loc"]) or "<root>"
    detail = f"{location}: {first['msg']}"
    if len(errors) > 1:
        detail = f"{detail} (+{len(errors) - 1} more)"
    return detail


def _validate(model: type[_RecordT], payload: Any, source: str) -> _RecordT:
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise SchemaError(source, _describe(exc)) from exc


def parse_dataset(raw: bytes | str, source: str) -> Dataset:
    """Decode a caniuse data.json snapshot."""
    payload = _load_json(raw, source)
    if isinstance(payload, dict):
        features = payload.get("data")
        if isinstance(features, _JsonObject) and features.duplicates:
            raise DuplicateKeyError(features.duplicates[0])
    return _validate(Dataset, payload, source)


def parse_registry_record(raw: bytes | str, source: str) -> RegistryRecord:
    """Decode the npm manifest of one caniuse-db release."""
    return _validate(RegistryRecord, _load_json(raw, source), source)
