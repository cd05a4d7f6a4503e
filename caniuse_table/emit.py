"""Generate the Python module holding the static feature table.

The output defines one ``Feature`` constant per caniuse feature and a single
read-only ``FEATURES`` mapping from identifier to constant. Features are
written in identifier order so the same snapshot always produces the same
bytes. Only ``id``, ``title``, ``parent`` and ``status`` are emitted; the
remaining fields are validated on load and then dropped for every feature.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
import logging
import os
from pathlib import Path
import tempfile
from typing import TextIO

from .constants import CONSTANT_PREFIX, FEATURE_DOC_URL_TEMPLATE, TABLE_NAME
from .exceptions import DuplicateKeyError, GenerationIOError, SymbolCollisionError
from .model import Dataset, Feature
from .util.text import docstring_safe, py_string, to_symbol

LOGGER = logging.getLogger(__name__)

_HEADER = "# This file is generated by caniuse-table. Do not edit."
_MODULE_DOC = '"""caniuse feature records and their identifier lookup table."""'
_RUNTIME_MODULE = "caniuse_table.shared"


@dataclass(frozen=True)
class TableEntry:
    identifier: str
    constant: str
    feature: Feature


def symbol_for(identifier: str) -> str:
    """Derive the constant-name stem for a feature identifier.

    >>> symbol_for("multicolumn-breaking")
    'MULTICOLUMN_BREAKING'
    """
    symbol = to_symbol(identifier)
    if not symbol:
        raise SymbolCollisionError(symbol, (identifier,))
    return symbol


def collect_entries(features: Iterable[tuple[str, Feature]]) -> list[TableEntry]:
    """Order features by identifier and assign each a unique constant name."""
    by_identifier: dict[str, Feature] = {}
    for identifier, feature in features:
        if identifier in by_identifier:
            raise DuplicateKeyError(identifier)
        by_identifier[identifier] = feature

    entries: list[TableEntry] = []
    owners: dict[str, str] = {}
    for identifier in sorted(by_identifier):
        symbol = symbol_for(identifier)
        if symbol in owners:
            raise SymbolCollisionError(symbol, (owners[symbol], identifier))
        owners[symbol] = identifier
        entries.append(
            TableEntry(
                identifier=identifier,
                constant=f"{CONSTANT_PREFIX}{symbol}",
                feature=by_identifier[identifier],
            )
        )
    return entries


def _render_constant(entry: TableEntry) -> list[str]:
    feature = entry.feature
    doc_url = FEATURE_DOC_URL_TEMPLATE.format(id=entry.identifier)
    return [
        f"{entry.constant} = Feature(",
        f"    id={py_string(entry.identifier)},",
        f"    title={py_string(feature.title)},",
        f"    parent={py_string(feature.parent)},",
        f"    status=Status.{feature.status.name},",
        ")",
        f'"""{docstring_safe(doc_url)}"""',
        "",
    ]


def _render_table(entries: list[TableEntry]) -> list[str]:
    if not entries:
        return [f"{TABLE_NAME}: Mapping[str, Feature] = MappingProxyType({{}})", ""]
    lines = [f"{TABLE_NAME}: Mapping[str, Feature] = MappingProxyType(", "    {"]
    lines.extend(f"        {py_string(entry.identifier)}: {entry.constant}," for entry in entries)
    lines.extend(["    }", ")", ""])
    return lines


def render_table(dataset: Dataset, *, source: str | None = None) -> str:
    """Return the complete generated module for dataset."""
    entries = collect_entries(dataset.data.items())

    lines = [_HEADER]
    if source:
        lines.append(f"# Source: {' '.join(source.split())}")
    lines.extend(
        [
            _MODULE_DOC,
            "",
            "from __future__ import annotations",
            "",
            "from collections.abc import Mapping",
            "from types import MappingProxyType",
            "",
            f"from {_RUNTIME_MODULE} import Feature, Status",
            "",
        ]
    )
    for entry in entries:
        lines.extend(_render_constant(entry))
    lines.append("")
    lines.extend(_render_table(entries))

    exported = [TABLE_NAME, *(entry.constant for entry in entries)]
    lines.append("__all__ = [")
    lines.extend(f"    {py_string(name)}," for name in exported)
    lines.append("]")
    return "\n".join(lines) + "\n"


def emit(dataset: Dataset, output: TextIO, *, source: str | None = None) -> None:
    """Write the generated module to output.

    The module is rendered in full before the first write, so an invalid
    dataset leaves output untouched.
    """
    text = render_table(dataset, source=source)
    try:
        output.write(text)
        output.flush()
    except (OSError, ValueError) as exc:
        target = str(getattr(output, "name", "<stream>"))
        raise GenerationIOError(target, cause=exc.__class__.__name__) from exc


def write_table(dataset: Dataset, path: Path, *, source: str | None = None) -> Path:
    """Atomically replace path with the generated module for dataset."""
    path = Path(path)
    text = render_table(dataset, source=source)

    tmp_path: Path | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
        tmp_path = Path(tmp_name)
        try:
            handle = os.fdopen(fd, "w", encoding="utf-8", newline="\n")
        except BaseException:
            os.close(fd)
            raise
        with handle:
            handle.write(text)
        os.replace(tmp_path, path)
    except OSError as exc:
        raise GenerationIOError(str(path), cause=exc.__class__.__name__) from exc
    finally:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()

    LOGGER.info("Wrote %d features to %s", len(dataset.data), path)
    return path
