"""Text helpers for generated source."""

from __future__ import annotations

import re

_NON_IDENT_RE = re.compile(r"[^A-Za-z0-9_]")


def to_symbol(value: str) -> str:
    """Upper-case value and replace characters not allowed in identifiers."""
    return _NON_IDENT_RE.sub("_", value).upper()


def py_string(value: str) -> str:
    """Render value as an ASCII, double-quoted Python string literal."""
    # unicode_escape emits \xNN, \uNNNN and \UNNNNNNNN but leaves quotes alone.
    body = value.encode("unicode_escape").decode("ascii").replace('"', '\\"')
    return f'"{body}"'


def docstring_safe(value: str) -> str:
    """Escape value for use inside a triple-quoted docstring."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return escaped.encode("ascii", "backslashreplace").decode("ascii")
