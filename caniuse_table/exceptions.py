"""Exception types for caniuse-table."""

from __future__ import annotations

from pathlib import Path


class CaniuseTableError(Exception):
    """Base exception for expected build failures."""


class TransportError(CaniuseTableError):
    """Raised when a download cannot be completed."""


class NetworkError(TransportError):
    """Raised when a network operation fails."""

    def __init__(self, url: str, *, cause: str | None = None) -> None:
        self.url = url
        detail = f"Unable to connect for {url}"
        if cause:
            detail = f"{detail} ({cause})"
        super().__init__(detail)


class RequestTimeoutError(TransportError):
    """Raised when a request times out."""

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f"Request timed out for {url}")


class HttpStatusError(TransportError):
    """Raised when a non-200 HTTP response is returned."""

    def __init__(self, status_code: int, url: str) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(f"Request failed with HTTP {status_code} for {url}")


class ContentError(TransportError):
    """Raised when a response body is unexpectedly empty."""

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f"Received empty response body from {url}")


class CacheIOError(CaniuseTableError):
    """Raised when the download cache cannot be read or written."""

    def __init__(self, path: Path | str, *, cause: str | None = None) -> None:
        self.path = Path(path)
        detail = f"Cache I/O failed for {path}"
        if cause:
            detail = f"{detail} ({cause})"
        super().__init__(detail)


class SchemaError(CaniuseTableError):
    """Raised when a payload does not match the expected shape."""

    message_template = "Unexpected data from {source}: {detail}"

    def __init__(self, source: str, detail: str) -> None:
        self.source = source
        self.detail = detail
        super().__init__(self.message_template.format(source=source, detail=detail))


class ConfigurationError(SchemaError):
    """Raised when build inputs or the registry answer are unusable."""

    message_template = "Invalid build configuration ({source}): {detail}"


class DuplicateKeyError(CaniuseTableError):
    """Raised when two features share an identifier."""

    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        super().__init__(f"Duplicate feature identifier {identifier!r}")


class SymbolCollisionError(CaniuseTableError):
    """Raised when identifiers do not map to distinct constant names."""

    def __init__(self, symbol: str, identifiers: tuple[str, ...]) -> None:
        self.symbol = symbol
        self.identifiers = identifiers
        names = ", ".join(repr(identifier) for identifier in identifiers)
        super().__init__(f"Feature identifiers {names} map to the same symbol {symbol!r}")


class GenerationIOError(CaniuseTableError):
    """Raised when the generated table cannot be written."""

    def __init__(self, target: str, *, cause: str | None = None) -> None:
        self.target = target
        detail = f"Unable to write generated table to {target}"
        if cause:
            detail = f"{detail} ({cause})"
        super().__init__(detail)
