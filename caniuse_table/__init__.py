"""Build-time generator for a static caniuse feature table."""

from ._version import __version__

__all__ = ["__version__"]
