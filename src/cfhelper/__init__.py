"""Offline Codeforces problem catalog, custom folders, and submission history."""

from importlib import metadata as _metadata

try:
    __version__ = _metadata.version("cfhelper")
except _metadata.PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = ["__version__"]
