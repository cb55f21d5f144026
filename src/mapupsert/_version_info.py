"""Version information for the mapupsert package."""

from importlib import metadata as _md

try:
    __version__ = _md.version("mapupsert")
except _md.PackageNotFoundError:
    __version__ = "unknown"
