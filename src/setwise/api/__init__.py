"""HTTP API for setwise."""

from .. import __version__

__all__ = ["__version__"]
