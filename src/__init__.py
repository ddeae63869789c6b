"""treecopy: parallel directory tree copier."""

from treecopy.version import __version__

__all__ = ["__version__"]
