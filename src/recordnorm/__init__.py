"""recordnorm – semantic normalization of schema-less records."""

from ._version import __version__

__all__ = [
    "__version__",
    "cli",
    "config",
    "data",
    "normalization",
    "utils",
]
