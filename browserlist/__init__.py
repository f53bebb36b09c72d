"""Supported-browser lists driven by a browserslist config."""

from ._version import __version__

__all__ = ["__version__"]
