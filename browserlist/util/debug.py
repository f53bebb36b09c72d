"""Debug flag and logging setup."""

from __future__ import annotations

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

LOGGER = logging.getLogger("browserlist")


def debug_enabled() -> bool:
    """Check debug mode env flag."""
    return os.environ.get("BROWSERLIST_DEBUG", "").strip() == "1"


def configure_logging(debug: bool = False) -> None:
    """Send package logs to stderr; DEBUG when requested, WARNING otherwise."""
    level = logging.DEBUG if debug or debug_enabled() else logging.WARNING
    if not any(isinstance(handler, RichHandler) for handler in LOGGER.handlers):
        LOGGER.addHandler(
            RichHandler(console=Console(stderr=True), show_time=False, show_path=False)
        )
    LOGGER.setLevel(level)
