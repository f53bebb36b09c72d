"""Translate resolver output into display records grouped by platform."""

from __future__ import annotations

from collections.abc import Iterable
import logging
import re

from .constants import BROWSER_NAMES, DEFAULT_ASSET_BASE_URL, DESKTOP_BROWSERS, IMAGES_DIR
from .exceptions import TokenParseError, UnknownBrowserError
from .model import BrowserRecord, GroupedBrowsers, PlatformClass

LOGGER = logging.getLogger(__name__)

_TOKEN_RE = re.compile(r"^(?P<browser_id>[a-z_]+) (?P<version>[\d\-.]+)", re.ASCII)


def icon_base_url(asset_base_url: str = DEFAULT_ASSET_BASE_URL) -> str:
    """Return the URL prefix browser icons are served under."""
    return f"{asset_base_url.rstrip('/')}/{IMAGES_DIR}/"


def platform_for(browser_id: str) -> PlatformClass:
    return "desktop" if browser_id in DESKTOP_BROWSERS else "mobile"


def parse_token(token: str) -> tuple[str, str]:
    """Split a `<browser> <version>` line; trailing content is ignored."""
    match = _TOKEN_RE.match(token)
    if match is None:
        raise TokenParseError(token)
    return match.group("browser_id"), match.group("version")


def build_record(browser_id: str, version: str, icon_base: str) -> BrowserRecord:
    try:
        display_name = BROWSER_NAMES[browser_id]
    except KeyError as exc:
        raise UnknownBrowserError(browser_id) from exc
    return BrowserRecord(
        browser_id=browser_id,
        version=version,
        display_name=display_name,
        icon_path=f"{icon_base}{browser_id}.png",
        platform_class=platform_for(browser_id),
    )


def classify(tokens: Iterable[str], icon_base: str | None = None) -> GroupedBrowsers:
    """Bucket tokens into mobile and desktop records, keeping input order.

    Lines that do not parse, or name a browser without a display name, are
    skipped with a warning.
    """
    base = icon_base if icon_base is not None else icon_base_url()
    buckets: dict[PlatformClass, list[BrowserRecord]] = {"mobile": [], "desktop": []}

    for token in tokens:
        try:
            record = build_record(*parse_token(token), base)
        except (TokenParseError, UnknownBrowserError) as exc:
            LOGGER.warning("Skipping browser: %s", exc)
            continue
        buckets[record.platform_class].append(record)

    return GroupedBrowsers(mobile=tuple(buckets["mobile"]), desktop=tuple(buckets["desktop"]))
