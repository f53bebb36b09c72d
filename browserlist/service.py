"""Fetch, cache, resolve and classify a browserslist config."""

from __future__ import annotations

from collections.abc import Callable, Mapping
import hashlib
import logging

from .cache import ConfigCache, MemoryCacheStore
from .classify import classify, icon_base_url
from .constants import (
    CACHE_KEY,
    CACHE_TTL_SECONDS,
    DEFAULT_ASSET_BASE_URL,
    DEFAULT_CONFIG_URL,
    DEFAULT_HEADING,
    SHORTCODE_TAGS,
)
from .exceptions import InvalidHeadingError
from .http import fetch_config
from .model import GroupedBrowsers
from .render_html import normalize_heading, render_html
from .resolver import BrowserResolver, NpxBrowserResolver
from .util.text import normalize_whitespace

LOGGER = logging.getLogger(__name__)

Fetcher = Callable[[str], list[str]]


def cache_key_for(config_url: str) -> str:
    """Cache key for a config URL; the default URL keeps the bare key."""
    if config_url == DEFAULT_CONFIG_URL:
        return CACHE_KEY
    digest = hashlib.sha1(config_url.encode("utf-8")).hexdigest()[:12]
    return f"{CACHE_KEY}_{digest}"


class BrowserlistService:
    def __init__(
        self,
        cache: ConfigCache | None = None,
        resolver: BrowserResolver | None = None,
        fetch: Fetcher = fetch_config,
        *,
        asset_base_url: str = DEFAULT_ASSET_BASE_URL,
        ttl: float = CACHE_TTL_SECONDS,
    ) -> None:
        self.cache = cache if cache is not None else ConfigCache(MemoryCacheStore())
        self.resolver = resolver if resolver is not None else NpxBrowserResolver()
        self.fetch = fetch
        self.icon_base = icon_base_url(asset_base_url)
        self.ttl = ttl

    def get_config(self, config_url: str = DEFAULT_CONFIG_URL) -> list[str]:
        return self.cache.get_or_populate(
            cache_key_for(config_url),
            self.ttl,
            lambda: self.fetch(config_url),
        )

    def refresh(self, config_url: str = DEFAULT_CONFIG_URL) -> None:
        self.cache.invalidate(cache_key_for(config_url))

    def get_browsers(self, config_url: str = DEFAULT_CONFIG_URL) -> list[str]:
        config = self.get_config(config_url)
        if not config:
            return []
        return self.resolver.resolve(config)

    def get_grouped(self, config_url: str = DEFAULT_CONFIG_URL) -> GroupedBrowsers:
        return classify(self.get_browsers(config_url), self.icon_base)

    def render(
        self,
        config_url: str = DEFAULT_CONFIG_URL,
        heading: str = DEFAULT_HEADING,
    ) -> str:
        """Return the browser list markup; failures render as empty lists."""
        tag = normalize_heading(heading)
        return render_html(self.get_grouped(config_url), tag)


_DEFAULT_SERVICE: BrowserlistService | None = None


def default_service() -> BrowserlistService:
    global _DEFAULT_SERVICE
    if _DEFAULT_SERVICE is None:
        _DEFAULT_SERVICE = BrowserlistService()
    return _DEFAULT_SERVICE


def render(config_url: str = DEFAULT_CONFIG_URL, heading: str = DEFAULT_HEADING) -> str:
    return default_service().render(config_url, heading)


def shortcode(
    attributes: Mapping[str, object] | None = None,
    service: BrowserlistService | None = None,
) -> str:
    """Render from untrusted page attributes (`config`, `heading`).

    Unknown attributes are ignored. A heading that is not h1-h6 falls back
    to the default instead of failing the page.
    """
    attrs = dict(attributes or {})
    config_url = normalize_whitespace(str(attrs.get("config") or "")) or DEFAULT_CONFIG_URL
    heading = str(attrs.get("heading") or DEFAULT_HEADING)
    try:
        heading = normalize_heading(heading)
    except InvalidHeadingError as exc:
        LOGGER.warning("%s; using %s", exc, DEFAULT_HEADING)
        heading = DEFAULT_HEADING

    return (service or default_service()).render(config_url, heading)


def register_shortcodes(register: Callable[[str, Callable[..., str]], object]) -> None:
    """Register `shortcode` with a page host under every accepted tag name."""
    for tag in SHORTCODE_TAGS:
        register(tag, shortcode)
