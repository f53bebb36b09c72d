"""Constants used across pybrowserlist."""

from __future__ import annotations

from types import MappingProxyType
from typing import Final

DEFAULT_CONFIG_URL: Final[str] = (
    "https://raw.githubusercontent.com/Yoast/javascript/develop/"
    "packages/browserslist-config/src/index.js"
)
DEFAULT_ASSET_BASE_URL: Final[str] = "/static/browserlist"
IMAGES_DIR: Final[str] = "images"

CACHE_KEY: Final[str] = "browserlist_config_remote"
CACHE_TTL_SECONDS: Final[int] = 24 * 60 * 60
MEMORY_CACHE_MAXSIZE: Final[int] = 256

RESOLVER_COMMAND: Final[tuple[str, ...]] = ("npx", "--yes", "browserslist")
RESOLVER_TIMEOUT_SECONDS: Final[float] = 60.0
DEFAULT_TIMEOUT_SECONDS: Final[float] = 10.0

DEFAULT_HEADING: Final[str] = "h2"
ALLOWED_HEADINGS: Final[tuple[str, ...]] = ("h1", "h2", "h3", "h4", "h5", "h6")

SHORTCODE_TAGS: Final[tuple[str, ...]] = ("browserlist", "browserslist")

BROWSER_NAMES: Final = MappingProxyType(
    {
        "and_chr": "Chrome for Android",
        "and_ff": "Firefox for Android",
        "and_uc": "UC Browser for Android",
        "and_qq": "QQ Browser",
        "android": "Android Browser",
        "baidu": "Baidu Browser",
        "chrome": "Chrome",
        "edge": "Edge",
        "firefox": "Firefox",
        "ie": "Internet Explorer",
        "ie_mob": "IE Mobile",
        "ios_saf": "iOS Safari",
        "op_mini": "Opera Mini",
        "op_mob": "Opera Mobile",
        "opera": "Opera",
        "safari": "Safari",
        "samsung": "Samsung Internet",
    }
)

DESKTOP_BROWSERS: Final[frozenset[str]] = frozenset(
    {"chrome", "edge", "firefox", "ie", "opera", "safari"}
)

EMPTY_LIST_HINT: Final[str] = (
    "No browsers resolved. Check the config URL and that `npx browserslist` works."
)
