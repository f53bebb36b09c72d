"""HTTP client layer for fetching browserslist configs."""

from __future__ import annotations

import logging

import httpx

from ._version import __version__
from .constants import DEFAULT_TIMEOUT_SECONDS
from .exceptions import (
    BrowserlistError,
    ContentError,
    HttpStatusError,
    NetworkError,
    RequestTimeoutError,
)
from .util.text import extract_quoted

LOGGER = logging.getLogger(__name__)


def _build_headers() -> dict[str, str]:
    return {
        "User-Agent": f"pybrowserlist/{__version__}",
        "Accept": "text/plain,application/javascript,application/json,*/*",
    }


def fetch_text(url: str, timeout: float = DEFAULT_TIMEOUT_SECONDS) -> str:
    """Fetch a text document with deterministic behavior and friendly failures."""
    retry_once = True
    while True:
        try:
            with httpx.Client(
                timeout=timeout, follow_redirects=True, headers=_build_headers()
            ) as client:
                response = client.get(url)
        except httpx.TimeoutException as exc:
            raise RequestTimeoutError(url) from exc
        except httpx.ConnectError as exc:
            if retry_once:
                retry_once = False
                continue
            raise NetworkError(url, cause=exc.__class__.__name__) from exc
        except httpx.RequestError as exc:
            raise NetworkError(url, cause=exc.__class__.__name__) from exc
        except (httpx.InvalidURL, ValueError) as exc:
            # Malformed URLs (bad port, bad IDNA host) fail before any request.
            raise NetworkError(url, cause=f"invalid URL: {exc}") from exc

        if response.status_code != 200:
            raise HttpStatusError(response.status_code, str(response.url))

        body = response.text
        if not body.strip():
            raise ContentError(str(response.url))
        return body


def fetch_config(url: str, timeout: float = DEFAULT_TIMEOUT_SECONDS) -> list[str]:
    """Fetch a config and return its quoted query fragments, or [] on failure."""
    try:
        body = fetch_text(url, timeout=timeout)
    except BrowserlistError as exc:
        LOGGER.warning("No browserslist config available: %s", exc)
        return []
    return extract_quoted(body)
