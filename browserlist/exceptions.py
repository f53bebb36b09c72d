"""Exception types for pybrowserlist."""

from __future__ import annotations


class BrowserlistError(Exception):
    """Base exception for expected application errors."""


class NetworkError(BrowserlistError):
    """Raised when a network operation fails."""

    def __init__(self, url: str, *, cause: str | None = None) -> None:
        detail = f"Unable to fetch browserslist config from {url}"
        if cause:
            detail = f"{detail} ({cause})"
        super().__init__(detail)


class RequestTimeoutError(BrowserlistError):
    """Raised when a request times out."""

    def __init__(self, url: str) -> None:
        super().__init__(f"Request timed out for {url}")


class HttpStatusError(BrowserlistError):
    """Raised when a non-200 HTTP response is returned."""

    def __init__(self, status_code: int, url: str) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(f"Request failed with HTTP {status_code} for {url}")


class ContentError(BrowserlistError):
    """Raised when a response body is unexpectedly empty."""

    def __init__(self, url: str) -> None:
        super().__init__(f"Received empty config from {url}")


class ResolverError(BrowserlistError):
    """Raised when the browserslist command cannot produce output."""

    def __init__(self, command: str, *, cause: str | None = None) -> None:
        detail = f"Resolver command failed: {command}"
        if cause:
            detail = f"{detail} ({cause})"
        super().__init__(detail)


class TokenParseError(BrowserlistError):
    """Raised when a resolver line is not in `<browser> <version>` form."""

    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(f"Unrecognized resolver output line: {token!r}")


class UnknownBrowserError(BrowserlistError):
    """Raised when a browser id has no display name."""

    def __init__(self, browser_id: str) -> None:
        self.browser_id = browser_id
        super().__init__(f"Unknown browser id: {browser_id!r}")


class InvalidHeadingError(BrowserlistError):
    """Raised when a heading tag is not one of h1-h6."""

    def __init__(self, heading: str) -> None:
        self.heading = heading
        super().__init__(f"Unsupported heading tag: {heading!r}")
