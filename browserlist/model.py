"""Data models for resolved browsers and cache entries."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Literal

PlatformClass = Literal["mobile", "desktop"]


@dataclass(frozen=True)
class BrowserRecord:
    browser_id: str
    version: str
    display_name: str
    icon_path: str
    platform_class: PlatformClass


@dataclass(frozen=True)
class GroupedBrowsers:
    mobile: tuple[BrowserRecord, ...] = ()
    desktop: tuple[BrowserRecord, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.mobile and not self.desktop

    def buckets(self) -> Iterator[tuple[PlatformClass, str, tuple[BrowserRecord, ...]]]:
        """Yield `(platform, heading text, records)`, mobile first."""
        yield "mobile", "Mobile", self.mobile
        yield "desktop", "Desktop", self.desktop


@dataclass(frozen=True)
class CacheHit:
    value: list[str]
    is_expired: bool
