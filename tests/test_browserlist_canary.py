from __future__ import annotations

import shutil

import pytest

from browserlist.constants import BROWSER_NAMES, DEFAULT_CONFIG_URL
from browserlist.http import fetch_config
from browserlist.resolver import NpxBrowserResolver
from browserlist.service import BrowserlistService


@pytest.mark.canary
def test_default_config_resolves_live() -> None:
    """
    Canary test: fetch the real default config and run the real browserslist CLI.

    Detects upstream config format changes and browser ids missing from the catalog.
    """
    if shutil.which("npx") is None:
        pytest.skip("npx is not installed")

    entries = fetch_config(DEFAULT_CONFIG_URL)
    assert entries, "Default config yielded no quoted entries."

    lines = NpxBrowserResolver().resolve(entries)
    assert lines, "browserslist returned no browsers for the default config."

    ids = {line.split(" ", 1)[0] for line in lines}
    unknown = sorted(ids - set(BROWSER_NAMES))
    assert not unknown, f"Resolver returned browsers without display names: {unknown}"

    grouped = BrowserlistService().get_grouped()
    assert grouped.desktop
    assert grouped.mobile
