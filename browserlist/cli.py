"""Console script for browserlist."""

from __future__ import annotations

from pathlib import Path

import click
from rich.console import Console

from . import __version__ as _version
from .cache import ConfigCache, FileCacheStore, MemoryCacheStore
from .constants import (
    ALLOWED_HEADINGS,
    DEFAULT_ASSET_BASE_URL,
    DEFAULT_CONFIG_URL,
    DEFAULT_HEADING,
    EMPTY_LIST_HINT,
)
from .exceptions import BrowserlistError
from .render_basic import render_basic
from .render_html import render_html
from .resolver import NpxBrowserResolver
from .service import BrowserlistService
from .util.debug import configure_logging


def _default_cache_file() -> Path:
    return Path(click.get_app_dir("pybrowserlist")) / "config_cache.json"


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--config",
    "config_url",
    default=DEFAULT_CONFIG_URL,
    show_default=True,
    envvar="BROWSERLIST_CONFIG_URL",
    help="URL of the browserslist config to render.",
)
@click.option(
    "--heading",
    type=click.Choice(ALLOWED_HEADINGS, case_sensitive=False),
    default=DEFAULT_HEADING,
    show_default=True,
    help="Heading tag used for the Mobile/Desktop sections in HTML output.",
)
@click.option("--html", "html_mode", is_flag=True, help="Print HTML markup instead of a table.")
@click.option(
    "--asset-base-url",
    default=DEFAULT_ASSET_BASE_URL,
    show_default=True,
    help="Base URL that serves images/<browser>.png icons.",
)
@click.option(
    "--cache-file",
    type=click.Path(dir_okay=False, path_type=Path),
    envvar="BROWSERLIST_CACHE_FILE",
    help="Where the fetched config is cached for 24 hours.",
)
@click.option("--no-cache", is_flag=True, help="Keep the fetched config in memory only.")
@click.option("--refresh", is_flag=True, help="Drop the cached config before fetching.")
@click.option("--debug", is_flag=True, help="Log debug output to stderr.")
@click.version_option(_version, "-v", "--version")
def main(
    config_url: str,
    heading: str,
    html_mode: bool,
    asset_base_url: str,
    cache_file: Path | None,
    no_cache: bool,
    refresh: bool,
    debug: bool,
) -> None:
    """
    List the browsers a browserslist config supports, grouped by platform

    \b
    Example usages:
      browserlist
      browserlist --html --heading h3
      browserlist --config https://example.com/.browserslistrc --refresh
    """
    configure_logging(debug)

    if no_cache:
        store: MemoryCacheStore | FileCacheStore = MemoryCacheStore()
    else:
        store = FileCacheStore(cache_file or _default_cache_file())

    service = BrowserlistService(
        ConfigCache(store),
        NpxBrowserResolver(),
        asset_base_url=asset_base_url,
    )

    try:
        if refresh:
            service.refresh(config_url)
        grouped = service.get_grouped(config_url)
    except BrowserlistError as exc:
        raise click.ClickException(str(exc)) from exc

    if html_mode:
        click.echo(render_html(grouped, heading))
    else:
        Console().print(render_basic(grouped))

    if grouped.is_empty:
        click.echo(EMPTY_LIST_HINT, err=True)
