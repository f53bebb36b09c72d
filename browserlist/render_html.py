"""HTML renderer for embedding the browser list in a page."""

from __future__ import annotations

from html import escape

from .constants import ALLOWED_HEADINGS, DEFAULT_HEADING
from .exceptions import InvalidHeadingError
from .model import BrowserRecord, GroupedBrowsers


def normalize_heading(heading: str) -> str:
    """Return `heading` lowercased if it is h1-h6, else raise."""
    tag = heading.strip().lower()
    if tag not in ALLOWED_HEADINGS:
        raise InvalidHeadingError(heading)
    return tag


def _item(record: BrowserRecord) -> str:
    name = escape(record.display_name)
    return (
        f'<li><img src="{escape(record.icon_path)}" alt="{name}" /> '
        f"{name} {escape(record.version)}</li>"
    )


def render_html(grouped: GroupedBrowsers, heading: str = DEFAULT_HEADING) -> str:
    tag = normalize_heading(heading)
    parts = ['<div class="browserslist">']
    for platform, heading_text, records in grouped.buckets():
        parts.append(f'<div class="browserslist_{platform}">')
        parts.append(f"<{tag}>{heading_text}</{tag}>")
        parts.append("<ul>")
        parts.extend(_item(record) for record in records)
        parts.append("</ul></div>")
    parts.append("</div>")
    return "".join(parts)
