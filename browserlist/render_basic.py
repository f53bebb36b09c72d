"""Terminal renderer."""

from __future__ import annotations

from rich.console import Group
from rich.panel import Panel
from rich.text import Text

from .model import GroupedBrowsers


def render_basic(grouped: GroupedBrowsers, *, title: str = "Supported browsers") -> Group:
    """Render both platform buckets as a Rich renderable group."""
    lines: list[Text] = []

    for _platform, heading_text, records in grouped.buckets():
        if lines:
            lines.append(Text(""))
        lines.append(Text(heading_text, style="bold"))
        if not records:
            lines.append(Text("  (none)", style="dim"))
        for record in records:
            line = Text("  ")
            line.append(record.display_name, style="bold cyan")
            line.append(f" {record.version}")
            lines.append(line)

    return Group(Panel(Group(*lines), border_style="blue", title=title))
