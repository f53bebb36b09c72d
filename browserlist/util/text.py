"""Text utility helpers."""

from __future__ import annotations

import re

_WHITESPACE_RE = re.compile(r"\s+")
_QUOTED_RE = re.compile(r'"([^"]+)"')


def normalize_whitespace(value: str) -> str:
    """Collapse repeated whitespace and trim ends."""
    return _WHITESPACE_RE.sub(" ", value).strip()


def extract_quoted(value: str) -> list[str]:
    """Return every double-quoted substring in order of appearance."""
    return _QUOTED_RE.findall(value)


def output_lines(value: str) -> list[str]:
    """Split command output into lines, dropping only the trailing blank ones."""
    lines = value.splitlines()
    while lines and not lines[-1].strip():
        lines.pop()
    return lines
