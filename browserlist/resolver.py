"""Resolve browserslist queries into `<browser> <version>` lines."""

from __future__ import annotations

from collections.abc import Sequence
import logging
import shlex
import subprocess
from typing import Protocol

from .constants import RESOLVER_COMMAND, RESOLVER_TIMEOUT_SECONDS
from .exceptions import ResolverError
from .util.text import output_lines

LOGGER = logging.getLogger(__name__)


class BrowserResolver(Protocol):
    def resolve(self, queries: Sequence[str]) -> list[str]:
        """Return one raw token per resolved browser version."""
        ...


def build_query(queries: Sequence[str]) -> str:
    """Join config entries into the single query string browserslist expects."""
    return ", ".join(queries)


def _valid_queries(queries: object) -> bool:
    if not isinstance(queries, (list, tuple)) or not queries:
        return False
    return all(isinstance(item, str) for item in queries)


class NpxBrowserResolver:
    """Run the `browserslist` CLI (via npx) as a subprocess.

    The joined query is passed as one argv element, so no shell quoting is
    involved. Any invocation problem yields an empty result.
    """

    def __init__(
        self,
        command: Sequence[str] = RESOLVER_COMMAND,
        timeout: float = RESOLVER_TIMEOUT_SECONDS,
    ) -> None:
        self.command = tuple(command)
        self.timeout = timeout

    def _run(self, query: str) -> str:
        argv = [*self.command, query]
        printable = shlex.join(argv)
        LOGGER.debug("Running %s", printable)
        try:
            completed = subprocess.run(
                argv,
                stdin=subprocess.DEVNULL,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=False,
            )
        except FileNotFoundError as exc:
            raise ResolverError(printable, cause="executable not found") from exc
        except subprocess.TimeoutExpired as exc:
            raise ResolverError(printable, cause=f"timed out after {self.timeout:g}s") from exc
        except OSError as exc:
            raise ResolverError(printable, cause=exc.__class__.__name__) from exc

        if completed.returncode != 0:
            stderr = (completed.stderr or "").strip()
            cause = f"exit status {completed.returncode}"
            if stderr:
                cause = f"{cause}: {stderr.splitlines()[-1]}"
            raise ResolverError(printable, cause=cause)
        return completed.stdout or ""

    def resolve(self, queries: Sequence[str]) -> list[str]:
        if not _valid_queries(queries):
            return []
        try:
            stdout = self._run(build_query(queries))
        except ResolverError as exc:
            LOGGER.warning("%s", exc)
            return []
        return output_lines(stdout)


class StaticResolver:
    """Resolver with canned output, for offline use and tests."""

    def __init__(self, lines: Sequence[str]) -> None:
        self.lines = list(lines)
        self.calls: list[list[str]] = []

    def resolve(self, queries: Sequence[str]) -> list[str]:
        if not _valid_queries(queries):
            return []
        self.calls.append(list(queries))
        return list(self.lines)
