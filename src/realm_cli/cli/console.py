"""CLI console and logging helpers with optional Rich support.

This module avoids module-level imports of optional UI dependencies so
bootstrap paths (``--help``, ``--version``) remain functional even when
Rich is not installed.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

from realm_cli.exceptions import EnvironmentError

LOG_FORMAT: str = "%(message)s"
PLAIN_LOG_FORMAT: str = "%(levelname)-7s %(name)s: %(message)s"


def _load_rich_console_class() -> type[Any]:
    """Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
    try:
        from rich.console import Console
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Console


def get_rich_console() -> Any:
    """Create a Rich console instance targeting stderr."""
    console_class = _load_rich_console_class()
    return console_class(stderr=True)


class _ConsoleProxy:
    """Minimal ``print``-compatible proxy with Rich fallback."""

    def print(self, *objects: object) -> None:
        """Render with Rich when available, else plain stderr print."""
        try:
            rich_console = get_rich_console()
        except EnvironmentError:
            print(*objects, file=sys.stderr)
            return
        rich_console.print(*objects)


console = _ConsoleProxy()


def configure_logging(verbose: bool = False) -> None:
    """Install a stderr log handler on the ``realm_cli`` logger.

    Uses :class:`rich.logging.RichHandler` when Rich is importable and
    a plain :class:`logging.StreamHandler` otherwise.  Calling it again
    replaces the previously installed handler.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    handler: logging.Handler
    try:
        from rich.logging import RichHandler
    except ModuleNotFoundError:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(PLAIN_LOG_FORMAT))
    else:
        handler = RichHandler(
            console=get_rich_console(),
            show_time=False,
            show_path=verbose,
        )
        handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger("realm_cli")
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)
