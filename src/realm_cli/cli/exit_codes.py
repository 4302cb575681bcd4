"""Process exit codes returned by ``realm-cli``.

``argparse`` usage errors also exit with ``2``; they never reach the
error boundary, so the overlap with :data:`UNEXPECTED_ERROR` is harmless.
"""

from __future__ import annotations

SUCCESS: int = 0
"""The command finished; any project files were written or sent."""

GENERAL_ERROR: int = 1
"""A :class:`~realm_cli.exceptions.RealmCliError` was reported to the user."""

UNEXPECTED_ERROR: int = 2
"""Anything else escaped the command handler."""

KEYBOARD_INTERRUPT: int = 130
"""Interrupted with Ctrl+C (128 + SIGINT)."""
