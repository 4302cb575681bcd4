"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters and the CLI
prompt layer must satisfy.  Core code depends ONLY on these protocols —
never on concrete implementations — so tests can inject scripted fakes
without a terminal, a network or a real filesystem layout.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from realm_cli.core.models import App, AppFilter, ArchiveEntry, ProjectConfig


class Prompter(Protocol):
    """Blocking interactive question capability.

    Implementations raise
    :class:`~realm_cli.exceptions.PromptCancelledError` when the user
    dismisses a prompt.
    """

    def ask_text(self, message: str) -> str:
        """Ask a free-text question and return the answer."""
        ...  # pragma: no cover

    def select(self, message: str, choices: Sequence[str]) -> str:
        """Ask a single-choice question and return the chosen value."""
        ...  # pragma: no cover


class RealmClient(Protocol):
    """Contract for the Realm admin API.

    Implementations must map all transport exceptions to
    :class:`~realm_cli.exceptions.RemoteError` subclasses.
    """

    def find_apps(self, app_filter: AppFilter) -> list[App]:
        """Return the apps matching *app_filter* (possibly empty)."""
        ...  # pragma: no cover

    def export_app(
        self,
        group_id: str,
        app_id: str,
        *,
        config_version: int = 0,
    ) -> list[ArchiveEntry]:
        """Export an app as an ordered list of archive entries.

        A *config_version* of ``0`` lets the server pick its default.
        """
        ...  # pragma: no cover

    def import_app(
        self,
        group_id: str,
        app_id: str,
        entries: Sequence[ArchiveEntry],
    ) -> None:
        """Replace the remote app configuration with *entries*."""
        ...  # pragma: no cover


class ProjectStore(Protocol):
    """Contract for local project filesystem access.

    Implementations must map ``OSError`` to
    :class:`~realm_cli.exceptions.ProjectIOError` subclasses.
    """

    def find_project_directory(self, start: Path) -> Path | None:
        """Return the nearest directory at or above *start* holding a project."""
        ...  # pragma: no cover

    def read_config(self, directory: Path) -> ProjectConfig:
        """Read the project config stored in *directory*."""
        ...  # pragma: no cover

    def write_config(self, directory: Path, config: ProjectConfig) -> None:
        """Write *config* into *directory*, replacing any existing file."""
        ...  # pragma: no cover

    def materialize(self, directory: Path, entries: Sequence[ArchiveEntry]) -> None:
        """Write every entry below *directory*, creating parents as needed."""
        ...  # pragma: no cover

    def collect(self, directory: Path) -> list[ArchiveEntry]:
        """Read the project tree below *directory* as archive entries."""
        ...  # pragma: no cover
