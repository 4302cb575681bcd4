"""Local filesystem implementation of :class:`~realm_cli.core.protocols.ProjectStore`.

This module is the **only** place that touches project files on disk.
Every ``OSError`` is caught here and re-raised as a
:class:`~realm_cli.exceptions.ProjectIOError` subclass naming the path.

Rules
-----
* The upward project search visits at most ``MAX_SEARCH_HOPS + 1``
  directories and stops at the filesystem root.
* Materializing an archive writes entries independently, in archive
  order; a failure aborts the remaining entries with no rollback.
* No user-facing output — callers handle feedback.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Sequence
from pathlib import Path, PurePosixPath

from realm_cli.core.config_codec import CONFIG_FILE_NAME, decode_config, encode_config
from realm_cli.core.models import ArchiveEntry, ProjectConfig
from realm_cli.exceptions import ConfigFileError, ProjectIOError, ProjectWriteError

logger = logging.getLogger(__name__)

MAX_SEARCH_HOPS: int = 8
"""Maximum number of parent directories climbed while looking for a project."""


# ---------------------------------------------------------------------------
# Directory resolver
# ---------------------------------------------------------------------------

def find_project_directory(start: Path) -> Path | None:
    """Search upward from *start* for a directory holding ``config.json``.

    Returns ``None`` when nothing is found — a missing project is a
    normal outcome, not an error.

    Raises
    ------
    ProjectIOError
        When a directory cannot be inspected for reasons other than the
        file being absent.
    """
    current = Path(os.path.abspath(start))

    for _ in range(MAX_SEARCH_HOPS + 1):
        marker = current / CONFIG_FILE_NAME
        try:
            marker.stat()
        except (FileNotFoundError, NotADirectoryError):
            pass
        except OSError as exc:
            raise ProjectIOError(f"failed to inspect {marker}: {exc}") from exc
        else:
            return current

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


# ---------------------------------------------------------------------------
# Config file codec (file half)
# ---------------------------------------------------------------------------

def read_config(path: Path) -> ProjectConfig:
    """Read and decode the config file at *path*.

    Raises
    ------
    ConfigFileError
        When the file cannot be read, is empty or is malformed.
    """
    try:
        raw = path.read_bytes()
    except OSError as exc:
        raise ConfigFileError(f"failed to read app data at {path}: {exc}") from exc
    return decode_config(raw, source=str(path))


def write_config(path: Path, config: ProjectConfig) -> None:
    """Encode *config* and write it to *path*, creating parent directories."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(encode_config(config))
    except OSError as exc:
        raise ProjectWriteError(f"failed to write {path}: {exc}") from exc


# ---------------------------------------------------------------------------
# Archive materializer
# ---------------------------------------------------------------------------

def _destination(root: Path, relative: str) -> Path:
    """Join *relative* below *root*, rejecting paths that escape it."""
    rel = PurePosixPath(relative.replace("\\", "/"))
    if rel.is_absolute() or ".." in rel.parts or not rel.parts:
        raise ProjectWriteError(
            f"refusing to write archive entry outside the project: {relative!r}",
        )
    return root.joinpath(*rel.parts)


def materialize(directory: Path, entries: Sequence[ArchiveEntry]) -> None:
    """Write each archive entry below *directory*.

    Missing parent directories are created; existing files are
    overwritten.

    Raises
    ------
    ProjectWriteError
        On the first entry that cannot be written.  Entries written
        before it stay on disk.
    """
    root = Path(os.path.abspath(directory))
    for entry in entries:
        dest = _destination(root, entry.path)
        try:
            dest.parent.mkdir(parents=True, exist_ok=True)
            dest.write_bytes(entry.data)
        except OSError as exc:
            raise ProjectWriteError(f"failed to write {dest}: {exc}") from exc
        logger.debug("Wrote %s (%d bytes)", dest, len(entry.data))


def collect(directory: Path) -> list[ArchiveEntry]:
    """Read every non-hidden file below *directory*, sorted by path.

    Raises
    ------
    ProjectIOError
        When a file cannot be read.
    """
    root = Path(os.path.abspath(directory))
    entries: list[ArchiveEntry] = []
    for path in root.rglob("*"):
        if not path.is_file():
            continue
        relative = path.relative_to(root)
        if any(part.startswith(".") for part in relative.parts):
            continue
        try:
            data = path.read_bytes()
        except OSError as exc:
            raise ProjectIOError(f"failed to read {path}: {exc}") from exc
        entries.append(ArchiveEntry(path=relative.as_posix(), data=data))
    entries.sort(key=lambda entry: entry.path)
    return entries


# ---------------------------------------------------------------------------
# Protocol adapter
# ---------------------------------------------------------------------------

class LocalProjectStore:
    """Concrete :class:`ProjectStore` backed by the local filesystem.

    This class satisfies the :class:`~realm_cli.core.protocols.ProjectStore`
    protocol structurally — no explicit inheritance required.
    """

    def find_project_directory(self, start: Path) -> Path | None:
        return find_project_directory(start)

    def read_config(self, directory: Path) -> ProjectConfig:
        return read_config(directory / CONFIG_FILE_NAME)

    def write_config(self, directory: Path, config: ProjectConfig) -> None:
        write_config(directory / CONFIG_FILE_NAME, config)

    def materialize(self, directory: Path, entries: Sequence[ArchiveEntry]) -> None:
        materialize(directory, entries)

    def collect(self, directory: Path) -> list[ArchiveEntry]:
        return collect(directory)
