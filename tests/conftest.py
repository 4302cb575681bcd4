"""Shared pytest fixtures and fakes for the realm-cli test suite.

Guidelines
----------
* No internet access in any test: the Realm API is faked at the
  protocol boundary or stubbed with ``httpx.MockTransport``.
* No terminal interaction: prompts are answered by a scripted fake.
* Filesystem tests only touch ``tmp_path``.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from pathlib import Path

import pytest

from realm_cli.core.models import App, AppFilter, ArchiveEntry


class ScriptedPrompter:
    """:class:`Prompter` fake that replays queued answers in order.

    Any prompt issued after the queue is empty fails the test, which
    makes "no prompt was shown" assertions trivial.
    """

    def __init__(self, answers: Iterable[str] = ()) -> None:
        self.answers: list[str] = list(answers)
        self.asked: list[str] = []
        self.choices_seen: list[tuple[str, ...]] = []

    def _next(self, message: str) -> str:
        self.asked.append(message)
        if not self.answers:
            raise AssertionError(f"unexpected prompt: {message}")
        return self.answers.pop(0)

    def ask_text(self, message: str) -> str:
        return self._next(message)

    def select(self, message: str, choices: Sequence[str]) -> str:
        self.choices_seen.append(tuple(choices))
        return self._next(message)


class FakeRealmClient:
    """In-memory :class:`RealmClient` recording every call."""

    def __init__(
        self,
        apps: Iterable[App] = (),
        archive: Iterable[ArchiveEntry] = (),
    ) -> None:
        self.apps: list[App] = list(apps)
        self.archive: list[ArchiveEntry] = list(archive)
        self.find_error: Exception | None = None
        self.filters: list[AppFilter] = []
        self.exports: list[tuple[str, str, int]] = []
        self.imports: list[tuple[str, str, list[ArchiveEntry]]] = []
        self.closed: bool = False

    def __enter__(self) -> FakeRealmClient:
        return self

    def __exit__(self, *_args: object) -> None:
        self.closed = True

    def find_apps(self, app_filter: AppFilter) -> list[App]:
        self.filters.append(app_filter)
        if self.find_error is not None:
            raise self.find_error
        return [
            app
            for app in self.apps
            if (not app_filter.group_id or app.group_id == app_filter.group_id)
            and (not app_filter.app or app_filter.app in (app.client_app_id, app.name))
        ]

    def export_app(
        self,
        group_id: str,
        app_id: str,
        *,
        config_version: int = 0,
    ) -> list[ArchiveEntry]:
        self.exports.append((group_id, app_id, config_version))
        return list(self.archive)

    def import_app(
        self,
        group_id: str,
        app_id: str,
        entries: Sequence[ArchiveEntry],
    ) -> None:
        self.imports.append((group_id, app_id, list(entries)))


def make_app(**overrides: str) -> App:
    """Factory with sensible defaults for concise tests."""
    defaults: dict[str, str] = {
        "id": "5f2b7d9e1c9d440000a1b2c3",
        "group_id": "5f2b7d9e1c9d440000d4e5f6",
        "client_app_id": "test-app-abcde",
        "name": "test-app",
    }
    defaults.update(overrides)
    return App(**defaults)


@pytest.fixture
def prompter() -> ScriptedPrompter:
    return ScriptedPrompter()


@pytest.fixture
def client() -> FakeRealmClient:
    return FakeRealmClient()


@pytest.fixture
def write_project():
    """Write a raw ``config.json`` into a directory and return the directory."""

    def _write(directory: Path, content: str = '{"name": "eggcorn"}') -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        (directory / "config.json").write_text(content, encoding="utf-8")
        return directory

    return _write
