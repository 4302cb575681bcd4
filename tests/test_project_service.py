"""Tests for the project service (core/project_service.py).

The real filesystem store is used so written files can be asserted
directly; the remote side is the in-memory fake.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from conftest import FakeRealmClient
from realm_cli.core.models import (
    ArchiveEntry,
    DeploymentModel,
    Location,
    ResolvedInputs,
    SourceSelection,
)
from realm_cli.core.project_service import ProjectService, scaffold_config
from realm_cli.exceptions import TemplateNotSupportedError
from realm_cli.infra.project_store import LocalProjectStore

ARCHIVE = [
    ArchiveEntry("config.json", b'{"name": "test-app"}\n'),
    ArchiveEntry("functions/hello.js", b"exports = () => 1;\n"),
]


def _service(client: FakeRealmClient) -> ProjectService:
    return ProjectService(LocalProjectStore(), client)


class TestScaffoldConfig:
    def test_unset_enums_take_defaults(self, tmp_path: Path) -> None:
        config = scaffold_config(ResolvedInputs(target=tmp_path, name="test-app"))
        assert config.config_version == 20200603
        assert config.location is Location.VIRGINIA
        assert config.deployment_model is DeploymentModel.GLOBAL

    def test_explicit_enums_kept(self, tmp_path: Path) -> None:
        config = scaffold_config(
            ResolvedInputs(
                target=tmp_path,
                name="test-app",
                location=Location.MUMBAI,
                deployment_model=DeploymentModel.LOCAL,
            ),
        )
        assert config.location is Location.MUMBAI
        assert config.deployment_model is DeploymentModel.LOCAL


class TestInitialize:
    def test_scaffold_writes_config(self, tmp_path: Path, client: FakeRealmClient) -> None:
        target = tmp_path / "test-app"
        inputs = ResolvedInputs(target=target, name="test-app")
        result = _service(client).initialize(inputs, SourceSelection.scaffold())

        data = json.loads((target / "config.json").read_text(encoding="utf-8"))
        assert data["name"] == "test-app"
        assert data["location"] == "US-VA"
        assert result.files == ("config.json",)
        assert client.exports == []

    def test_app_source_materializes_export(self, tmp_path: Path) -> None:
        client = FakeRealmClient(archive=ARCHIVE)
        source = SourceSelection.existing_app("group", "app")
        result = _service(client).initialize(ResolvedInputs(target=tmp_path), source)

        assert client.exports == [("group", "app", 0)]
        assert (tmp_path / "functions" / "hello.js").read_bytes() == ARCHIVE[1].data
        assert result.files == ("config.json", "functions/hello.js")

    def test_template_source_fails(self, tmp_path: Path, client: FakeRealmClient) -> None:
        with pytest.raises(TemplateNotSupportedError):
            _service(client).initialize(
                ResolvedInputs(target=tmp_path),
                SourceSelection.template("tmpl"),
            )
        assert list(tmp_path.iterdir()) == []


class TestPull:
    def test_passes_config_version(self, tmp_path: Path) -> None:
        client = FakeRealmClient(archive=ARCHIVE)
        inputs = ResolvedInputs(target=tmp_path, app_version=20200603)
        _service(client).pull(inputs, SourceSelection.existing_app("group", "app"))
        assert client.exports == [("group", "app", 20200603)]
        assert (tmp_path / "config.json").exists()

    def test_dry_run_writes_nothing(self, tmp_path: Path) -> None:
        client = FakeRealmClient(archive=ARCHIVE)
        inputs = ResolvedInputs(target=tmp_path, dry_run=True)
        result = _service(client).pull(inputs, SourceSelection.existing_app("group", "app"))
        assert result.dry_run is True
        assert result.files == ("config.json", "functions/hello.js")
        assert list(tmp_path.iterdir()) == []


class TestPush:
    def test_imports_collected_tree(self, tmp_path: Path, client: FakeRealmClient) -> None:
        LocalProjectStore().materialize(tmp_path, ARCHIVE)
        source = SourceSelection.existing_app("group", "app")
        result = _service(client).push(ResolvedInputs(target=tmp_path), source)

        assert len(client.imports) == 1
        group_id, app_id, entries = client.imports[0]
        assert (group_id, app_id) == ("group", "app")
        assert entries == ARCHIVE
        assert result.files == ("config.json", "functions/hello.js")

    def test_dry_run_sends_nothing(self, tmp_path: Path, client: FakeRealmClient) -> None:
        LocalProjectStore().materialize(tmp_path, ARCHIVE)
        inputs = ResolvedInputs(target=tmp_path, dry_run=True)
        _service(client).push(inputs, SourceSelection.existing_app("group", "app"))
        assert client.imports == []
