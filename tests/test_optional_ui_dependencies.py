"""Regression tests for optional runtime dependencies (rich/questionary/httpx).

These tests verify bootstrap commands are resilient when optional
packages are missing, and that command flows fail cleanly only when the
missing package is actually exercised.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

from conftest import FakeRealmClient, ScriptedPrompter
from realm_cli.cli import app as app_module
from realm_cli.cli import exit_codes
from realm_cli.cli.app import main
from realm_cli.exceptions import EnvironmentError
from realm_cli.infra.realm_client import HttpRealmClient


def _hide_rich(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setitem(sys.modules, "rich", None)
    monkeypatch.setitem(sys.modules, "rich.console", None)
    monkeypatch.setitem(sys.modules, "rich.logging", None)


def _hide_questionary(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setitem(sys.modules, "questionary", None)


def _hide_httpx(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setitem(sys.modules, "httpx", None)


def test_help_works_without_optional_packages(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)
    _hide_questionary(monkeypatch)
    _hide_httpx(monkeypatch)

    with pytest.raises(SystemExit) as exc_info:
        main(["--help"])
    assert exc_info.value.code == 0


def test_version_works_without_optional_packages(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)
    _hide_questionary(monkeypatch)
    _hide_httpx(monkeypatch)

    with pytest.raises(SystemExit) as exc_info:
        main(["--version"])
    assert exc_info.value.code == 0


def test_init_works_without_rich(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str],
) -> None:
    _hide_rich(monkeypatch)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(app_module, "_build_prompter", lambda: ScriptedPrompter())
    monkeypatch.setattr(app_module, "_build_client", lambda _settings: FakeRealmClient())

    code = main(["app", "init", "--name", "test-app"])

    assert code == exit_codes.SUCCESS
    assert json.loads((tmp_path / "config.json").read_text(encoding="utf-8"))["name"] == "test-app"
    assert "Successfully initialized app" in capsys.readouterr().err


def test_init_errors_cleanly_when_questionary_missing(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch,
) -> None:
    _hide_questionary(monkeypatch)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(app_module, "_build_client", lambda _settings: FakeRealmClient())

    with pytest.raises(EnvironmentError, match="questionary is not installed"):
        main(["app", "init"])


def test_client_errors_cleanly_when_httpx_missing(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_httpx(monkeypatch)

    with pytest.raises(EnvironmentError, match="httpx is not installed"):
        HttpRealmClient()
