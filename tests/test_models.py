"""Tests for domain models (core/models.py).

Covers enum parsing (the validated flag types), frozen dataclass
semantics and the source-selection constructors.
"""

from __future__ import annotations

from dataclasses import FrozenInstanceError
from pathlib import Path

import pytest

from realm_cli.core.models import (
    DEFAULT_CONFIG_VERSION,
    DeploymentModel,
    Location,
    ProjectConfig,
    ResolvedInputs,
    SourceKind,
    SourceSelection,
)
from realm_cli.exceptions import InvalidEnumValueError, ValidationError


# ---------------------------------------------------------------------------
# Location
# ---------------------------------------------------------------------------

class TestLocation:
    def test_parse_round_trips(self) -> None:
        location = Location.parse("US-VA")
        assert location is Location.VIRGINIA
        assert str(location) == "US-VA"

    def test_parse_is_case_insensitive(self) -> None:
        assert Location.parse("de-ff") is Location.FRANKFURT

    def test_empty_is_valid_but_unset(self) -> None:
        location = Location.parse("")
        assert location is Location.UNSET
        assert location.is_set is False

    def test_none_is_unset(self) -> None:
        assert Location.parse(None) is Location.UNSET

    def test_invalid_lists_all_choices(self) -> None:
        with pytest.raises(InvalidEnumValueError) as exc_info:
            Location.parse("MARS")
        err = exc_info.value
        assert err.value == "MARS"
        assert err.choices == ("US-VA", "US-OR", "DE-FF", "IE", "AU", "IN-MB", "SG")
        assert "[US-VA, US-OR, DE-FF, IE, AU, IN-MB, SG]" in str(err)

    def test_invalid_is_a_validation_error(self) -> None:
        with pytest.raises(ValidationError):
            Location.parse("MARS")

    def test_choices_exclude_unset(self) -> None:
        assert len(Location.choices()) == 7
        assert "" not in Location.choices()


# ---------------------------------------------------------------------------
# DeploymentModel
# ---------------------------------------------------------------------------

class TestDeploymentModel:
    @pytest.mark.parametrize("raw", ["global", "GLOBAL", " Global "])
    def test_parse_global(self, raw: str) -> None:
        assert DeploymentModel.parse(raw) is DeploymentModel.GLOBAL

    def test_wire_value_is_upper_case(self) -> None:
        assert DeploymentModel.LOCAL.value == "LOCAL"

    def test_invalid_lists_choices(self) -> None:
        with pytest.raises(InvalidEnumValueError, match=r"\[GLOBAL, LOCAL\]"):
            DeploymentModel.parse("regional")


# ---------------------------------------------------------------------------
# ProjectConfig / ResolvedInputs
# ---------------------------------------------------------------------------

class TestProjectConfig:
    def test_defaults_are_unset(self) -> None:
        config = ProjectConfig()
        assert config.config_version == 0
        assert config.name == ""
        assert config.location is Location.UNSET
        assert config.deployment_model is DeploymentModel.UNSET
        assert config.custom_user_data_config.enabled is False
        assert config.sync.development_mode_enabled is False

    def test_frozen(self) -> None:
        config = ProjectConfig(name="test-app")
        with pytest.raises(FrozenInstanceError):
            config.name = "other"  # type: ignore[misc]

    def test_equality(self) -> None:
        a = ProjectConfig(config_version=DEFAULT_CONFIG_VERSION, name="test-app")
        b = ProjectConfig(config_version=DEFAULT_CONFIG_VERSION, name="test-app")
        assert a == b

    def test_app_selector_prefers_app_id(self) -> None:
        assert ProjectConfig(app_id="app-abcde", name="app").app_selector == "app-abcde"
        assert ProjectConfig(name="app").app_selector == "app"


class TestResolvedInputs:
    def test_defaults_to_scaffold(self, tmp_path: Path) -> None:
        inputs = ResolvedInputs(target=tmp_path)
        assert inputs.from_type is SourceKind.SCAFFOLD
        assert inputs.app_version == 0
        assert inputs.dry_run is False


# ---------------------------------------------------------------------------
# SourceSelection
# ---------------------------------------------------------------------------

class TestSourceSelection:
    def test_scaffold(self) -> None:
        assert SourceSelection.scaffold() == SourceSelection(kind=SourceKind.SCAFFOLD)

    def test_existing_app(self) -> None:
        selection = SourceSelection.existing_app("group", "app")
        assert selection.kind is SourceKind.APP
        assert (selection.group_id, selection.app_id) == ("group", "app")

    def test_template_variant_is_kept(self) -> None:
        selection = SourceSelection.template("tmpl")
        assert selection.kind is SourceKind.TEMPLATE
        assert selection.template_id == "tmpl"

    def test_source_kinds_are_stable(self) -> None:
        assert [kind.value for kind in SourceKind] == ["", "app", "template"]
