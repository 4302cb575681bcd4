"""Pure encode/decode of the project ``config.json`` document.

Every function in this module is a **pure** transformation between
:class:`~realm_cli.core.models.ProjectConfig` and its serialized form —
no filesystem access.  File I/O lives in
:mod:`realm_cli.infra.project_store`.

Serialization rules
-------------------
* Fixed key order: ``config_version``, ``client_app_id``, ``name``,
  ``location``, ``deployment_model``, ``security``,
  ``custom_user_data_config``, ``sync``.
* Four-space indent and a trailing newline, so equal values always
  encode to byte-identical output.
* ``client_app_id`` is omitted when empty.
"""

from __future__ import annotations

import json
from typing import Any

from realm_cli.core.models import (
    CONFIG_VERSION_ZERO,
    CustomUserDataConfig,
    DeploymentModel,
    Location,
    ProjectConfig,
    SecurityConfig,
    SyncConfig,
)
from realm_cli.exceptions import ConfigFileError, InvalidEnumValueError

CONFIG_FILE_NAME: str = "config.json"
"""Marker file identifying the root of a project directory."""

JSON_INDENT: int = 4


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------

def config_to_dict(config: ProjectConfig) -> dict[str, Any]:
    """Return the wire representation of *config* in canonical key order."""
    data: dict[str, Any] = {"config_version": config.config_version}
    if config.app_id:
        data["client_app_id"] = config.app_id
    data["name"] = config.name
    data["location"] = config.location.value
    data["deployment_model"] = config.deployment_model.value
    data["security"] = {}
    data["custom_user_data_config"] = {
        "enabled": config.custom_user_data_config.enabled,
    }
    data["sync"] = {
        "development_mode_enabled": config.sync.development_mode_enabled,
    }
    return data


def encode_config(config: ProjectConfig) -> bytes:
    """Serialize *config* to deterministic UTF-8 JSON bytes."""
    text = json.dumps(config_to_dict(config), indent=JSON_INDENT, ensure_ascii=False)
    return (text + "\n").encode("utf-8")


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------

def _sub_object(data: dict[str, Any], key: str) -> dict[str, Any]:
    raw = data.get(key)
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigFileError(f"{key} must be an object, got {raw!r}")
    return raw


def _string(data: dict[str, Any], key: str) -> str:
    raw = data.get(key)
    if raw is None:
        return ""
    if not isinstance(raw, str):
        raise ConfigFileError(f"{key} must be a string, got {raw!r}")
    return raw


def _flag(data: dict[str, Any], key: str) -> bool:
    raw = data.get(key)
    if raw is None:
        return False
    if not isinstance(raw, bool):
        raise ConfigFileError(f"{key} must be a boolean, got {raw!r}")
    return raw


def config_from_dict(data: dict[str, Any]) -> ProjectConfig:
    """Build a :class:`ProjectConfig` from its wire representation.

    Absent or ``null`` fields fall back to their unset defaults.  Present
    fields must carry their JSON type; nothing is coerced.

    Raises
    ------
    ConfigFileError
        When a field has the wrong type or an enum holds an unknown value.
    """
    raw_version = data.get("config_version", CONFIG_VERSION_ZERO)
    if raw_version is None:
        raw_version = CONFIG_VERSION_ZERO
    if isinstance(raw_version, bool) or not isinstance(raw_version, int):
        raise ConfigFileError(f"config_version must be an integer, got {raw_version!r}")

    try:
        location = Location.parse(_string(data, "location"))
        deployment_model = DeploymentModel.parse(_string(data, "deployment_model"))
    except InvalidEnumValueError as exc:
        raise ConfigFileError(f"invalid app config: {exc}") from exc

    custom_user_data = _sub_object(data, "custom_user_data_config")
    sync = _sub_object(data, "sync")

    return ProjectConfig(
        config_version=raw_version,
        app_id=_string(data, "client_app_id"),
        name=_string(data, "name"),
        location=location,
        deployment_model=deployment_model,
        security=SecurityConfig(),
        custom_user_data_config=CustomUserDataConfig(
            enabled=_flag(custom_user_data, "enabled"),
        ),
        sync=SyncConfig(
            development_mode_enabled=_flag(sync, "development_mode_enabled"),
        ),
    )


def decode_config(raw: bytes, *, source: str = CONFIG_FILE_NAME) -> ProjectConfig:
    """Parse raw ``config.json`` bytes.

    Raises
    ------
    ConfigFileError
        When *raw* is empty, is not valid JSON, or is not a JSON object.
    """
    if not raw.strip():
        raise ConfigFileError(f"failed to read app data at {source}")

    try:
        data: Any = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ConfigFileError(
            f"failed to parse app data at {source}: {exc}",
        ) from exc

    if not isinstance(data, dict):
        raise ConfigFileError(f"app data at {source} must be a JSON object")

    return config_from_dict(data)
