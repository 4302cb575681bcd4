"""Domain models for realm-cli.

Value objects are **frozen** dataclasses with no behaviour beyond data
access.  The two enumerations double as validated flag types: their
:meth:`parse` constructors accept the empty string as "valid but unset"
and reject anything else outside the legal set.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TypeVar

from realm_cli.exceptions import InvalidEnumValueError

DEFAULT_CONFIG_VERSION: int = 20200603
"""Config scheme version written by a scaffold initialization."""

CONFIG_VERSION_ZERO: int = 0
"""Config version meaning "unset"."""


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class ChoiceEnum(str, Enum):
    """String enum with an ``UNSET`` member and a validating constructor."""

    @classmethod
    def choices(cls) -> tuple[str, ...]:
        """Return every legal non-empty value in declaration order."""
        return tuple(member.value for member in cls if member.value)

    @classmethod
    def parse(cls: type[_E], raw: str | None) -> _E:
        """Build a member from *raw*, case-insensitively.

        Raises
        ------
        InvalidEnumValueError
            When *raw* is neither empty nor a legal value.
        """
        value = (raw or "").strip().upper()
        for member in cls:
            if member.value == value:
                return member
        raise InvalidEnumValueError(raw or "", cls.choices())

    @property
    def is_set(self) -> bool:
        return bool(self.value)

    def __str__(self) -> str:
        return str(self.value)


_E = TypeVar("_E", bound=ChoiceEnum)


class Location(ChoiceEnum):
    """Cloud region an app is deployed to."""

    UNSET = ""
    VIRGINIA = "US-VA"
    OREGON = "US-OR"
    FRANKFURT = "DE-FF"
    IRELAND = "IE"
    SYDNEY = "AU"
    MUMBAI = "IN-MB"
    SINGAPORE = "SG"


class DeploymentModel(ChoiceEnum):
    """Whether an app is deployed globally or to a single region."""

    UNSET = ""
    GLOBAL = "GLOBAL"
    LOCAL = "LOCAL"


DEFAULT_LOCATION: Location = Location.VIRGINIA
DEFAULT_DEPLOYMENT_MODEL: DeploymentModel = DeploymentModel.GLOBAL


class SourceKind(str, Enum):
    """Where an operation's source of truth comes from."""

    SCAFFOLD = ""
    APP = "app"
    TEMPLATE = "template"


# ---------------------------------------------------------------------------
# Persisted project config
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class SecurityConfig:
    """App security settings (currently empty)."""


@dataclass(frozen=True, slots=True)
class CustomUserDataConfig:
    enabled: bool = False


@dataclass(frozen=True, slots=True)
class SyncConfig:
    development_mode_enabled: bool = False


@dataclass(frozen=True, slots=True)
class ProjectConfig:
    """Persisted identity of a local project (the ``config.json`` file)."""

    config_version: int = CONFIG_VERSION_ZERO
    """Config scheme version; ``0`` means unset."""

    app_id: str = ""
    """Remote client app id, empty when the project was never linked."""

    name: str = ""
    """App name.  Non-empty marks the directory as an existing project."""

    location: Location = Location.UNSET
    deployment_model: DeploymentModel = DeploymentModel.UNSET
    security: SecurityConfig = field(default_factory=SecurityConfig)
    custom_user_data_config: CustomUserDataConfig = field(
        default_factory=CustomUserDataConfig,
    )
    sync: SyncConfig = field(default_factory=SyncConfig)

    @property
    def app_selector(self) -> str:
        """Best selector for looking the app up remotely."""
        return self.app_id or self.name


# ---------------------------------------------------------------------------
# Remote app data
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class App:
    """Summary of a remote app as returned by a lookup."""

    id: str
    group_id: str
    client_app_id: str
    name: str


@dataclass(frozen=True, slots=True)
class AppFilter:
    """Remote lookup filter: a project (group) and an app selector."""

    group_id: str = ""
    app: str = ""


@dataclass(frozen=True, slots=True)
class ArchiveEntry:
    """One file of an exported app archive."""

    path: str
    """Relative POSIX path inside the project tree."""

    data: bytes


# ---------------------------------------------------------------------------
# Per-invocation resolution results
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ResolvedInputs:
    """Merged view of flags, on-disk config and prompt answers."""

    target: Path
    project: str = ""
    from_: str = ""
    from_type: SourceKind = SourceKind.SCAFFOLD
    name: str = ""
    location: Location = Location.UNSET
    deployment_model: DeploymentModel = DeploymentModel.UNSET
    app_version: int = CONFIG_VERSION_ZERO
    dry_run: bool = False


@dataclass(frozen=True, slots=True)
class SourceSelection:
    """Resolved origin of an operation: scaffold, existing app or template."""

    kind: SourceKind
    group_id: str = ""
    app_id: str = ""
    template_id: str = ""

    @classmethod
    def scaffold(cls) -> SourceSelection:
        return cls(kind=SourceKind.SCAFFOLD)

    @classmethod
    def existing_app(cls, group_id: str, app_id: str) -> SourceSelection:
        return cls(kind=SourceKind.APP, group_id=group_id, app_id=app_id)

    @classmethod
    def template(cls, template_id: str) -> SourceSelection:
        return cls(kind=SourceKind.TEMPLATE, template_id=template_id)


@dataclass(frozen=True, slots=True)
class OperationResult:
    """Outcome of an init/pull/push operation, used for CLI feedback."""

    target: Path
    source: SourceSelection
    files: tuple[str, ...] = ()
    """Relative paths written locally (init/pull) or sent remotely (push)."""

    dry_run: bool = False
