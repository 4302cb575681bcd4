"""Core / service layer — resolution rules and operation orchestration.

Rules
-----
* No ``print()`` calls.
* No direct filesystem or network I/O; side effects go through the
  protocols in :mod:`realm_cli.core.protocols`.
* No imports from ``cli`` or ``infra``.
"""

from realm_cli.core.input_resolver import InitDefaults, InputFlags, InputResolver
from realm_cli.core.models import (
    App,
    AppFilter,
    ArchiveEntry,
    DeploymentModel,
    Location,
    OperationResult,
    ProjectConfig,
    ResolvedInputs,
    SourceKind,
    SourceSelection,
)
from realm_cli.core.project_service import ProjectService
from realm_cli.core.protocols import Prompter, ProjectStore, RealmClient
from realm_cli.core.source_selector import SourceSelector, classify

__all__: list[str] = [
    "App",
    "AppFilter",
    "ArchiveEntry",
    "DeploymentModel",
    "InitDefaults",
    "InputFlags",
    "InputResolver",
    "Location",
    "OperationResult",
    "ProjectConfig",
    "ProjectService",
    "ProjectStore",
    "Prompter",
    "RealmClient",
    "ResolvedInputs",
    "SourceKind",
    "SourceSelection",
    "SourceSelector",
    "classify",
]
