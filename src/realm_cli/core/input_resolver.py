"""Input resolution engine — merge flags, on-disk config and prompt answers.

Each ``resolve_*`` method returns a fully populated
:class:`~realm_cli.core.models.ResolvedInputs` or raises; partial results
are never returned.

Precedence (highest first)
--------------------------
1. Explicit flag values.
2. Values adopted from an existing project's ``config.json``.
3. Caller-supplied defaults.
4. Interactive answers — asked at most once per field, and only when
   nothing above supplied a value.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TypeVar

from realm_cli.core.models import (
    CONFIG_VERSION_ZERO,
    ChoiceEnum,
    DEFAULT_DEPLOYMENT_MODEL,
    DEFAULT_LOCATION,
    DeploymentModel,
    Location,
    ProjectConfig,
    ResolvedInputs,
    SourceKind,
)
from realm_cli.core.protocols import Prompter, ProjectStore
from realm_cli.core.source_selector import classify
from realm_cli.exceptions import (
    ConfigVersionMismatchError,
    ProjectExistsError,
    ProjectNotFoundError,
    TemplateNotSupportedError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_E = TypeVar("_E", bound=ChoiceEnum)


@dataclass(frozen=True, slots=True)
class InputFlags:
    """Raw values collected from the command line.

    Empty strings, ``UNSET`` enum members and a zero ``app_version``
    all mean "not supplied".
    """

    project: str = ""
    from_: str = ""
    name: str = ""
    location: Location = Location.UNSET
    deployment_model: DeploymentModel = DeploymentModel.UNSET
    target: str = ""
    app_version: int = CONFIG_VERSION_ZERO
    dry_run: bool = False


@dataclass(frozen=True, slots=True)
class InitDefaults:
    """Values used instead of prompting; ``UNSET`` forces a prompt."""

    location: Location = DEFAULT_LOCATION
    deployment_model: DeploymentModel = DEFAULT_DEPLOYMENT_MODEL


def expand_target(target: str) -> Path:
    """Expand a leading ``~`` in an explicit target path.

    Raises
    ------
    ValidationError
        When the home directory of the named user cannot be determined.
    """
    try:
        return Path(target).expanduser()
    except RuntimeError as exc:
        raise ValidationError(f"cannot expand target {target!r}: {exc}") from exc


def _checked_name(raw: str) -> str:
    name = raw.strip()
    if not name:
        raise ValidationError("app name must not be empty")
    return name


def reconcile_app_version(requested: int, found: int) -> int:
    """Merge a requested config version with the one found on disk.

    Raises
    ------
    ConfigVersionMismatchError
        When both are set and differ.
    """
    if requested == CONFIG_VERSION_ZERO:
        return found
    if found != CONFIG_VERSION_ZERO and requested != found:
        raise ConfigVersionMismatchError(requested, found)
    return requested


class InputResolver:
    """Resolve per-command inputs.

    Parameters
    ----------
    store:
        Local project access (directory lookup and config reads).
    prompter:
        Interactive question capability.
    """

    def __init__(self, store: ProjectStore, prompter: Prompter) -> None:
        self._store: ProjectStore = store
        self._prompter: Prompter = prompter

    # ------------------------------------------------------------------
    # init
    # ------------------------------------------------------------------

    def resolve_init(
        self,
        flags: InputFlags,
        working_dir: Path,
        defaults: InitDefaults = InitDefaults(),
    ) -> ResolvedInputs:
        """Resolve inputs for ``app init``.

        Raises
        ------
        ProjectExistsError
            When a named project already exists at or above the target.
            Raised before any prompt is shown.
        TemplateNotSupportedError
            When the source selector classifies as a template.
        InvalidEnumValueError
            When a prompted location or deployment model is not legal.
        """
        start = expand_target(flags.target) if flags.target else working_dir
        project_dir, config = self._discover(start)
        if config is not None and config.name:
            raise ProjectExistsError(project_dir)

        if flags.target:
            target = start
        elif project_dir is not None:
            target = project_dir
        else:
            target = working_dir

        if flags.from_:
            from_type = classify(flags.from_)
            if from_type is SourceKind.TEMPLATE:
                raise TemplateNotSupportedError()
            logger.debug("Initializing from %s %r", from_type.value, flags.from_)
            return ResolvedInputs(
                target=target,
                project=flags.project,
                from_=flags.from_,
                from_type=from_type,
                name=flags.name,
                location=flags.location,
                deployment_model=flags.deployment_model,
            )

        return ResolvedInputs(
            target=target,
            project=flags.project,
            name=_checked_name(flags.name) if flags.name else self._ask_name(),
            location=self._pick(Location, flags.location, defaults.location, "App Location"),
            deployment_model=self._pick(
                DeploymentModel,
                flags.deployment_model,
                defaults.deployment_model,
                "App Deployment Model",
            ),
        )

    # ------------------------------------------------------------------
    # pull
    # ------------------------------------------------------------------

    def resolve_pull(self, flags: InputFlags, working_dir: Path) -> ResolvedInputs:
        """Resolve inputs for ``pull``.

        The explicit target wins; otherwise the discovered project
        directory is used.  An existing project contributes its config
        version and app selector as defaults.

        Raises
        ------
        ProjectNotFoundError
            When no target was given and no project is found.
        ConfigVersionMismatchError
            When ``--app-version`` conflicts with the project's version.
        """
        start = expand_target(flags.target) if flags.target else working_dir
        project_dir, config = self._discover(start)

        if flags.target:
            target = start
        elif project_dir is None:
            raise ProjectNotFoundError(working_dir)
        else:
            target = project_dir

        app_version = flags.app_version
        from_ = flags.from_
        name = ""
        if config is not None:
            app_version = reconcile_app_version(app_version, config.config_version)
            from_ = from_ or config.app_selector
            name = config.name

        return ResolvedInputs(
            target=target,
            project=flags.project,
            from_=from_,
            from_type=classify(from_),
            name=name,
            app_version=app_version,
            dry_run=flags.dry_run,
        )

    # ------------------------------------------------------------------
    # push
    # ------------------------------------------------------------------

    def resolve_push(self, flags: InputFlags, working_dir: Path) -> ResolvedInputs:
        """Resolve inputs for ``push``.

        Push always reads from an existing project, searched from the
        explicit target when given, else from the working directory.

        Raises
        ------
        ProjectNotFoundError
            When no project with a config file is found.
        """
        start = expand_target(flags.target) if flags.target else working_dir
        project_dir, config = self._discover(start)
        if project_dir is None or config is None:
            raise ProjectNotFoundError(start)

        from_ = flags.from_ or config.app_selector
        return ResolvedInputs(
            target=project_dir,
            project=flags.project,
            from_=from_,
            from_type=classify(from_),
            name=config.name,
            location=config.location,
            deployment_model=config.deployment_model,
            app_version=config.config_version,
            dry_run=flags.dry_run,
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _discover(self, start: Path) -> tuple[Path | None, ProjectConfig | None]:
        """Locate the nearest project and read its config."""
        project_dir = self._store.find_project_directory(start)
        if project_dir is None:
            logger.debug("No project found at or above %s", start)
            return None, None
        logger.debug("Found project directory %s", project_dir)
        return project_dir, self._store.read_config(project_dir)

    def _ask_name(self) -> str:
        return _checked_name(self._prompter.ask_text("App Name"))

    def _pick(
        self,
        enum_type: type[_E],
        explicit: _E,
        default: _E,
        message: str,
    ) -> _E:
        """Return *explicit*, else *default*, else a validated prompt answer."""
        if explicit.is_set:
            return explicit
        if default.is_set:
            return default
        return enum_type.parse(self._prompter.select(message, list(enum_type.choices())))
