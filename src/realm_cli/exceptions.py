"""Custom exception hierarchy for realm-cli.

All exceptions that cross layer boundaries must inherit from
:class:`RealmCliError`.  Raw third-party exceptions (httpx, json,
zipfile, ``OSError``) must NEVER propagate beyond the infrastructure
layer — they are caught there and re-raised as a typed subclass
defined here.

Hierarchy
---------
RealmCliError
├── ValidationError
│   ├── InvalidEnumValueError
│   └── ConfigVersionMismatchError
├── ProjectStateError
│   ├── ProjectExistsError
│   └── ProjectNotFoundError
├── TemplateNotSupportedError
├── ProjectIOError
│   ├── ConfigFileError
│   └── ProjectWriteError
├── RemoteError
│   └── AppNotFoundError
├── PromptCancelledError
└── EnvironmentError
"""

from __future__ import annotations

from collections.abc import Sequence


class RealmCliError(Exception):
    """Base exception for all realm-cli errors.

    Every user-visible error condition maps to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Validation ------------------------------------------------------------

class ValidationError(RealmCliError):
    """Raised when user-supplied values are invalid or conflicting."""


class InvalidEnumValueError(ValidationError):
    """Raised when a value is not one of an enumeration's legal choices."""

    def __init__(self, value: str, choices: Sequence[str]) -> None:
        super().__init__(
            f"unsupported value '{value}', use one of [{', '.join(choices)}] instead",
        )
        self.value: str = value
        self.choices: tuple[str, ...] = tuple(choices)


class ConfigVersionMismatchError(ValidationError):
    """Raised when the requested config version differs from the project's."""

    def __init__(self, requested: int, found: int) -> None:
        super().__init__(
            "must export an app with the same config version as found in "
            "the current project directory",
            hint=f"Requested {requested}, project directory uses {found}.",
        )
        self.requested: int = requested
        self.found: int = found


# --- Project state ---------------------------------------------------------

class ProjectStateError(RealmCliError):
    """Raised when the local project state does not allow the operation."""


class ProjectExistsError(ProjectStateError):
    """Raised when initializing where a project already exists."""

    def __init__(self, directory: object) -> None:
        super().__init__(
            f"a project already exists at {directory}",
            hint="Run the command from a directory outside the existing project.",
        )


class ProjectNotFoundError(ProjectStateError):
    """Raised when an operation needs a project but none was found."""

    def __init__(self, start: object) -> None:
        super().__init__(
            f"no project found at or above {start}",
            hint="Run the command inside a project directory or pass --target.",
        )


# --- Capability gaps -------------------------------------------------------

class TemplateNotSupportedError(RealmCliError, NotImplementedError):
    """Raised when an operation is sourced from an app template."""

    def __init__(self) -> None:
        super().__init__("initializing from templates is not yet supported")


# --- Filesystem ------------------------------------------------------------

class ProjectIOError(RealmCliError):
    """Raised when reading or writing the local project fails."""


class ConfigFileError(ProjectIOError):
    """Raised when the project config file cannot be read or parsed."""


class ProjectWriteError(ProjectIOError):
    """Raised when a project file cannot be written."""


# --- Remote ----------------------------------------------------------------

class RemoteError(RealmCliError):
    """Raised when the Realm admin API call fails."""


class AppNotFoundError(RemoteError):
    """Raised when no remote app matches the lookup filter."""

    def __init__(self, message: str = "failed to find app", *, hint: str | None = None) -> None:
        super().__init__(message, hint=hint)


# --- Interaction / environment ---------------------------------------------

class PromptCancelledError(RealmCliError):
    """Raised when the user dismisses an interactive prompt."""


class EnvironmentError(RealmCliError):
    """Raised when a required runtime dependency is not available."""
