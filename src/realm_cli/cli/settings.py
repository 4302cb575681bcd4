"""Connection settings resolved from flags, environment and defaults.

Precedence: explicit flag → environment variable → built-in default.
Credentials are taken as given; storing or refreshing them is left to
the login tooling.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from realm_cli.infra.realm_client import DEFAULT_BASE_URL

ENV_BASE_URL: str = "REALM_BASE_URL"
ENV_ACCESS_TOKEN: str = "REALM_ACCESS_TOKEN"
ENV_PROJECT: str = "REALM_PROJECT"


@dataclass(frozen=True, slots=True)
class CliSettings:
    """Settings shared by every command of one invocation."""

    base_url: str = DEFAULT_BASE_URL
    access_token: str = ""
    project: str = ""


def resolve_settings(
    *,
    base_url: str | None = None,
    access_token: str | None = None,
    project: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> CliSettings:
    """Merge flag values with the environment into :class:`CliSettings`."""
    env = os.environ if environ is None else environ
    return CliSettings(
        base_url=base_url or env.get(ENV_BASE_URL) or DEFAULT_BASE_URL,
        access_token=access_token or env.get(ENV_ACCESS_TOKEN, ""),
        project=project or env.get(ENV_PROJECT, ""),
    )
