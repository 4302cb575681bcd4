"""Infrastructure layer — external system integration.

This layer wraps all interaction with the local filesystem and the
Realm admin API.  Every raw ``OSError``, httpx or zipfile exception is
caught here and re-raised as a :class:`~realm_cli.exceptions.RealmCliError`
subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from realm_cli.infra.project_store import LocalProjectStore, find_project_directory, materialize
from realm_cli.infra.realm_client import HttpRealmClient

__all__: list[str] = [
    "HttpRealmClient",
    "LocalProjectStore",
    "find_project_directory",
    "materialize",
]
