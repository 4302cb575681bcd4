"""realm-cli: manage local Realm app project directories.

Initialize, pull and push declarative app configuration trees with a
strict cli → core ← infra layered architecture.
"""

from realm_cli.version import __version__

__all__: list[str] = ["__version__"]
