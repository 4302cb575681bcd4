"""Entry point for ``python -m realm_cli``."""

from __future__ import annotations

from realm_cli.cli.app import cli

if __name__ == "__main__":
    cli()
