"""CLI application entry point and command routing for realm-cli.

This module is the **sole error boundary** for the entire application.
It catches :class:`~realm_cli.exceptions.RealmCliError`,
``KeyboardInterrupt`` and any unexpected ``Exception``, rendering
user-friendly messages via Rich and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — resolution and orchestration are
  delegated to the core services, side effects to the infra adapters.
* ``print()`` is forbidden outside the CLI layer; the Rich console is
  used for all feedback.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

from realm_cli.cli import exit_codes
from realm_cli.cli.console import configure_logging, console
from realm_cli.cli.settings import CliSettings, resolve_settings
from realm_cli.core.input_resolver import InputFlags, InputResolver
from realm_cli.core.models import DeploymentModel, Location, OperationResult
from realm_cli.exceptions import RealmCliError
from realm_cli.version import __version__

PROG: str = "realm-cli"


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _add_project_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--project",
        default=None,
        help="the MongoDB cloud project id",
    )


def _config_version(raw: str) -> int:
    """argparse type for ``--app-version``: a non-negative integer."""
    try:
        value = int(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid config version: {raw!r}") from None
    if value < 0:
        raise argparse.ArgumentTypeError(f"config version must not be negative: {value}")
    return value


def _add_dry_run_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-x",
        "--dry-run",
        action="store_true",
        help="run without writing any changes",
    )


def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    Commands:
    * ``realm-cli app init``  — initialize a project in the current directory
    * ``realm-cli pull``      — export a remote app into a project directory
    * ``realm-cli push``      — import a project directory into a remote app
    """
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="CLI tool to manage your MongoDB Realm application.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="show debug logging on stderr",
    )
    parser.add_argument("--realm-url", default=None, help="the Realm server base url")
    parser.add_argument("--access-token", default=None, help="the Realm session access token")

    commands = parser.add_subparsers(dest="command", metavar="<command>")

    app_parser = commands.add_parser("app", help="manage Realm apps")
    app_commands = app_parser.add_subparsers(dest="app_command", metavar="<command>")
    init = app_commands.add_parser(
        "init",
        aliases=["initialize"],
        help="initialize a Realm app in your current local directory",
    )
    _add_project_flag(init)
    init.add_argument(
        "-s",
        "--from",
        dest="from_",
        default="",
        help="choose an application or template to initialize the Realm app with",
    )
    init.add_argument(
        "-n",
        "--name",
        default="",
        help="set the name of the Realm app to be initialized",
    )
    init.add_argument(
        "-d",
        "--deployment-model",
        type=DeploymentModel.parse,
        default=DeploymentModel.UNSET,
        help=f"select the Realm app's deployment model, available options: "
        f"[{', '.join(DeploymentModel.choices())}]",
    )
    init.add_argument(
        "-l",
        "--location",
        type=Location.parse,
        default=Location.UNSET,
        help=f"select the Realm app's location, available options: "
        f"[{', '.join(Location.choices())}]",
    )
    init.set_defaults(handler=_handle_init)

    pull = commands.add_parser("pull", help="export a Realm app into a local directory")
    _add_project_flag(pull)
    pull.add_argument(
        "-a",
        "--from",
        dest="from_",
        default="",
        help="specify the app to pull changes down from",
    )
    pull.add_argument(
        "--app-version",
        type=_config_version,
        default=0,
        help="specify the app config version to pull changes down as",
    )
    pull.add_argument(
        "-t",
        "--target",
        default="",
        help="provide the path to export a Realm app to",
    )
    _add_dry_run_flag(pull)
    pull.set_defaults(handler=_handle_pull)

    push = commands.add_parser("push", help="import a local directory into a Realm app")
    _add_project_flag(push)
    push.add_argument(
        "-a",
        "--to",
        dest="from_",
        default="",
        help="specify the app to push changes to",
    )
    push.add_argument(
        "-t",
        "--target",
        default="",
        help="provide the path of the project directory to push",
    )
    _add_dry_run_flag(push)
    push.set_defaults(handler=_handle_push)

    return parser


# ---------------------------------------------------------------------------
# Collaborator factories (patched in tests)
# ---------------------------------------------------------------------------

def _build_prompter() -> Any:
    from realm_cli.cli.prompts import QuestionaryPrompter

    return QuestionaryPrompter()


def _build_store() -> Any:
    from realm_cli.infra.project_store import LocalProjectStore

    return LocalProjectStore()


def _build_client(settings: CliSettings) -> Any:
    from realm_cli.infra.realm_client import HttpRealmClient

    return HttpRealmClient(settings.base_url, settings.access_token)


def _flags(args: argparse.Namespace, settings: CliSettings) -> InputFlags:
    return InputFlags(
        project=args.project or settings.project,
        from_=args.from_,
        name=getattr(args, "name", ""),
        location=getattr(args, "location", Location.UNSET),
        deployment_model=getattr(args, "deployment_model", DeploymentModel.UNSET),
        target=getattr(args, "target", ""),
        app_version=getattr(args, "app_version", 0),
        dry_run=getattr(args, "dry_run", False),
    )


def _report(verb: str, result: OperationResult) -> None:
    """Print a one-line summary plus the touched files."""
    prefix = "[yellow](dry run)[/yellow] " if result.dry_run else ""
    console.print(
        f"{prefix}[bold green]{verb}[/bold green] "
        f"({len(result.files)} file(s)) → {result.target}",
    )
    for path in result.files:
        console.print(f"  [dim]{path}[/dim]")


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------

def _handle_init(args: argparse.Namespace, settings: CliSettings) -> int:
    """Resolve inputs, pick the source and initialize the project."""
    from realm_cli.core.project_service import ProjectService
    from realm_cli.core.source_selector import SourceSelector

    store = _build_store()
    prompter = _build_prompter()
    inputs = InputResolver(store, prompter).resolve_init(_flags(args, settings), Path.cwd())

    with _build_client(settings) as client:
        source = SourceSelector(client, prompter).select(inputs)
        result = ProjectService(store, client).initialize(inputs, source)

    _report("Successfully initialized app", result)
    return exit_codes.SUCCESS


def _handle_pull(args: argparse.Namespace, settings: CliSettings) -> int:
    """Export the remote app into the resolved target directory."""
    from realm_cli.core.project_service import ProjectService
    from realm_cli.core.source_selector import SourceSelector

    store = _build_store()
    prompter = _build_prompter()
    inputs = InputResolver(store, prompter).resolve_pull(_flags(args, settings), Path.cwd())

    with _build_client(settings) as client:
        source = SourceSelector(client, prompter).select_with_fallback(inputs)
        result = ProjectService(store, client).pull(inputs, source)

    _report("Successfully pulled app", result)
    return exit_codes.SUCCESS


def _handle_push(args: argparse.Namespace, settings: CliSettings) -> int:
    """Import the local project tree into the remote app."""
    from realm_cli.core.models import AppFilter, SourceSelection
    from realm_cli.core.project_service import ProjectService
    from realm_cli.core.source_selector import SourceSelector

    store = _build_store()
    prompter = _build_prompter()
    inputs = InputResolver(store, prompter).resolve_push(_flags(args, settings), Path.cwd())

    with _build_client(settings) as client:
        app = SourceSelector(client, prompter).resolve_app(
            AppFilter(group_id=inputs.project, app=inputs.from_),
        )
        source = SourceSelection.existing_app(app.group_id, app.id)
        result = ProjectService(store, client).push(inputs, source)

    _report("Successfully pushed app", result)
    return exit_codes.SUCCESS


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the realm-cli CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    handler = getattr(args, "handler", None)
    if handler is None:
        parser.print_help()
        return exit_codes.SUCCESS

    configure_logging(args.verbose)
    settings = resolve_settings(
        base_url=args.realm_url,
        access_token=args.access_token,
    )
    return handler(args, settings)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except RealmCliError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {exc.hint}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
