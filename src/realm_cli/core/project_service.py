"""Core project service — orchestrates init, pull and push.

The service receives already-resolved inputs and a source selection,
then dispatches to the matching strategy.  It delegates every side
effect to a :class:`~realm_cli.core.protocols.ProjectStore` and a
:class:`~realm_cli.core.protocols.RealmClient` injected at construction
time.

Guarantees
----------
* No ``print()`` and no direct filesystem or network access.
* A scaffold write always carries a set location and deployment model.
* Only :class:`~realm_cli.exceptions.RealmCliError` subclasses escape.
"""

from __future__ import annotations

import logging

from realm_cli.core.config_codec import CONFIG_FILE_NAME
from realm_cli.core.models import (
    DEFAULT_CONFIG_VERSION,
    DEFAULT_DEPLOYMENT_MODEL,
    DEFAULT_LOCATION,
    ArchiveEntry,
    OperationResult,
    ProjectConfig,
    ResolvedInputs,
    SourceKind,
    SourceSelection,
)
from realm_cli.core.protocols import ProjectStore, RealmClient
from realm_cli.exceptions import TemplateNotSupportedError

logger = logging.getLogger(__name__)


def scaffold_config(inputs: ResolvedInputs) -> ProjectConfig:
    """Build the minimal config written by a blank initialization."""
    location = inputs.location if inputs.location.is_set else DEFAULT_LOCATION
    deployment_model = (
        inputs.deployment_model
        if inputs.deployment_model.is_set
        else DEFAULT_DEPLOYMENT_MODEL
    )
    return ProjectConfig(
        config_version=DEFAULT_CONFIG_VERSION,
        name=inputs.name,
        location=location,
        deployment_model=deployment_model,
    )


def _paths(entries: list[ArchiveEntry]) -> tuple[str, ...]:
    return tuple(entry.path for entry in entries)


class ProjectService:
    """Stateless service that runs project operations.

    Parameters
    ----------
    store:
        Local project filesystem access.
    client:
        Remote Realm admin API.
    """

    def __init__(self, store: ProjectStore, client: RealmClient) -> None:
        self._store: ProjectStore = store
        self._client: RealmClient = client

    # ------------------------------------------------------------------
    # init
    # ------------------------------------------------------------------

    def initialize(
        self,
        inputs: ResolvedInputs,
        source: SourceSelection,
    ) -> OperationResult:
        """Create a project in ``inputs.target`` from *source*.

        Raises
        ------
        TemplateNotSupportedError
            When *source* is a template.
        ProjectIOError
            When writing the project fails.
        RemoteError
            When exporting the source app fails.
        """
        if source.kind is SourceKind.APP:
            logger.info("Exporting app %s from project %s", source.app_id, source.group_id)
            entries = self._client.export_app(source.group_id, source.app_id)
            self._store.materialize(inputs.target, entries)
            return OperationResult(target=inputs.target, source=source, files=_paths(entries))

        if source.kind is SourceKind.TEMPLATE:
            raise TemplateNotSupportedError()

        config = scaffold_config(inputs)
        logger.info("Writing blank project %r to %s", config.name, inputs.target)
        self._store.write_config(inputs.target, config)
        return OperationResult(
            target=inputs.target,
            source=source,
            files=(CONFIG_FILE_NAME,),
        )

    # ------------------------------------------------------------------
    # pull
    # ------------------------------------------------------------------

    def pull(self, inputs: ResolvedInputs, source: SourceSelection) -> OperationResult:
        """Export the source app into ``inputs.target``.

        With ``inputs.dry_run`` the export happens but nothing is written.
        """
        entries = self._client.export_app(
            source.group_id,
            source.app_id,
            config_version=inputs.app_version,
        )
        if inputs.dry_run:
            for entry in entries:
                logger.info("Would write %s", entry.path)
        else:
            self._store.materialize(inputs.target, entries)
        return OperationResult(
            target=inputs.target,
            source=source,
            files=_paths(entries),
            dry_run=inputs.dry_run,
        )

    # ------------------------------------------------------------------
    # push
    # ------------------------------------------------------------------

    def push(self, inputs: ResolvedInputs, source: SourceSelection) -> OperationResult:
        """Send the project tree in ``inputs.target`` to the source app.

        With ``inputs.dry_run`` the tree is collected but not sent.
        """
        entries = self._store.collect(inputs.target)
        if inputs.dry_run:
            logger.info("Would push %d file(s) to app %s", len(entries), source.app_id)
        else:
            self._client.import_app(source.group_id, source.app_id, entries)
        return OperationResult(
            target=inputs.target,
            source=source,
            files=_paths(entries),
            dry_run=inputs.dry_run,
        )
