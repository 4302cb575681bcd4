"""Source selection — decide where an operation's data comes from.

Classification of a ``--from`` selector is deliberately trivial: every
non-empty selector names an existing app.  The template variant is kept
as a real branch because the flag choices already advertise it, but it
always fails with :class:`~realm_cli.exceptions.TemplateNotSupportedError`.
"""

from __future__ import annotations

import logging

from realm_cli.core.models import App, AppFilter, ResolvedInputs, SourceKind, SourceSelection
from realm_cli.core.protocols import Prompter, RealmClient
from realm_cli.exceptions import (
    AppNotFoundError,
    InvalidEnumValueError,
    TemplateNotSupportedError,
)

logger = logging.getLogger(__name__)


def classify(from_selector: str) -> SourceKind:
    """Classify a ``--from`` selector.

    Empty means a blank scaffold; anything else is looked up as an
    existing app.  No selector currently classifies as a template.
    """
    if not from_selector:
        return SourceKind.SCAFFOLD
    return SourceKind.APP


def describe_app(app: App) -> str:
    """Single-line label used when the user must pick between apps.

    Labels are unique per app id.
    """
    return f"{app.client_app_id} ({app.name}) [{app.group_id}/{app.id}]"


class SourceSelector:
    """Resolve a :class:`SourceSelection` against the remote API.

    Parameters
    ----------
    client:
        Any object satisfying the :class:`RealmClient` protocol.
    prompter:
        Used to disambiguate when a lookup matches several apps.
    """

    def __init__(self, client: RealmClient, prompter: Prompter) -> None:
        self._client: RealmClient = client
        self._prompter: Prompter = prompter

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def select(self, inputs: ResolvedInputs) -> SourceSelection:
        """Turn resolved inputs into a concrete source.

        Raises
        ------
        TemplateNotSupportedError
            When the inputs are template sourced.
        AppNotFoundError
            When the app selector matches nothing.
        """
        if inputs.from_type is SourceKind.APP:
            app = self.resolve_app(AppFilter(group_id=inputs.project, app=inputs.from_))
            return SourceSelection.existing_app(app.group_id, app.id)
        if inputs.from_type is SourceKind.TEMPLATE:
            raise TemplateNotSupportedError()
        return SourceSelection.scaffold()

    def select_with_fallback(self, inputs: ResolvedInputs) -> SourceSelection:
        """Resolve the app for a pull, falling back to a project-wide lookup.

        When the selector matches nothing, every app of ``inputs.project``
        becomes a candidate instead.  Any other lookup error propagates.
        """
        if inputs.from_:
            try:
                app = self.resolve_app(AppFilter(group_id=inputs.project, app=inputs.from_))
            except AppNotFoundError:
                logger.warning(
                    "App %r not found, looking up apps by project instead",
                    inputs.from_,
                )
            else:
                return SourceSelection.existing_app(app.group_id, app.id)

        app = self.resolve_app(AppFilter(group_id=inputs.project))
        return SourceSelection.existing_app(app.group_id, app.id)

    def resolve_app(self, app_filter: AppFilter) -> App:
        """Find exactly one app for *app_filter*.

        Zero matches raise :class:`AppNotFoundError`; several matches
        are disambiguated with a single-choice prompt.
        """
        apps = self._client.find_apps(app_filter)
        logger.debug(
            "App lookup group=%r app=%r matched %d app(s)",
            app_filter.group_id,
            app_filter.app,
            len(apps),
        )

        if not apps:
            raise AppNotFoundError(
                hint="Check the --project and app selector values.",
            )
        if len(apps) == 1:
            return apps[0]

        labels = {describe_app(app): app for app in apps}
        answer = self._prompter.select("Select App", list(labels))
        if answer not in labels:
            raise InvalidEnumValueError(answer, list(labels))
        return labels[answer]
