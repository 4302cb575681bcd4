"""httpx backed implementation of :class:`~realm_cli.core.protocols.RealmClient`.

This module is the **only** place in the codebase that imports
``httpx`` or handles app archives (``zipfile``).  Transport, HTTP and
archive errors are caught here and re-raised as typed
:class:`~realm_cli.exceptions.RemoteError` subclasses — nothing raw
escapes the infrastructure boundary.
"""

from __future__ import annotations

import io
import logging
import zipfile
from collections.abc import Sequence
from typing import Any

from realm_cli.core.models import App, AppFilter, ArchiveEntry
from realm_cli.exceptions import AppNotFoundError, EnvironmentError, RemoteError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL: str = "https://realm.mongodb.com"
ADMIN_API_PATH: str = "/api/admin/v3.0"


def _import_httpx() -> Any:
    """Import httpx lazily so ``--help`` works without it."""
    try:
        import httpx
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "httpx is not installed. Install with: pip install httpx",
        ) from exc
    return httpx


# ---------------------------------------------------------------------------
# Archive helpers (pure)
# ---------------------------------------------------------------------------

def read_archive(data: bytes) -> list[ArchiveEntry]:
    """Unpack a zip archive into entries, preserving archive order.

    Directory records are skipped; their files carry the full path.

    Raises
    ------
    RemoteError
        When *data* is not a readable zip archive.
    """
    try:
        with zipfile.ZipFile(io.BytesIO(data)) as archive:
            return [
                ArchiveEntry(path=info.filename, data=archive.read(info))
                for info in archive.infolist()
                if not info.is_dir()
            ]
    except zipfile.BadZipFile as exc:
        raise RemoteError(f"received an invalid app archive: {exc}") from exc


def build_archive(entries: Sequence[ArchiveEntry]) -> bytes:
    """Pack *entries* into an in-memory zip archive."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        for entry in entries:
            archive.writestr(entry.path, entry.data)
    return buffer.getvalue()


def _parse_app(raw: dict[str, Any], group_id: str) -> App:
    return App(
        id=str(raw.get("_id", "")),
        group_id=str(raw.get("group_id") or group_id),
        client_app_id=str(raw.get("client_app_id", "")),
        name=str(raw.get("name", "")),
    )


def matches(app: App, selector: str) -> bool:
    """Return whether *app* is named by *selector* (empty matches all)."""
    if not selector:
        return True
    return selector in (app.client_app_id, app.name, app.id)


class HttpRealmClient:
    """Concrete :class:`RealmClient` talking to the Realm admin API.

    Usage::

        with HttpRealmClient(base_url, access_token) as client:
            apps = client.find_apps(AppFilter(group_id="5f1..."))

    Parameters
    ----------
    base_url:
        Realm server URL, without the admin API path.
    access_token:
        Bearer token for an authenticated session.
    transport:
        Optional ``httpx`` transport, used by tests to stub the server.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        access_token: str = "",
        *,
        transport: Any = None,
        timeout: float = 30.0,
    ) -> None:
        httpx = _import_httpx()
        headers = {"Accept": "application/json"}
        if access_token:
            headers["Authorization"] = f"Bearer {access_token}"
        self._httpx: Any = httpx
        self._http: Any = httpx.Client(
            base_url=base_url.rstrip("/") + ADMIN_API_PATH,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    # ------------------------------------------------------------------
    # Context manager
    # ------------------------------------------------------------------

    def __enter__(self) -> HttpRealmClient:
        return self

    def __exit__(self, *_args: object) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    # ------------------------------------------------------------------
    # Protocol methods
    # ------------------------------------------------------------------

    def find_apps(self, app_filter: AppFilter) -> list[App]:
        """List apps of one project, or of every project on the profile."""
        group_ids = [app_filter.group_id] if app_filter.group_id else self._group_ids()

        apps: list[App] = []
        for group_id in group_ids:
            response = self._request("GET", f"/groups/{group_id}/apps")
            payload = _json(response)
            if not isinstance(payload, list):
                raise RemoteError(f"unexpected app list for project {group_id}")
            apps.extend(
                app
                for app in (_parse_app(raw, group_id) for raw in payload if isinstance(raw, dict))
                if matches(app, app_filter.app)
            )
        return apps

    def export_app(
        self,
        group_id: str,
        app_id: str,
        *,
        config_version: int = 0,
    ) -> list[ArchiveEntry]:
        """Download the templated export archive of an app."""
        params: dict[str, Any] = {"template": "true"}
        if config_version:
            params["version"] = str(config_version)
        response = self._request(
            "GET",
            f"/groups/{group_id}/apps/{app_id}/export",
            params=params,
            not_found_is_app=True,
        )
        entries = read_archive(response.content)
        logger.debug("Exported %d file(s) from app %s", len(entries), app_id)
        return entries

    def import_app(
        self,
        group_id: str,
        app_id: str,
        entries: Sequence[ArchiveEntry],
    ) -> None:
        """Upload *entries* as a zip archive replacing the app config."""
        self._request(
            "POST",
            f"/groups/{group_id}/apps/{app_id}/import",
            content=build_archive(entries),
            headers={"Content-Type": "application/zip"},
            not_found_is_app=True,
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _group_ids(self) -> list[str]:
        """Project ids the authenticated user holds a role in."""
        payload = _json(self._request("GET", "/auth/profile"))
        roles = payload.get("roles", []) if isinstance(payload, dict) else []
        group_ids: list[str] = []
        for role in roles:
            group_id = role.get("group_id") if isinstance(role, dict) else None
            if group_id and group_id not in group_ids:
                group_ids.append(group_id)
        return group_ids

    def _request(
        self,
        method: str,
        path: str,
        *,
        not_found_is_app: bool = False,
        **kwargs: Any,
    ) -> Any:
        """Send a request and map every failure to :class:`RemoteError`."""
        try:
            response = self._http.request(method, path, **kwargs)
        except self._httpx.HTTPError as exc:
            raise RemoteError(
                f"request to {path} failed: {exc}",
                hint="Check your network connection and --realm-url.",
            ) from exc

        if response.status_code == 404 and not_found_is_app:
            raise AppNotFoundError(f"app not found: {path}")
        if response.status_code == 401:
            raise RemoteError(
                "the Realm server rejected the access token",
                hint="Set a valid token with --access-token or REALM_ACCESS_TOKEN.",
            )
        if response.is_error:
            raise RemoteError(
                f"{method} {path} failed with status {response.status_code}: "
                f"{_error_message(response)}",
            )
        return response


def _json(response: Any) -> Any:
    try:
        return response.json()
    except ValueError as exc:
        raise RemoteError(f"received malformed JSON from the Realm server: {exc}") from exc


def _error_message(response: Any) -> str:
    """Best-effort extraction of the server's error text."""
    try:
        payload = response.json()
    except ValueError:
        return response.text.strip() or "no details"
    if isinstance(payload, dict) and payload.get("error"):
        return str(payload["error"])
    return "no details"
