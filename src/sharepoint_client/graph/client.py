"""Async Microsoft Graph client for SharePoint sites, drives and files."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import TYPE_CHECKING, Any

import aiohttp

from sharepoint_client.graph.models import (
    FIELD_ACCESS_TOKEN,
    ODATA_VALUE,
    SITE_ID_SEPARATOR,
    Drive,
    Item,
    Site,
    Token,
)

if TYPE_CHECKING:
    from sharepoint_client.config import ClientConfig

logger = logging.getLogger(__name__)

GRAPH_BASE_URL = "https://graph.microsoft.com/v1.0"
GRAPH_SCOPE = "https://graph.microsoft.com/.default"
AUTHORITY_BASE_URL = "https://login.microsoftonline.com"
GRANT_TYPE = "client_credentials"


class GraphAuthError(Exception):
    """Raised when the token endpoint does not issue an access token."""


class GraphApiError(Exception):
    """Raised when the Graph API returns a non-2xx response or an unusable body."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(f"Graph API error {status_code}: {message}")
        self.status_code = status_code
        self.message = message


# KeyError / ValueError / TypeError / AttributeError: a 2xx payload whose
# shape does not match what the models read.
_FAILURES = (
    GraphAuthError,
    GraphApiError,
    aiohttp.ClientError,
    asyncio.TimeoutError,
    KeyError,
    ValueError,
    TypeError,
    AttributeError,
)


def _error_detail(body: bytes, reason: str) -> str:
    """Extract a readable message from a Graph or token endpoint error body."""
    try:
        error = json.loads(body).get("error")
    except (ValueError, AttributeError):
        return reason
    # Graph: {"error": {"code": ..., "message": ...}}
    if isinstance(error, dict):
        return str(error.get("message") or reason)
    # Token endpoint: {"error": "invalid_client", "error_description": ...}
    if isinstance(error, str):
        return error
    return reason


class SharepointClient:
    """Client for one SharePoint site, authenticated as an app registration.

    Each operation makes a single request and returns ``None`` on any
    failure. The access token is not stored: callers pass the Token returned
    by :meth:`authenticate` into every other call.
    """

    def __init__(
        self,
        config: ClientConfig,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        """Initialise the client.

        Args:
            config: Tenant, site and app registration settings.
            session: Optional shared aiohttp session. When omitted, a
                session is opened and closed around every request. A
                caller-supplied session is never closed by the client.
        """
        self._config = config
        self._session = session

    @property
    def config(self) -> ClientConfig:
        return self._config

    # -----------------------------------------------------------------------
    # Transport
    # -----------------------------------------------------------------------

    async def _send(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        data: Any = None,
    ) -> tuple[int, str, bytes]:
        """Issue one request and return (status, reason, body)."""
        logger.debug("[_send] %s %s", method, url)
        if self._session is not None:
            return await self._exchange(self._session, method, url, headers, data)
        async with aiohttp.ClientSession() as session:
            return await self._exchange(session, method, url, headers, data)

    @staticmethod
    async def _exchange(
        session: aiohttp.ClientSession,
        method: str,
        url: str,
        headers: dict[str, str],
        data: Any,
    ) -> tuple[int, str, bytes]:
        async with session.request(method, url, headers=headers, data=data) as resp:
            body = await resp.read()
            return resp.status, resp.reason or "", body

    async def _request(
        self,
        method: str,
        url: str,
        token: Token,
        data: bytes | None = None,
        content_type: str | None = None,
    ) -> tuple[int, bytes]:
        """Perform an authenticated Graph request.

        Returns:
            Response status and raw body.

        Raises:
            GraphApiError: If the API returns a non-2xx status code.
            aiohttp.ClientError: On transport failure.
        """
        headers = {
            "Authorization": token.authorization,
            "Accept": "application/json",
        }
        if content_type is not None:
            headers["Content-Type"] = content_type
        status, reason, body = await self._send(method, url, headers, data)
        if not 200 <= status < 300:
            raise GraphApiError(status, _error_detail(body, reason))
        return status, body

    async def _request_json(
        self, method: str, url: str, token: Token, **kwargs: Any
    ) -> tuple[int, dict[str, Any]]:
        """Perform an authenticated Graph request and decode a JSON object body.

        Returns:
            Response status and decoded body.

        Raises:
            GraphApiError: On a non-2xx status or a body that is not a JSON object.
        """
        status, body = await self._request(method, url, token, **kwargs)
        try:
            payload = json.loads(body)
        except ValueError as exc:
            raise GraphApiError(status, "response body is not valid JSON") from exc
        if not isinstance(payload, dict):
            raise GraphApiError(status, "response body is not a JSON object")
        return status, payload

    async def _request_values(self, url: str, token: Token) -> list[dict[str, Any]]:
        """GET a collection and unwrap the OData ``value`` array of objects."""
        status, payload = await self._request_json("GET", url, token)
        values = payload.get(ODATA_VALUE)
        if not isinstance(values, list):
            raise GraphApiError(status, f"response has no '{ODATA_VALUE}' array")
        if not all(isinstance(value, dict) for value in values):
            raise GraphApiError(status, f"'{ODATA_VALUE}' array holds a non-object entry")
        return values

    async def _acquire_token(self) -> Token:
        """Request an app-only token with the client credentials grant.

        Raises:
            GraphAuthError: If the endpoint does not answer 200 with a token.
            aiohttp.ClientError: On transport failure.
        """
        url = f"{AUTHORITY_BASE_URL}/{self._config.tenant_id}/oauth2/v2.0/token"
        form = {
            "grant_type": GRANT_TYPE,
            "client_id": self._config.client_id,
            "client_secret": self._config.client_secret,
            "scope": GRAPH_SCOPE,
        }
        status, reason, body = await self._send("POST", url, {}, form)
        if status != 200:
            raise GraphAuthError(f"Token endpoint returned {status}: {_error_detail(body, reason)}")
        try:
            payload = json.loads(body)
            return Token.from_dict(payload)
        except (ValueError, KeyError, TypeError, AttributeError) as exc:
            raise GraphAuthError(f"Token response is missing {FIELD_ACCESS_TOKEN}") from exc

    # -----------------------------------------------------------------------
    # Operations
    # -----------------------------------------------------------------------

    async def authenticate(self) -> Token | None:
        """Obtain an access token for the Graph API.

        Returns:
            The Token, or None if the token endpoint did not answer 200 or
            could not be reached.
        """
        try:
            token = await self._acquire_token()
        except _FAILURES as exc:
            logger.error(
                "[authenticate] token acquisition failed; tenant_id:%s;error:%s",
                self._config.tenant_id,
                exc,
            )
            return None
        logger.info(
            "[authenticate] token acquired; tenant_id:%s;expires_in:%d",
            self._config.tenant_id,
            token.expires_in,
        )
        return token

    async def fetch_site(self, token: Token) -> Site | None:
        """Look up the configured site by tenant and site name.

        Returns:
            The Site, or None on any failure.
        """
        url = (
            f"{GRAPH_BASE_URL}/sites/{self._config.tenant_name}.sharepoint.com:"
            f"/sites/{self._config.site_name}"
        )
        try:
            _, payload = await self._request_json("GET", url, token)
            return Site.from_dict(payload)
        except _FAILURES as exc:
            logger.error(
                "[fetch_site] site lookup failed; tenant_name:%s;site_name:%s;error:%s",
                self._config.tenant_name,
                self._config.site_name,
                exc,
            )
            return None

    async def list_drives(self, token: Token, site_id: str) -> list[Drive] | None:
        """List the document libraries of a site, in server order.

        Args:
            token: Token from :meth:`authenticate`.
            site_id: Site identifier, see :meth:`get_site_id`.

        Returns:
            The drives, or None on any failure.
        """
        url = f"{GRAPH_BASE_URL}/sites/{site_id}/drives"
        try:
            return [Drive.from_dict(value) for value in await self._request_values(url, token)]
        except _FAILURES as exc:
            logger.error("[list_drives] drive listing failed; site_id:%s;error:%s", site_id, exc)
            return None

    async def resolve_drive(self, token: Token, site_id: str, drive_name: str) -> Drive | None:
        """Find a drive by exact, case-sensitive name.

        When several drives share the name, the first one listed wins.

        Returns:
            The matching Drive, or None if listing failed or nothing matched.
        """
        drives = await self.list_drives(token, site_id)
        if drives is None:
            return None
        for drive in drives:
            if drive.name == drive_name:
                return drive
        logger.warning(
            "[resolve_drive] no drive with matching name; site_id:%s;drive_name:%s;drive_count:%d",
            site_id,
            drive_name,
            len(drives),
        )
        return None

    async def list_items(self, token: Token, drive_id: str, path: str) -> list[Item] | None:
        """List the children of a folder, in server order.

        ``path`` is inserted into the URL as-is and must already be URL-safe.

        Returns:
            The items, or None on any failure.
        """
        url = f"{GRAPH_BASE_URL}/drives/{drive_id}/root:/{path}:/children"
        try:
            return [Item.from_dict(value) for value in await self._request_values(url, token)]
        except _FAILURES as exc:
            logger.error(
                "[list_items] item listing failed; drive_id:%s;path:%s;error:%s",
                drive_id,
                path,
                exc,
            )
            return None

    async def download_item(self, token: Token, drive_id: str, path: str) -> bytes | None:
        """Download a file's content into memory.

        Returns:
            The response body exactly as received, or None on any failure.
        """
        url = f"{GRAPH_BASE_URL}/drives/{drive_id}/root:/{path}:/content"
        try:
            _, body = await self._request("GET", url, token)
            return body
        except _FAILURES as exc:
            logger.error(
                "[download_item] download failed; drive_id:%s;path:%s;error:%s",
                drive_id,
                path,
                exc,
            )
            return None

    async def upload(
        self,
        token: Token,
        drive_id: str,
        path: str,
        file_name: str,
        content_type: str,
        data: bytes,
    ) -> Item | None:
        """Create or replace a file with a single PUT.

        Only suitable for payloads under Graph's simple-upload limit; larger
        payloads are rejected by the service and come back as None.

        Args:
            token: Token from :meth:`authenticate`.
            drive_id: Target drive.
            path: Folder path in the drive, with a leading slash (e.g. "/Reports").
            file_name: Name of the target file.
            content_type: Sent verbatim as the Content-Type header.
            data: File content.

        Returns:
            The created or updated Item, or None on any failure.
        """
        url = f"{GRAPH_BASE_URL}/drives/{drive_id}/root:{path}/{file_name}:/content"
        try:
            status, payload = await self._request_json(
                "PUT", url, token, data=data, content_type=content_type
            )
            item = Item.from_dict(payload)
        except _FAILURES as exc:
            logger.error(
                "[upload] upload failed; drive_id:%s;path:%s;file_name:%s;error:%s",
                drive_id,
                path,
                file_name,
                exc,
            )
            return None
        logger.info(
            "[upload] upload complete; status:%d;drive_id:%s;item_id:%s;size:%d",
            status,
            drive_id,
            item.id,
            item.size,
        )
        return item

    @staticmethod
    def get_site_id(site: Site) -> str:
        """Return the site-collection segment of a composite site id.

        Graph site ids look like ``"<hostname>,<site-collection-id>,<web-id>"``.

        Raises:
            ValueError: If the id has fewer than two comma-separated segments.
        """
        parts = site.id.split(SITE_ID_SEPARATOR)
        if len(parts) < 2:
            raise ValueError(f"Malformed site id: {site.id!r}")
        return parts[1]


def sharepoint_client_from_config(
    config: ClientConfig,
    session: aiohttp.ClientSession | None = None,
) -> SharepointClient:
    """Construct a SharepointClient from client configuration.

    Args:
        config: Client configuration instance.
        session: Optional shared aiohttp session.

    Returns:
        Configured SharepointClient instance.
    """
    return SharepointClient(config, session=session)
