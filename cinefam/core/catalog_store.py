"""Remote catalog store client (Supabase auth + REST tables) via httpx."""
import logging
from typing import Any, List, Optional

import httpx

from cinefam.config import HTTP_TIMEOUT_SEC, SUPABASE_ANON_KEY, SUPABASE_URL
from cinefam.models.catalog import COLLECTIONS

logger = logging.getLogger(__name__)


class CatalogStoreError(Exception):
    """A remote call failed (transport error or non-2xx response)."""


class RemoteCatalogStore:
    """Per-collection read-all and upsert, plus password sessions.

    Requests carry the public API key; once authenticated, the access token
    is sent as the bearer credential instead of the key.
    """

    def __init__(
        self,
        url: str = SUPABASE_URL,
        api_key: str = SUPABASE_ANON_KEY,
        *,
        timeout: float = HTTP_TIMEOUT_SEC,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._url = url.rstrip("/")
        self._api_key = api_key
        self._timeout = timeout
        self._transport = transport
        self.access_token: Optional[str] = None

    def _headers(self, token: Optional[str] = None) -> dict:
        bearer = token or self.access_token or self._api_key
        return {
            "apikey": self._api_key,
            "Authorization": f"Bearer {bearer}",
            "Content-Type": "application/json",
        }

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self._timeout, transport=self._transport)

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        url = f"{self._url}{path}"
        try:
            async with self._client() as client:
                resp = await client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            raise CatalogStoreError(f"{method} {path}: {e}") from e
        if resp.status_code >= 400:
            raise CatalogStoreError(f"{method} {path}: HTTP {resp.status_code} {resp.text[:200]}")
        return resp

    @staticmethod
    def _json(resp: httpx.Response, what: str) -> Any:
        try:
            return resp.json()
        except ValueError as e:
            raise CatalogStoreError(f"{what}: response was not JSON") from e

    @staticmethod
    def _check_collection(collection: str) -> None:
        if collection not in COLLECTIONS:
            raise ValueError(f"Unknown collection: {collection!r}")

    async def authenticate(self, email: str, password: str) -> str:
        """Password sign-in; returns the access token and keeps it for later calls."""
        resp = await self._request(
            "POST",
            "/auth/v1/token",
            params={"grant_type": "password"},
            headers=self._headers(),
            json={"email": email, "password": password},
        )
        body = self._json(resp, "Sign-in")
        token = body.get("access_token") if isinstance(body, dict) else None
        if not isinstance(token, str) or not token:
            raise CatalogStoreError("Sign-in response had no access_token")
        self.access_token = token
        return token

    async def invalidate_session(self) -> None:
        """Sign out the current access token, if any."""
        token = self.access_token
        self.access_token = None
        if not token:
            return
        await self._request("POST", "/auth/v1/logout", headers=self._headers(token))

    async def read_all(self, collection: str) -> List[dict]:
        """Return every row of a collection."""
        self._check_collection(collection)
        resp = await self._request(
            "GET",
            f"/rest/v1/{collection}",
            params={"select": "*"},
            headers=self._headers(),
        )
        data = self._json(resp, f"GET {collection}")
        if not isinstance(data, list):
            raise CatalogStoreError(f"GET {collection}: expected a list, got {type(data).__name__}")
        return data

    async def upsert(self, collection: str, record: dict) -> None:
        """Insert or overwrite one row keyed on its id."""
        self._check_collection(collection)
        headers = self._headers()
        headers["Prefer"] = "resolution=merge-duplicates,return=minimal"
        await self._request(
            "POST",
            f"/rest/v1/{collection}",
            params={"on_conflict": "id"},
            headers=headers,
            json=record,
        )
