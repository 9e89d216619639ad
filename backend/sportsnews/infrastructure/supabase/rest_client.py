"""Supabase REST client — implements the DataGateway interface.

Talks to PostgREST (``{supabase_url}/rest/v1``) with httpx. Row-level
security is enforced by the hosted service, so every request carries the
caller's access token when there is one and the anonymous key otherwise.
"""

import logging
from collections.abc import Sequence
from datetime import datetime
from enum import Enum
from typing import Any

import httpx

from sportsnews.application.interfaces.data_gateway import DataGateway
from sportsnews.domain.entities import Ordering, PageRequest, RowFilter
from sportsnews.domain.exceptions import EntityNotFoundError, RemoteOperationFailedError

logger = logging.getLogger(__name__)

_OBJECT_MEDIA_TYPE = "application/vnd.pgrst.object+json"
# Postgres invalid_text_representation: the key cannot even be parsed (e.g. not a uuid).
_INVALID_KEY_CODE = "22P02"


class SupabaseRestGateway(DataGateway):
    """Infrastructure adapter — connects to the Supabase PostgREST API.

    An injected ``httpx.AsyncClient`` is reused across calls (connection
    pooling); without one a short-lived client is opened per request.
    """

    def __init__(
        self,
        rest_url: str,
        api_key: str,
        access_token: str | None = None,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 15.0,
    ):
        self._rest_url = rest_url.rstrip("/")
        self._api_key = api_key
        self._access_token = access_token
        self._http_client = http_client
        self._timeout = timeout

    def _get_headers(self, extra: dict[str, str] | None = None) -> dict[str, str]:
        """Standard headers for PostgREST requests."""
        headers = {
            "apikey": self._api_key,
            "Authorization": f"Bearer {self._access_token or self._api_key}",
            "Content-Type": "application/json",
        }
        if extra:
            headers.update(extra)
        return headers

    async def _get_client(self) -> httpx.AsyncClient:
        """Return the injected client or create a new one."""
        if self._http_client is not None:
            return self._http_client
        return httpx.AsyncClient(timeout=self._timeout)

    # ── Query encoding ───────────────────────────────────────────────

    @staticmethod
    def _format_value(value: Any) -> str:
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, Enum):
            return str(value.value)
        if isinstance(value, datetime):
            return value.isoformat()
        if value is None:
            return "null"
        return str(value)

    @classmethod
    def _build_params(
        cls,
        *,
        columns: str | None = None,
        filters: Sequence[RowFilter] = (),
        order: Ordering | None = None,
        page: PageRequest | None = None,
    ) -> list[tuple[str, str]]:
        """Translate the query vocabulary into PostgREST query parameters."""
        params: list[tuple[str, str]] = []
        if columns is not None:
            params.append(("select", columns))
        for f in filters:
            operator = "is" if f.value is None else f.operator
            params.append((f.column, f"{operator}.{cls._format_value(f.value)}"))
        if order is not None:
            direction = "desc" if order.descending else "asc"
            params.append(("order", f"{order.column}.{direction}"))
        if page is not None:
            params.append(("limit", str(page.limit)))
            params.append(("offset", str(page.offset)))
        return params

    # ── Transport ────────────────────────────────────────────────────

    async def _request(
        self,
        method: str,
        collection: str,
        *,
        operation: str,
        params: list[tuple[str, str]],
        headers: dict[str, str] | None = None,
        json: Any = None,
    ) -> httpx.Response:
        url = f"{self._rest_url}/{collection}"
        client = await self._get_client()
        should_close = self._http_client is None

        logger.debug("%s %s %s", method, collection, params)
        try:
            return await client.request(
                method,
                url,
                params=params,
                headers=self._get_headers(headers),
                json=json,
            )
        except httpx.HTTPError as exc:
            logger.warning("%s on '%s' could not reach the data store: %s", operation, collection, exc)
            raise RemoteOperationFailedError(operation, collection, 0, str(exc)) from exc
        finally:
            if should_close:
                await client.aclose()

    @staticmethod
    def _raise_remote_error(response: httpx.Response, operation: str, collection: str) -> None:
        """Raise a RemoteOperationFailedError from a PostgREST error response."""
        try:
            body = response.json()
            message = body.get("message") or body.get("details") or response.text
        except Exception:
            message = response.text or response.reason_phrase
        logger.warning(
            "%s on '%s' failed with %d: %s", operation, collection, response.status_code, message
        )
        raise RemoteOperationFailedError(operation, collection, response.status_code, message)

    @staticmethod
    def _parse_total(response: httpx.Response) -> int | None:
        """Extract the exact total from a ``Content-Range: 0-9/42`` header."""
        content_range = response.headers.get("content-range", "")
        _, _, total = content_range.partition("/")
        if total.isdigit():
            return int(total)
        return None

    # ── DataGateway ──────────────────────────────────────────────────

    async def select(
        self,
        collection: str,
        *,
        columns: str = "*",
        filters: Sequence[RowFilter] = (),
        order: Ordering | None = None,
        page: PageRequest | None = None,
    ) -> list[dict[str, Any]]:
        params = self._build_params(columns=columns, filters=filters, order=order, page=page)
        response = await self._request("GET", collection, operation="select", params=params)
        if response.status_code != 200:
            self._raise_remote_error(response, "select", collection)
        return response.json()

    async def count(self, collection: str, *, filters: Sequence[RowFilter] = ()) -> int:
        params = self._build_params(columns="*", filters=filters)
        response = await self._request(
            "HEAD",
            collection,
            operation="count",
            params=params,
            headers={"Prefer": "count=exact"},
        )
        if response.status_code not in (200, 206):
            self._raise_remote_error(response, "count", collection)

        total = self._parse_total(response)
        if total is None:
            raise RemoteOperationFailedError(
                "count", collection, response.status_code, "response carried no exact count"
            )
        return total

    async def select_one(
        self,
        collection: str,
        *,
        filters: Sequence[RowFilter],
        columns: str = "*",
    ) -> dict[str, Any]:
        params = self._build_params(columns=columns, filters=filters)
        response = await self._request(
            "GET",
            collection,
            operation="select_one",
            params=params,
            headers={"Accept": _OBJECT_MEDIA_TYPE},
        )
        if (response.status_code == 406 and self._is_empty_result(response)) or (
            response.status_code == 400 and self._is_invalid_key(response)
        ):
            raise EntityNotFoundError(collection, ",".join(str(f.value) for f in filters))
        if response.status_code != 200:
            self._raise_remote_error(response, "select_one", collection)
        return response.json()

    @staticmethod
    def _is_invalid_key(response: httpx.Response) -> bool:
        """A filter value the column type rejects matches no row."""
        try:
            return response.json().get("code") == _INVALID_KEY_CODE
        except Exception:
            return False

    @staticmethod
    def _is_empty_result(response: httpx.Response) -> bool:
        """PostgREST answers 406 for both zero and several rows; tell them apart."""
        try:
            details = response.json().get("details") or ""
        except Exception:
            return True
        return "0 rows" in details or not details

    async def insert(self, collection: str, record: dict[str, Any]) -> dict[str, Any]:
        payload = {k: self._jsonable(v) for k, v in record.items()}
        response = await self._request(
            "POST",
            collection,
            operation="insert",
            params=[],
            headers={"Prefer": "return=representation"},
            json=payload,
        )
        if response.status_code not in (200, 201):
            self._raise_remote_error(response, "insert", collection)

        body = response.json()
        if isinstance(body, list):
            return body[0] if body else payload
        return body

    async def delete(self, collection: str, *, filters: Sequence[RowFilter]) -> None:
        if not filters:
            raise ValueError(f"Refusing to delete from '{collection}' without a filter")
        params = self._build_params(filters=filters)
        response = await self._request("DELETE", collection, operation="delete", params=params)
        if response.status_code not in (200, 204):
            self._raise_remote_error(response, "delete", collection)

    @staticmethod
    def _jsonable(value: Any) -> Any:
        if isinstance(value, Enum):
            return value.value
        if isinstance(value, datetime):
            return value.isoformat()
        return value
