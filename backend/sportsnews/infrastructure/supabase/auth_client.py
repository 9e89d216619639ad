"""Supabase auth client — implements the AuthGateway interface over GoTrue.

Holds the current session in memory and pushes auth-state change events
to registered listeners, the way the hosted service's browser SDK does.
"""

import logging
from typing import Any

import httpx

from sportsnews.application.interfaces.auth_gateway import (
    AuthGateway,
    AuthStateCallback,
    AuthSubscription,
)
from sportsnews.domain.entities import AuthChangeEvent, Session, User
from sportsnews.domain.exceptions import RemoteOperationFailedError, UnauthenticatedError

logger = logging.getLogger(__name__)

_COLLECTION = "auth"


class _Subscription(AuthSubscription):
    def __init__(self, listeners: list[AuthStateCallback], callback: AuthStateCallback):
        self._listeners = listeners
        self._callback = callback

    def unsubscribe(self) -> None:
        if self._callback in self._listeners:
            self._listeners.remove(self._callback)


class SupabaseAuthClient(AuthGateway):
    """Infrastructure adapter — connects to the Supabase auth API (``/auth/v1``)."""

    def __init__(
        self,
        auth_url: str,
        api_key: str,
        session: Session | None = None,
        access_token: str | None = None,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 15.0,
    ):
        self._auth_url = auth_url.rstrip("/")
        self._api_key = api_key
        self._session = session
        self._access_token = access_token or (session.access_token if session else None)
        self._http_client = http_client
        self._timeout = timeout
        self._listeners: list[AuthStateCallback] = []

    @property
    def access_token(self) -> str | None:
        return self._access_token

    def _get_headers(self, token: str | None = None) -> dict[str, str]:
        headers = {"apikey": self._api_key, "Content-Type": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def _get_client(self) -> httpx.AsyncClient:
        """Return the injected client or create a new one."""
        if self._http_client is not None:
            return self._http_client
        return httpx.AsyncClient(timeout=self._timeout)

    async def _request(
        self,
        method: str,
        path: str,
        *,
        operation: str,
        token: str | None = None,
        params: dict[str, str] | None = None,
        json: Any = None,
    ) -> httpx.Response:
        client = await self._get_client()
        should_close = self._http_client is None
        try:
            return await client.request(
                method,
                f"{self._auth_url}/{path}",
                params=params,
                headers=self._get_headers(token),
                json=json,
            )
        except httpx.HTTPError as exc:
            logger.warning("Auth %s could not reach the auth service: %s", operation, exc)
            raise RemoteOperationFailedError(operation, _COLLECTION, 0, str(exc)) from exc
        finally:
            if should_close:
                await client.aclose()

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            body = response.json()
        except Exception:
            return response.text or response.reason_phrase
        return (
            body.get("error_description")
            or body.get("msg")
            or body.get("message")
            or body.get("error")
            or response.text
        )

    @staticmethod
    def _parse_user(data: dict[str, Any]) -> User:
        return User(id=str(data["id"]), email=data.get("email"))

    # ── Listeners ────────────────────────────────────────────────────

    def on_auth_state_change(self, callback: AuthStateCallback) -> AuthSubscription:
        self._listeners.append(callback)
        return _Subscription(self._listeners, callback)

    def _emit(self, event: AuthChangeEvent, session: Session | None) -> None:
        logger.debug("Auth state change: %s", event.value)
        for callback in list(self._listeners):
            try:
                callback(event, session)
            except Exception:
                logger.exception("Auth state listener raised on %s", event.value)

    # ── AuthGateway ──────────────────────────────────────────────────

    async def get_session(self) -> Session | None:
        """Resolve the held access token to a session; None when there is none."""
        if not self._access_token:
            return None

        response = await self._request(
            "GET", "user", operation="get_session", token=self._access_token
        )
        if response.status_code in (401, 403):
            return None
        if response.status_code != 200:
            raise RemoteOperationFailedError(
                "get_session", _COLLECTION, response.status_code, self._error_message(response)
            )

        user = self._parse_user(response.json())
        refresh_token = self._session.refresh_token if self._session else None
        self._session = Session(
            access_token=self._access_token, user=user, refresh_token=refresh_token
        )
        return self._session

    async def sign_in_with_password(self, email: str, password: str) -> Session:
        response = await self._request(
            "POST",
            "token",
            operation="sign_in",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
        )
        if response.status_code in (400, 401):
            raise UnauthenticatedError("sign in", self._error_message(response))
        if response.status_code != 200:
            raise RemoteOperationFailedError(
                "sign_in", _COLLECTION, response.status_code, self._error_message(response)
            )

        body = response.json()
        session = Session(
            access_token=body["access_token"],
            refresh_token=body.get("refresh_token"),
            user=self._parse_user(body["user"]),
        )
        self._session = session
        self._access_token = session.access_token
        self._emit(AuthChangeEvent.SIGNED_IN, session)
        return session

    def set_session(self, session: Session) -> None:
        """Adopt a session obtained elsewhere (e.g. a refreshed token)."""
        event = AuthChangeEvent.SIGNED_IN if self._session is None else AuthChangeEvent.TOKEN_REFRESHED
        self._session = session
        self._access_token = session.access_token
        self._emit(event, session)

    async def sign_out(self) -> None:
        if self._access_token:
            response = await self._request(
                "POST", "logout", operation="sign_out", token=self._access_token
            )
            # 401/404: the token is already invalid server-side, so still signed out.
            if response.status_code not in (200, 204, 401, 404):
                raise RemoteOperationFailedError(
                    "sign_out", _COLLECTION, response.status_code, self._error_message(response)
                )

        self._session = None
        self._access_token = None
        self._emit(AuthChangeEvent.SIGNED_OUT, None)
