"""Session state holder — "the current user, or none" for one view tree.

Owned explicitly by whoever mounts the views (one per HTTP request in the
API) and handed to dependents, never looked up globally.
"""

import asyncio
import logging
from collections.abc import Callable

from sportsnews.application.interfaces import AuthGateway, AuthSubscription
from sportsnews.domain.entities import AuthChangeEvent, Session, User
from sportsnews.domain.exceptions import RemoteOperationFailedError, UnauthenticatedError

logger = logging.getLogger(__name__)

UserListener = Callable[[User | None], None]


class SessionStateHolder:
    """Observable current-user value fed by the auth gateway.

    Lifecycle:
        holder.start()     # subscribe + kick off the initial session fetch
        await holder.ready()
        ...
        await holder.close()

    or ``async with SessionStateHolder(auth) as holder: ...``.

    Until the initial fetch resolves the holder reports "signed out". A
    failed fetch leaves it signed out until the next auth event; there is
    no retry.
    """

    def __init__(self, auth: AuthGateway) -> None:
        self._auth = auth
        self._session: Session | None = None
        self._subscription: AuthSubscription | None = None
        self._initial_fetch: asyncio.Task[None] | None = None
        self._event_seen = False
        self._closed = False
        self._listeners: list[UserListener] = []

    # ── State ────────────────────────────────────────────────────────

    @property
    def session(self) -> Session | None:
        return self._session

    @property
    def user(self) -> User | None:
        return self._session.user if self._session else None

    @property
    def is_authenticated(self) -> bool:
        return self._session is not None

    def require_user(self, action: str = "this action") -> User:
        user = self.user
        if user is None:
            raise UnauthenticatedError(action)
        return user

    def subscribe(self, listener: UserListener) -> Callable[[], None]:
        """Call ``listener`` whenever the held user changes. Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _replace(self, session: Session | None) -> None:
        previous = self.user
        self._session = session
        if self.user != previous:
            for listener in list(self._listeners):
                listener(self.user)

    # ── Lifecycle ────────────────────────────────────────────────────

    def start(self) -> None:
        """Subscribe to auth events and request the current session once (non-blocking)."""
        if self._subscription is not None or self._closed:
            return
        self._subscription = self._auth.on_auth_state_change(self._on_auth_change)
        self._initial_fetch = asyncio.create_task(self._fetch_initial_session())

    async def ready(self) -> None:
        """Wait for the initial session fetch to resolve (successfully or not)."""
        if self._initial_fetch is None or self._initial_fetch.cancelled():
            return
        await asyncio.shield(self._initial_fetch)

    async def close(self) -> None:
        """Unsubscribe and abandon any outstanding initial fetch."""
        self._closed = True
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None
        if self._initial_fetch is not None and not self._initial_fetch.done():
            self._initial_fetch.cancel()
            try:
                await self._initial_fetch
            except asyncio.CancelledError:
                pass
        self._listeners.clear()

    async def __aenter__(self) -> "SessionStateHolder":
        self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def _fetch_initial_session(self) -> None:
        try:
            session = await self._auth.get_session()
        except RemoteOperationFailedError as exc:
            logger.warning("Initial session fetch failed, staying signed out: %s", exc)
            return
        # An auth event that arrived meanwhile is newer than this answer.
        if self._closed or self._event_seen:
            return
        self._replace(session)

    def _on_auth_change(self, event: AuthChangeEvent, session: Session | None) -> None:
        if self._closed:
            return
        self._event_seen = True
        logger.debug("Session holder received %s", event.value)
        self._replace(session if event != AuthChangeEvent.SIGNED_OUT else None)

    # ── Actions ──────────────────────────────────────────────────────

    async def sign_in(self, email: str, password: str) -> User:
        session = await self._auth.sign_in_with_password(email, password)
        return session.user

    async def sign_out(self) -> None:
        await self._auth.sign_out()
