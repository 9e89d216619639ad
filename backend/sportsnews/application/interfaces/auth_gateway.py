"""Abstract interface for the hosted authentication service."""

from abc import ABC, abstractmethod
from collections.abc import Callable

from sportsnews.domain.entities import AuthChangeEvent, Session

AuthStateCallback = Callable[[AuthChangeEvent, Session | None], None]


class AuthSubscription(ABC):
    """Handle returned by ``on_auth_state_change``."""

    @abstractmethod
    def unsubscribe(self) -> None:
        ...


class AuthGateway(ABC):
    """Port for session issuance and auth-state notifications."""

    @abstractmethod
    async def get_session(self) -> Session | None:
        """Return the current session, or None when signed out."""
        ...

    @abstractmethod
    def on_auth_state_change(self, callback: AuthStateCallback) -> AuthSubscription:
        """Register ``callback`` for every subsequent auth-state change."""
        ...

    @abstractmethod
    async def sign_in_with_password(self, email: str, password: str) -> Session:
        ...

    @abstractmethod
    async def sign_out(self) -> None:
        ...
