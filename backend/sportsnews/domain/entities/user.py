"""Domain entities for authenticated users and their sessions."""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class User:
    """The authenticated user as seen by this system: an id and a contact email."""

    id: str
    email: str | None = None


@dataclass(frozen=True)
class Session:
    """An auth session issued by the hosted auth service."""

    access_token: str
    user: User
    refresh_token: str | None = None


class AuthChangeEvent(str, Enum):
    """Push notifications emitted by the auth client."""

    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
    TOKEN_REFRESHED = "TOKEN_REFRESHED"
