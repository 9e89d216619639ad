"""Abstract interface for the hosted relational store (the remote data gateway)."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from sportsnews.domain.entities import Ordering, PageRequest, RowFilter


class DataGateway(ABC):
    """Port for record collections ("articles", "comments", "likes", "profiles").

    Every method issues exactly one remote request. Failures surface as
    ``RemoteOperationFailedError``; nothing is retried.
    """

    @abstractmethod
    async def select(
        self,
        collection: str,
        *,
        columns: str = "*",
        filters: Sequence[RowFilter] = (),
        order: Ordering | None = None,
        page: PageRequest | None = None,
    ) -> list[dict[str, Any]]:
        """Return all rows matching ``filters`` (bounded only when ``page`` is given)."""
        ...

    @abstractmethod
    async def count(self, collection: str, *, filters: Sequence[RowFilter] = ()) -> int:
        """Return the number of rows matching ``filters`` without fetching them."""
        ...

    @abstractmethod
    async def select_one(
        self,
        collection: str,
        *,
        filters: Sequence[RowFilter],
        columns: str = "*",
    ) -> dict[str, Any]:
        """Return exactly one row. Raises ``EntityNotFoundError`` when none matches."""
        ...

    @abstractmethod
    async def insert(self, collection: str, record: dict[str, Any]) -> dict[str, Any]:
        """Insert one record and return the stored row."""
        ...

    @abstractmethod
    async def delete(self, collection: str, *, filters: Sequence[RowFilter]) -> None:
        """Delete the rows matching ``filters``."""
        ...
