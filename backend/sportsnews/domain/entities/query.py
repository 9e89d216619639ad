"""Domain vocabulary for reads against the hosted data store."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class RowFilter:
    """A single column predicate."""

    column: str
    value: Any
    operator: str = "eq"  # "eq" | "neq" | "gt" | "gte" | "lt" | "lte"


@dataclass(frozen=True)
class Ordering:
    column: str
    descending: bool = False


@dataclass(frozen=True)
class PageRequest:
    """Offset pagination applied at the gateway boundary. Absent means unbounded."""

    limit: int
    offset: int = 0
