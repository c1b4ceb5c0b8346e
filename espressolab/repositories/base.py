"""Interface every local database implementation provides."""
from __future__ import annotations

from typing import Any, Optional, Protocol, runtime_checkable

from espressolab.domain.entities import EntityKind
from espressolab.domain.predicates import Predicate

AttributeMap = dict[str, Any]


@runtime_checkable
class LocalDatabase(Protocol):
    """The four operations persistence callers depend on; records are attribute maps."""

    def fetch(self, entity: EntityKind, predicate: Optional[Predicate] = None) -> list[AttributeMap]:
        ...

    def save(self, item: AttributeMap, entity: EntityKind) -> None:
        ...

    def delete(self, predicate: Predicate, entity: EntityKind) -> None:
        ...

    def delete_all(self, entity: EntityKind) -> None:
        ...
