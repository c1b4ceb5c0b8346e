"""
Engine-agnostic record filters.

Callers build predicates from attribute names instead of ORM columns::

    (attr("id") == "1") | attr("name").startswith("Espresso")

A predicate is an immutable value. It is compiled against the columns of the
target entity each time a query runs, so the same predicate can be reused
across fetches and deletes.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping

from sqlalchemy import and_, not_, or_
from sqlalchemy.sql.elements import ColumnElement

Columns = Mapping[str, Any]


class UnknownAttributeError(KeyError):
    """Raised when a predicate names an attribute the entity does not declare."""

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"unknown attribute {self.name!r}"


class Predicate:
    """Boolean filter over the attributes of one entity."""

    def to_clause(self, columns: Columns) -> ColumnElement:
        raise NotImplementedError

    def __and__(self, other: "Predicate") -> "Predicate":
        return AllOf((self, other))

    def __or__(self, other: "Predicate") -> "Predicate":
        return AnyOf((self, other))

    def __invert__(self) -> "Predicate":
        return Not(self)


def _column(columns: Columns, name: str):
    try:
        return columns[name]
    except KeyError:
        raise UnknownAttributeError(name) from None


_OPERATORS: dict[str, Callable[[Any, Any], ColumnElement]] = {
    "==": lambda col, value: col.is_(None) if value is None else col == value,
    "!=": lambda col, value: col.is_not(None) if value is None else col != value,
    "<": lambda col, value: col < value,
    "<=": lambda col, value: col <= value,
    ">": lambda col, value: col > value,
    ">=": lambda col, value: col >= value,
    "in": lambda col, value: col.in_(value),
    "contains": lambda col, value: col.contains(value, autoescape=True),
    "startswith": lambda col, value: col.startswith(value, autoescape=True),
}


@dataclass(frozen=True, eq=False)
class Comparison(Predicate):
    name: str
    op: str
    value: Any

    def to_clause(self, columns: Columns) -> ColumnElement:
        return _OPERATORS[self.op](_column(columns, self.name), self.value)

    def __repr__(self) -> str:
        return f"{self.name} {self.op} {self.value!r}"


@dataclass(frozen=True, eq=False)
class AllOf(Predicate):
    parts: tuple[Predicate, ...]

    def to_clause(self, columns: Columns) -> ColumnElement:
        return and_(*(part.to_clause(columns) for part in self.parts))

    def __repr__(self) -> str:
        return "(" + " AND ".join(repr(part) for part in self.parts) + ")"


@dataclass(frozen=True, eq=False)
class AnyOf(Predicate):
    parts: tuple[Predicate, ...]

    def to_clause(self, columns: Columns) -> ColumnElement:
        return or_(*(part.to_clause(columns) for part in self.parts))

    def __repr__(self) -> str:
        return "(" + " OR ".join(repr(part) for part in self.parts) + ")"


@dataclass(frozen=True, eq=False)
class Not(Predicate):
    part: Predicate

    def to_clause(self, columns: Columns) -> ColumnElement:
        return not_(self.part.to_clause(columns))

    def __repr__(self) -> str:
        return f"NOT {self.part!r}"


@dataclass(frozen=True, eq=False)
class Attribute:
    """Reference to a named attribute; comparisons produce predicates."""

    name: str

    __hash__ = None  # type: ignore[assignment]

    def __eq__(self, value: Any) -> Predicate:  # type: ignore[override]
        return Comparison(self.name, "==", value)

    def __ne__(self, value: Any) -> Predicate:  # type: ignore[override]
        return Comparison(self.name, "!=", value)

    def __lt__(self, value: Any) -> Predicate:
        return Comparison(self.name, "<", value)

    def __le__(self, value: Any) -> Predicate:
        return Comparison(self.name, "<=", value)

    def __gt__(self, value: Any) -> Predicate:
        return Comparison(self.name, ">", value)

    def __ge__(self, value: Any) -> Predicate:
        return Comparison(self.name, ">=", value)

    def in_(self, values: Iterable[Any]) -> Predicate:
        return Comparison(self.name, "in", tuple(values))

    def contains(self, text: str) -> Predicate:
        return Comparison(self.name, "contains", text)

    def startswith(self, text: str) -> Predicate:
        return Comparison(self.name, "startswith", text)


def attr(name: str) -> Attribute:
    """Start a predicate on attribute ``name``."""
    return Attribute(name)
