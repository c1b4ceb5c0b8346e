"""
Conversion between ORM records and attribute maps.

An entity's declared attributes are its mapped columns, minus columns flagged
``info={"internal": True}`` (engine-chosen identifiers). Attribute maps always
follow that declared shape, whatever the record happens to have loaded.

Relationships are not declared attributes: they never appear in an attribute
map and cannot be written through one. A related record is reachable through
its foreign-key column, which is an ordinary declared attribute.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Mapping, Optional

from sqlalchemy import inspect as sa_inspect

from .errors import AttributeAssignmentError

_NUMERIC = (int, float, Decimal)


@dataclass(frozen=True)
class AttributeDescription:
    name: str
    python_type: Optional[type]
    nullable: bool = True


@dataclass(frozen=True)
class EntityDescription:
    """Schema of one entity as declared by its ORM model."""

    name: str
    model: type
    attributes: Mapping[str, AttributeDescription] = field(default_factory=dict)

    @classmethod
    def from_model(cls, model: type) -> "EntityDescription":
        mapper = sa_inspect(model)
        attributes: dict[str, AttributeDescription] = {}
        for prop in mapper.column_attrs:
            column = prop.columns[0]
            if column.info.get("internal"):
                continue
            attributes[prop.key] = AttributeDescription(
                name=prop.key,
                python_type=_python_type(column.type),
                nullable=bool(column.nullable),
            )
        return cls(name=mapper.local_table.name, model=model, attributes=attributes)

    @property
    def columns(self) -> dict[str, Any]:
        """Declared attribute name -> ORM column, for compiling predicates."""
        return {name: getattr(self.model, name) for name in self.attributes}


def _python_type(column_type) -> Optional[type]:
    try:
        return column_type.python_type
    except NotImplementedError:
        return None


def _value_fits(expected: Optional[type], value: Any) -> bool:
    if value is None or expected is None:
        return True
    if isinstance(value, bool):
        return issubclass(expected, bool)
    if expected in _NUMERIC:
        if expected is int:
            return isinstance(value, int)
        return isinstance(value, _NUMERIC)
    if expected is date and isinstance(value, datetime):
        return False
    return isinstance(value, expected)


def validate_attributes(item: Mapping[str, Any], description: EntityDescription, *, operation: str = "save") -> None:
    """Reject keys the entity does not declare and values of the wrong type."""
    for key, value in item.items():
        attribute = description.attributes.get(key)
        if attribute is None:
            raise AttributeAssignmentError(
                f"attribute {key!r} is not declared by entity {description.name!r}",
                attribute=key,
                entity=description.name,
                operation=operation,
            )
        if not _value_fits(attribute.python_type, value):
            raise AttributeAssignmentError(
                f"value {value!r} for attribute {key!r} is not a {attribute.python_type.__name__}",
                attribute=key,
                entity=description.name,
                operation=operation,
            )
        if isinstance(value, str) and not _encodes(value):
            raise AttributeAssignmentError(
                f"value for attribute {key!r} is not valid unicode text",
                attribute=key,
                entity=description.name,
                operation=operation,
            )


def _encodes(text: str) -> bool:
    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def to_attribute_map(record: Any, description: EntityDescription) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for name in description.attributes:
        result[name] = getattr(record, name)
    return result
