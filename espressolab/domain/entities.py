"""Schema registry: data models and the entity kinds they declare."""
from __future__ import annotations

from enum import Enum


class DataModel(str, Enum):
    """Identifier of a schema bundle the engine loads."""

    ESPRESSO_LAB = "espressoLab"

    @property
    def file(self) -> str:
        """Bundle name, also used as the durable store file stem."""
        return _MODEL_FILES[self]


class EntityKind(str, Enum):
    """Closed set of record types addressable in the store."""

    STORE = "store"

    @property
    def schema_name(self) -> str:
        return _ENTITY_NAMES[self]


_MODEL_FILES = {
    DataModel.ESPRESSO_LAB: "EspressoLab",
}

_ENTITY_NAMES = {
    EntityKind.STORE: "Store",
}


def name_of(kind: EntityKind) -> str:
    """Return the schema name the engine uses for ``kind``."""
    return kind.schema_name
