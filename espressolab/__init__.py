"""
EspressoLab local persistence.

Entity-typed CRUD over an embedded SQL store, exposing records as plain
attribute maps (``dict[str, Any]``) instead of ORM objects.
"""

from espressolab.domain.entities import DataModel, EntityKind, name_of
from espressolab.domain.predicates import Predicate, attr
from espressolab.repositories.local_store import LocalStore

__all__ = ["DataModel", "EntityKind", "LocalStore", "Predicate", "attr", "name_of"]
