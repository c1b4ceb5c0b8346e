"""SQLAlchemy models of the EspressoLab data model."""
from __future__ import annotations

from sqlalchemy import Column, Integer, String

from espressolab.domain.entities import DataModel, EntityKind, name_of

from .session import Base


class StoreRecord(Base):
    __tablename__ = name_of(EntityKind.STORE)

    # engine-chosen identifier, not a declared attribute
    pk = Column(Integer, primary_key=True, autoincrement=True, info={"internal": True})
    id = Column(String(64), nullable=True)
    name = Column(String(255), nullable=True)


MODELS: dict[DataModel, tuple[type, ...]] = {
    DataModel.ESPRESSO_LAB: (StoreRecord,),
}
