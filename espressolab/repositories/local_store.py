"""Entity-typed CRUD over the embedded SQL store, speaking attribute maps."""
from __future__ import annotations

import enum
import logging
import threading
from pathlib import Path
from typing import Any, Mapping, Optional

from sqlalchemy import delete, inspect as sa_inspect, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from espressolab.core.config import StoreBacking, get_settings
from espressolab.db import models
from espressolab.db.session import Base, create_session, create_store_engine
from espressolab.domain.entities import DataModel, EntityKind, name_of
from espressolab.domain.predicates import Predicate, UnknownAttributeError

from .base import AttributeMap
from .errors import (
    AttributeAssignmentError,
    CommitFailure,
    EntityNotFoundError,
    FatalInitializationError,
    QueryExecutionError,
    StoreNotReadyError,
)
from .records import EntityDescription, to_attribute_map, validate_attributes

logger = logging.getLogger(__name__)


class StoreState(enum.Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"
    CLOSED = "closed"


class LocalStore:
    """Owns the single session against the store and serializes every call on it.

    Usage::

        store = LocalStore()
        store.initialize(DataModel.ESPRESSO_LAB, backing=StoreBacking.MEMORY)
        store.save({"id": "1", "name": "Centro"}, EntityKind.STORE)
        store.fetch(EntityKind.STORE, attr("id") == "1")

    ``initialize`` failing raises FatalInitializationError and the caller is
    expected to halt. Other operations raise a StoreError subclass.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._state = StoreState.UNINITIALIZED
        self._engine: Optional[Engine] = None
        self._session: Optional[Session] = None
        self._entities: dict[str, EntityDescription] = {}
        self.data_model: Optional[DataModel] = None
        self.backing: Optional[StoreBacking] = None

    @property
    def state(self) -> StoreState:
        return self._state

    # -------------------------- lifecycle --------------------------
    def initialize(
        self,
        data_model: DataModel,
        *,
        backing: StoreBacking | None = None,
        data_dir: Path | str | None = None,
    ) -> None:
        """Load ``data_model`` and open the session; Uninitialized -> Ready.

        ``backing`` defaults to the configured ESPRESSOLAB_STORE_BACKING, which
        itself defaults to memory: nothing survives a restart unless durable
        backing is chosen explicitly.
        """
        with self._lock:
            if self._state is not StoreState.UNINITIALIZED:
                raise StoreNotReadyError(f"store is {self._state.value}; initialize may only run once")
            if backing is None:
                backing = get_settings().store_backing
            declared = models.MODELS.get(data_model, ())
            engine = None
            try:
                engine = create_store_engine(data_model, backing, data_dir=data_dir)
                tables = [model.__table__ for model in declared]
                Base.metadata.create_all(bind=engine, tables=tables)
                _check_tables(engine, tables)
                session = create_session(engine)
            except (SQLAlchemyError, OSError, _IncompatibleStore) as exc:
                if engine is not None:
                    engine.dispose()
                logger.error("Unable to load data model %s (%s): %s", data_model.file, backing.value, exc)
                raise FatalInitializationError(
                    f"unable to load data model {data_model.file!r} ({backing.value}): {exc}"
                ) from exc

            self._engine = engine
            self._session = session
            self._entities = {}
            for model in declared:
                description = EntityDescription.from_model(model)
                self._entities[description.name] = description
            self.data_model = data_model
            self.backing = backing
            self._state = StoreState.READY
            logger.info(
                "Store ready: data model %s, %s backing, entities %s",
                data_model.file,
                backing.value,
                sorted(self._entities),
            )

    def close(self) -> None:
        with self._lock:
            if self._session is not None:
                self._session.close()
            if self._engine is not None:
                self._engine.dispose()
            self._session = None
            self._engine = None
            self._state = StoreState.CLOSED

    def __enter__(self) -> "LocalStore":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _ready_session(self) -> Session:
        if self._state is not StoreState.READY or self._session is None:
            raise StoreNotReadyError(f"store is {self._state.value}; call initialize() first")
        return self._session

    def describe(self, entity: EntityKind, *, operation: str = "save") -> EntityDescription:
        """Schema description of ``entity`` in the active data model."""
        self._ready_session()
        name = name_of(entity)
        description = self._entities.get(name)
        if description is None:
            raise EntityNotFoundError(
                f"entity {name!r} not found in data model {self.data_model.file!r}",
                entity=name,
                operation=operation,
            )
        return description

    # -------------------------- queries --------------------------
    def _query_description(self, entity: EntityKind, operation: str) -> EntityDescription:
        try:
            return self.describe(entity, operation=operation)
        except EntityNotFoundError as exc:
            raise QueryExecutionError(exc.detail, entity=exc.entity, operation=operation) from exc

    def _fetch_records(
        self,
        session: Session,
        description: EntityDescription,
        predicate: Optional[Predicate],
        operation: str,
    ) -> list[Any]:
        stmt = select(description.model)
        try:
            if predicate is not None:
                stmt = stmt.where(predicate.to_clause(description.columns))
        except (UnknownAttributeError, TypeError, SQLAlchemyError) as exc:
            logger.warning("%s %s: bad predicate %r: %s", operation, description.name, predicate, exc)
            raise QueryExecutionError(
                f"cannot build predicate {predicate!r}: {exc}",
                entity=description.name,
                operation=operation,
            ) from exc
        try:
            return list(session.execute(stmt).scalars().all())
        except SQLAlchemyError as exc:
            session.rollback()
            logger.warning("%s %s failed: %s", operation, description.name, exc)
            raise QueryExecutionError(str(exc), entity=description.name, operation=operation) from exc

    def fetch(self, entity: EntityKind, predicate: Optional[Predicate] = None) -> list[AttributeMap]:
        """Return every record of ``entity`` matching ``predicate`` (all when None).

        Order is whatever the engine returns.
        """
        with self._lock:
            session = self._ready_session()
            description = self._query_description(entity, "fetch")
            records = self._fetch_records(session, description, predicate, "fetch")
            logger.debug("fetch %s where %r: %d record(s)", description.name, predicate, len(records))
            return [to_attribute_map(record, description) for record in records]

    # -------------------------- writes --------------------------
    def _commit(self, session: Session, description: EntityDescription, operation: str) -> None:
        try:
            session.commit()
        except (SQLAlchemyError, ValueError) as exc:
            session.rollback()
            logger.warning("%s %s: commit failed: %s", operation, description.name, exc)
            raise CommitFailure(str(exc), entity=description.name, operation=operation) from exc

    def save(self, item: Mapping[str, Any], entity: EntityKind) -> None:
        """Insert one record built from ``item``; all or nothing."""
        with self._lock:
            session = self._ready_session()
            description = self.describe(entity, operation="save")
            try:
                validate_attributes(item, description)
            except AttributeAssignmentError:
                logger.warning("save %s rejected: %r", description.name, dict(item))
                raise
            record = description.model()
            for key, value in item.items():
                setattr(record, key, value)
            session.add(record)
            self._commit(session, description, "save")
            logger.debug("save %s: %r", description.name, dict(item))

    def delete(self, predicate: Predicate, entity: EntityKind) -> None:
        """Delete every record of ``entity`` matching ``predicate``.

        No match is a successful no-op. All deletions commit together.
        """
        with self._lock:
            session = self._ready_session()
            description = self._query_description(entity, "delete")
            records = self._fetch_records(session, description, predicate, "delete")
            for record in records:
                session.delete(record)
            self._commit(session, description, "delete")
            logger.debug("delete %s where %r: %d record(s)", description.name, predicate, len(records))

    def delete_all(self, entity: EntityKind) -> None:
        """Delete every record of ``entity`` with one bulk statement, loading nothing."""
        with self._lock:
            session = self._ready_session()
            description = self._query_description(entity, "delete_all")
            stmt = delete(description.model).execution_options(synchronize_session=False)
            try:
                result = session.execute(stmt)
            except SQLAlchemyError as exc:
                session.rollback()
                logger.warning("delete_all %s failed: %s", description.name, exc)
                raise QueryExecutionError(str(exc), entity=description.name, operation="delete_all") from exc
            self._commit(session, description, "delete_all")
            logger.debug("delete_all %s: %s row(s)", description.name, result.rowcount)


class _IncompatibleStore(Exception):
    pass


def _check_tables(engine: Engine, tables) -> None:
    """Existing tables must carry every declared column; there is no migration."""
    inspector = sa_inspect(engine)
    for table in tables:
        existing = {column["name"] for column in inspector.get_columns(table.name)}
        missing = sorted(column.name for column in table.columns if column.name not in existing)
        if missing:
            raise _IncompatibleStore(f"table {table.name!r} lacks column(s) {', '.join(missing)}")
