"""Engine/session helpers for the embedded SQL backend."""
from __future__ import annotations

from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from espressolab.core.config import StoreBacking, get_settings
from espressolab.domain.entities import DataModel

Base = declarative_base()


def store_path(data_model: DataModel, data_dir: Path | str | None = None) -> Path:
    """Location of the durable store file for ``data_model``."""
    base = Path(data_dir) if data_dir is not None else get_settings().data_dir
    return base / f"{data_model.file}.sqlite"


def create_store_engine(
    data_model: DataModel,
    backing: StoreBacking,
    *,
    data_dir: Path | str | None = None,
    echo: bool | None = None,
) -> Engine:
    """Build the engine for ``data_model`` on the requested backing.

    The in-memory database lives on a single shared connection; a new
    connection would see an empty database.
    """
    if echo is None:
        echo = get_settings().sql_echo
    if backing is StoreBacking.MEMORY:
        return create_engine(
            "sqlite://",
            echo=echo,
            future=True,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    path = store_path(data_model, data_dir)
    path.parent.mkdir(parents=True, exist_ok=True)
    return create_engine(
        f"sqlite:///{path}",
        echo=echo,
        future=True,
        pool_pre_ping=True,
        connect_args={"check_same_thread": False},
    )


def create_session(engine: Engine) -> Session:
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)()
