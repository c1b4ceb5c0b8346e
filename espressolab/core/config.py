"""
Configuration helpers for the EspressoLab store.

Settings are read once from environment variables and cached; tests that
change the environment must call ``get_settings.cache_clear()``.
"""

from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from pathlib import Path
import os


class StoreBacking(str, Enum):
    """Where the store keeps its records.

    MEMORY is the default: every write lands in a private in-memory database
    and nothing survives a process restart. DURABLE writes to a SQLite file
    under ``data_dir``.
    """

    MEMORY = "memory"
    DURABLE = "durable"


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    store_backing: StoreBacking
    data_dir: Path
    sql_echo: bool
    log_level: str


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _bool(value: str | None, default: bool = False) -> bool:
        if value is None:
            return default
        return value.strip().lower() in {"1", "true", "yes", "on"}

    def _backing(value: str | None) -> StoreBacking:
        try:
            return StoreBacking((value or "").strip().lower())
        except ValueError:
            return StoreBacking.MEMORY

    return Settings(
        store_backing=_backing(os.getenv("ESPRESSOLAB_STORE_BACKING")),
        data_dir=Path(os.getenv("ESPRESSOLAB_DATA_DIR") or "data"),
        sql_echo=_bool(os.getenv("ESPRESSOLAB_SQL_ECHO"), False),
        log_level=(os.getenv("ESPRESSOLAB_LOG_LEVEL") or "INFO").upper(),
    )
