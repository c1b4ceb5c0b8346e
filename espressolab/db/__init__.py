"""Database helpers (engine/session export)."""

from .session import Base, create_store_engine, create_session, store_path

__all__ = ["Base", "create_store_engine", "create_session", "store_path"]
