"""Error taxonomy of the local store."""
from __future__ import annotations


class StoreError(Exception):
    """Base class for recoverable store failures.

    Carries the schema name of the entity involved, the operation that failed
    and the underlying engine message.
    """

    def __init__(self, detail: str, *, entity: str | None = None, operation: str | None = None):
        super().__init__(detail)
        self.detail = detail
        self.entity = entity
        self.operation = operation

    def __str__(self) -> str:
        where = " ".join(part for part in (self.operation, self.entity) if part)
        return f"{where}: {self.detail}" if where else self.detail


class EntityNotFoundError(StoreError):
    """The entity kind has no schema in the active session."""


class AttributeAssignmentError(StoreError):
    """A write named an undeclared attribute or passed an incompatible value."""

    def __init__(self, detail: str, *, attribute: str, entity: str | None = None, operation: str | None = None):
        super().__init__(detail, entity=entity, operation=operation)
        self.attribute = attribute


class CommitFailure(StoreError):
    """The engine failed to persist a transaction."""


class QueryExecutionError(StoreError):
    """A fetch or delete query could not be built or executed."""


class FatalInitializationError(RuntimeError):
    """The engine could not load its schema/store.

    The application has no coherent state without a store; callers must halt.
    """


class StoreNotReadyError(RuntimeError):
    """A CRUD operation was called outside the Ready state."""
