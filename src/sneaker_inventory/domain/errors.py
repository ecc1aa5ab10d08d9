"""Error taxonomy for inventory operations."""

from uuid import UUID


class InventoryError(Exception):
    """Base class for errors raised by inventory services."""


class ValidationError(InventoryError):
    """Raised when a write is rejected before anything is persisted."""

    def __init__(self, message: str, fields: list[str] | None = None) -> None:
        super().__init__(message)
        self.fields = fields or []


class NotFoundError(InventoryError):
    """Raised when an operation targets a record that does not exist."""

    def __init__(self, record_id: UUID) -> None:
        super().__init__(f"Sneaker {record_id} not found")
        self.record_id = record_id


class PersistenceError(InventoryError):
    """Raised when a durable commit fails."""
