"""Custom exceptions for the sales tracker."""
from typing import Optional


class SalesTrackerError(Exception):
    """Base exception for all sales tracker errors."""

    pass


class ValidationError(SalesTrackerError):
    """Raised when input to a mutation is malformed.

    Raised before any store call is attempted.
    """

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        super().__init__(message)


class NotFoundError(SalesTrackerError):
    """Raised when a referenced order or item does not exist."""

    def __init__(self, entity: str, entity_id: int):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} with ID {entity_id} not found.")


class InsufficientStockError(SalesTrackerError):
    """Raised when a manual stock removal asks for more than is on hand."""

    def __init__(self, item_id: int, requested: int, available: int):
        self.item_id = item_id
        self.requested = requested
        self.available = available
        super().__init__(
            f"Cannot remove {requested} units. Current inventory: {available}"
        )
