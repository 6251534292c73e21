"""Custom exceptions for the store engine."""
from typing import Optional


class StoreError(Exception):
    """Base exception for all store errors."""

    pass


class NotFoundError(StoreError):
    """Raised when a referenced customer, product or order does not exist."""

    def __init__(self, entity: str, entity_id):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found: {entity_id}")


class ValidationError(StoreError):
    """Raised for input the caller can correct and resubmit (stock, quantities, fields)."""

    def __init__(self, message: str, errors: Optional[list[str]] = None):
        self.errors = errors or [message]
        super().__init__(message)


class InvalidArgumentError(ValidationError):
    """Raised when a request argument cannot be parsed or is blank."""

    def __init__(self, argument: str, reason: str):
        self.argument = argument
        super().__init__(f"Invalid {argument}: {reason}")


class CatalogStoreError(StoreError):
    """Raised when the catalog store cannot be read or a write fails."""

    pass


class StockConsistencyError(CatalogStoreError):
    """Raised when stock reduction fails after the order was already persisted."""

    def __init__(self, order_id: int, cause: Exception):
        self.order_id = order_id
        super().__init__(
            f"Order {order_id} was persisted but stock reduction failed: {cause}. "
            "Stock for this order must be reconciled manually."
        )
