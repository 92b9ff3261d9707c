"""Domain exceptions for the order reconciler.

This module contains domain-specific exceptions raised by the entities and
application services while reconciling orders against transfers.
"""


class DomainError(Exception):
    """Base exception for domain rule violations.

    Attributes:
        message: Human-readable description of the violation.
        code: Optional error code for programmatic handling.
    """

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code

    def __str__(self) -> str:
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message


class OrderNotFoundError(DomainError):
    """Raised when an order item points at an order that cannot be loaded."""

    def __init__(self, order_id: str) -> None:
        super().__init__(f"Order not found: {order_id}", code="ORDER_NOT_FOUND")
        self.order_id = order_id


class IdentityResolutionError(DomainError):
    """Raised when the display name of a new taker cannot be resolved."""

    def __init__(self, address: str, cause: Exception | None = None) -> None:
        detail = f": {cause}" if cause else ""
        super().__init__(f"Failed to resolve username for {address}{detail}", code="IDENTITY_RESOLUTION_FAILED")
        self.address = address
        self.cause = cause


class OrderItemNotFoundError(DomainError):
    """Raised when an order item record disappeared before it could be written."""

    def __init__(self, item_id: str) -> None:
        super().__init__(f"Order item not found: {item_id}", code="ORDER_ITEM_NOT_FOUND")
        self.item_id = item_id
