"""
Domain errors raised by the service layer.
Each carries the HTTP status it maps to; main.py turns them into JSON `{error}` bodies.
"""

from typing import Any


class AppError(Exception):
    """Base for locally recoverable errors reported to the caller."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.message}


class ValidationError(AppError):
    """Bad input shape or range (user-correctable)."""


class InvalidQuantityError(ValidationError):
    def __init__(self, quantity: int):
        super().__init__("Invalid quantity specified.")
        self.quantity = quantity


class NotFoundError(AppError):
    """Listing or cart line missing; usually stale page state."""

    status_code = 404

    def __init__(self, resource: str, message: str | None = None):
        super().__init__(message or f"{resource.capitalize()} not found.")
        self.resource = resource


class InsufficientStockError(AppError):
    """Not enough stock; `available` lets the UI suggest the correct maximum."""

    def __init__(self, available: int, message: str | None = None):
        super().__init__(message or f"Only {available} items available.")
        self.available = available

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.message, "available": self.available}


class ForbiddenError(AppError):
    """Authenticated, but not allowed to touch this resource."""

    status_code = 403


class ConflictError(AppError):
    status_code = 409


class ConsistencyError(ConflictError):
    """A two-step stock/cart mutation could not complete; the caller should refresh."""

    def __init__(self, message: str = "Some items in your cart changed. Please refresh and try again."):
        super().__init__(message)
