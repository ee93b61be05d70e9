"""Domain exceptions raised by the service layer.

Routers translate these into HTTP responses; services never raise
``HTTPException`` themselves.
"""
from typing import Optional


class CafeError(Exception):
    """Base class for all domain errors."""


class NotFoundError(CafeError):
    """A referenced record does not exist."""


class ValidationError(CafeError):
    """A request is well-formed but violates a business rule."""


class ConflictError(CafeError):
    """A request conflicts with existing state."""


class PersistenceError(CafeError):
    """The storage layer failed to write or read data."""


class MenuItemNotFoundError(NotFoundError):
    def __init__(self, menu_item_id: int):
        self.menu_item_id = menu_item_id
        super().__init__(f"Menu item with id {menu_item_id} not found")


class CategoryNotFoundError(NotFoundError):
    def __init__(self, category_id: int):
        self.category_id = category_id
        super().__init__(f"Menu category with id {category_id} not found")


class OrderNotFoundError(NotFoundError):
    def __init__(self, order_id: int):
        self.order_id = order_id
        super().__init__(f"Order with id {order_id} not found")


class PaymentNotFoundError(NotFoundError):
    def __init__(self, payment_id: int):
        self.payment_id = payment_id
        super().__init__(f"Payment with id {payment_id} not found")


class UserNotFoundError(NotFoundError):
    def __init__(self, user_id: int):
        self.user_id = user_id
        super().__init__(f"User with id {user_id} not found")


class MenuItemUnavailableError(ValidationError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f'Menu item "{name}" is not available')


class ExtraShotLimitExceededError(ValidationError):
    def __init__(self, name: str, max_extra_shots: int):
        self.name = name
        self.max_extra_shots = max_extra_shots
        super().__init__(
            f'Maximum {max_extra_shots} extra shots allowed for "{name}"'
        )


class PaymentAmountMismatchError(ValidationError):
    def __init__(self, expected, received):
        self.expected = expected
        self.received = received
        super().__init__(
            f"Payment amount {received} does not match order total {expected}"
        )


class DuplicateRecordError(ConflictError):
    """A record with the same unique key already exists."""


class InvalidStatusTransitionError(ConflictError):
    def __init__(self, current: str, requested: str):
        self.current = current
        self.requested = requested
        super().__init__(f"Cannot change order status from {current} to {requested}")


class OrderNotPayableError(ConflictError):
    def __init__(self, order_number: str, status: str):
        self.order_number = order_number
        self.status = status
        super().__init__(f"Order {order_number} is {status} and cannot be paid")


class DuplicatePaymentError(ConflictError):
    def __init__(self, order_number: str, payment_status: str):
        self.order_number = order_number
        self.payment_status = payment_status
        super().__init__(
            f"Order {order_number} already has a {payment_status} payment"
        )


class OrderNumberConflictError(PersistenceError):
    def __init__(self, order_number: Optional[str] = None):
        self.order_number = order_number
        super().__init__(f"Order number {order_number} is already in use")
