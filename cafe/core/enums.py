"""Enumerations shared by the API, services and database layers."""
from enum import Enum


class OrderStatus(str, Enum):
    """Order lifecycle states."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    PREPARING = "preparing"
    READY = "ready"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    def __str__(self) -> str:
        return self.value


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"
    REFUNDED = "refunded"

    def __str__(self) -> str:
        return self.value


class PaymentMethod(str, Enum):
    CREDIT_CARD = "credit_card"
    DEBIT_CARD = "debit_card"
    MOBILE_WALLET = "mobile_wallet"
    QR_CODE = "qr_code"
    CASH = "cash"

    def __str__(self) -> str:
        return self.value


class UserRole(str, Enum):
    CUSTOMER = "customer"
    STAFF = "staff"
    ADMIN = "admin"

    def __str__(self) -> str:
        return self.value


class MenuItemSize(str, Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"

    def __str__(self) -> str:
        return self.value


class MilkType(str, Enum):
    NONE = "none"
    WHOLE = "whole"
    SKIM = "skim"
    TWO_PERCENT = "2percent"
    OAT = "oat"
    ALMOND = "almond"
    SOY = "soy"
    COCONUT = "coconut"

    def __str__(self) -> str:
        return self.value
