"""Order models."""
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from cafe.core.enums import MenuItemSize, MilkType, OrderStatus, PaymentMethod


class CartLineSelection(BaseModel):
    """One customer-chosen menu item with quantity and customizations."""

    menu_item_id: int
    quantity: int = Field(..., gt=0)
    size: Optional[MenuItemSize] = None
    milk_type: Optional[MilkType] = None
    extra_shots: int = Field(0, ge=0)
    special_instructions: Optional[str] = None


class CreateOrderInput(BaseModel):
    """Order placement request."""

    customer_name: Optional[str] = None
    customer_phone: Optional[str] = None
    customer_id: Optional[int] = None
    special_instructions: Optional[str] = None
    payment_method: PaymentMethod
    items: List[CartLineSelection] = Field(..., min_length=1)


class PricedLine(BaseModel):
    """A cart line after validation and pricing, ready to persist."""

    menu_item_id: int
    quantity: int
    size: Optional[MenuItemSize] = None
    milk_type: Optional[MilkType] = None
    extra_shots: int = 0
    unit_price: Decimal
    total_price: Decimal
    special_instructions: Optional[str] = None


class OrderTotals(BaseModel):
    """Aggregated money values for an order."""

    subtotal: Decimal
    tax_amount: Decimal
    total_amount: Decimal


class UpdateOrderStatusInput(BaseModel):
    status: OrderStatus
    estimated_ready_time: Optional[datetime] = None
