"""Response models shared by the API routers."""
from datetime import datetime
from decimal import Decimal
from typing import Annotated, List, Optional

from pydantic import BaseModel, ConfigDict, PlainSerializer

# Currency stays a Decimal in Python and is rendered as a JSON number
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class OrderItemResponse(BaseModel):
    """Order item response model."""

    id: int
    menu_item_id: int
    quantity: int
    size: Optional[str] = None
    milk_type: Optional[str] = None
    extra_shots: int
    unit_price: Money
    total_price: Money
    special_instructions: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class OrderResponse(BaseModel):
    """Order response model."""

    id: int
    customer_id: Optional[int] = None
    order_number: str
    status: str
    total_amount: Money
    tax_amount: Money
    customer_name: Optional[str] = None
    customer_phone: Optional[str] = None
    special_instructions: Optional[str] = None
    estimated_ready_time: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
    items: List[OrderItemResponse] = []

    model_config = ConfigDict(from_attributes=True)
