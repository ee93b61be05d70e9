"""Payment API endpoints."""
import logging
from datetime import datetime
from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field

from cafe.api.errors import to_http_exception
from cafe.api.schemas import Money
from cafe.core.dependencies import get_payment_service
from cafe.core.enums import PaymentMethod, PaymentStatus
from cafe.core.errors import CafeError
from cafe.services.payments.service import PaymentService

router = APIRouter()
logger = logging.getLogger(__name__)


class CreatePaymentRequest(BaseModel):
    """Payment creation request."""

    order_id: int
    amount: Decimal = Field(..., gt=0)
    payment_method: PaymentMethod
    transaction_id: Optional[str] = None


class UpdatePaymentStatusRequest(BaseModel):
    payment_status: PaymentStatus
    transaction_id: Optional[str] = None
    payment_gateway_response: Optional[str] = None


class PaymentResponse(BaseModel):
    """Payment response model."""

    id: int
    order_id: int
    amount: Money
    payment_method: str
    payment_status: str
    transaction_id: Optional[str] = None
    payment_gateway_response: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


@router.post("/api/payments", response_model=PaymentResponse, status_code=201)
async def create_payment(
    payment: CreatePaymentRequest,
    payment_service: PaymentService = Depends(get_payment_service),
):
    """Pay for an order."""
    logger.info(
        f"[PAYMENTS] Payment requested - order: {payment.order_id}, "
        f"method: {payment.payment_method.value}"
    )
    try:
        return await payment_service.create_payment(
            order_id=payment.order_id,
            amount=payment.amount,
            payment_method=payment.payment_method,
            transaction_id=payment.transaction_id,
        )
    except CafeError as e:
        logger.info(f"[PAYMENTS] Rejected - {type(e).__name__}: {e}")
        raise to_http_exception(e, "PAYMENTS")


@router.patch("/api/payments/{payment_id}/status", response_model=PaymentResponse)
async def update_payment_status(
    payment_id: int,
    update: UpdatePaymentStatusRequest,
    payment_service: PaymentService = Depends(get_payment_service),
):
    """Record a payment status change reported by the gateway."""
    try:
        return await payment_service.update_payment_status(
            payment_id,
            update.payment_status,
            transaction_id=update.transaction_id,
            payment_gateway_response=update.payment_gateway_response,
        )
    except CafeError as e:
        raise to_http_exception(e, "PAYMENTS")
