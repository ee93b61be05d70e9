"""Payment service."""
import logging
from decimal import Decimal
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from cafe.core.enums import PaymentMethod, PaymentStatus
from cafe.core.errors import (
    DuplicatePaymentError,
    OrderNotFoundError,
    OrderNotPayableError,
    PaymentAmountMismatchError,
    PaymentNotFoundError,
)
from cafe.db.models import Payment
from cafe.services.ordering.pricing import to_money
from cafe.services.ordering.status import is_terminal
from cafe.services.payments.gateway import PaymentGateway
from cafe.services.persistence.orders import OrderPersistenceService
from cafe.services.persistence.payments import PaymentPersistenceService

logger = logging.getLogger(__name__)

# A payment in one of these states blocks another payment for the same order
OPEN_PAYMENT_STATUSES = frozenset(
    {PaymentStatus.PENDING, PaymentStatus.PROCESSING, PaymentStatus.COMPLETED}
)


class PaymentService:
    """Records payments for orders through a payment gateway."""

    def __init__(self, db: AsyncSession, gateway: PaymentGateway):
        self.gateway = gateway
        self.order_persistence = OrderPersistenceService(db)
        self.payment_persistence = PaymentPersistenceService(db)

    async def create_payment(
        self,
        order_id: int,
        amount: Decimal,
        payment_method: PaymentMethod,
        transaction_id: Optional[str] = None,
    ) -> Payment:
        """
        Authorize and record a payment for an order.

        The order must not be completed or cancelled, and must not already have
        an open or completed payment. The amount must equal the order total.
        A payment the gateway marks completed confirms a pending order.
        """
        order = await self.order_persistence.get_order_by_id(order_id)
        if not order:
            raise OrderNotFoundError(order_id)

        if is_terminal(order.status):
            raise OrderNotPayableError(order.order_number, order.status)

        for existing in await self.payment_persistence.list_payments_for_order(order_id):
            if PaymentStatus(existing.payment_status) in OPEN_PAYMENT_STATUSES:
                raise DuplicatePaymentError(order.order_number, existing.payment_status)

        amount = to_money(amount)
        if amount != to_money(order.total_amount):
            raise PaymentAmountMismatchError(to_money(order.total_amount), amount)

        result = await self.gateway.authorize(
            payment_method, amount, order.order_number, transaction_id=transaction_id
        )
        logger.info(
            f"[PAYMENTS] Gateway returned {result.status.value} for order "
            f"{order.order_number} ({PaymentMethod(payment_method).value}, {amount})"
        )

        payment = await self.payment_persistence.create_payment(
            order_id=order_id,
            amount=amount,
            payment_method=payment_method,
            payment_status=result.status,
            transaction_id=result.transaction_id,
            payment_gateway_response=result.raw_response,
        )

        if result.status == PaymentStatus.COMPLETED:
            await self.order_persistence.confirm_order(order_id)
        return payment

    async def update_payment_status(
        self,
        payment_id: int,
        payment_status: PaymentStatus,
        transaction_id: Optional[str] = None,
        payment_gateway_response: Optional[str] = None,
    ) -> Payment:
        """Apply a status update, e.g. from a gateway callback."""
        payment = await self.payment_persistence.update_payment_status(
            payment_id,
            payment_status,
            transaction_id=transaction_id,
            payment_gateway_response=payment_gateway_response,
        )
        if not payment:
            raise PaymentNotFoundError(payment_id)

        logger.info(f"[PAYMENTS] Payment {payment.id} is now {payment.payment_status}")
        if PaymentStatus(payment_status) == PaymentStatus.COMPLETED:
            await self.order_persistence.confirm_order(payment.order_id)
        return payment
