"""Payment persistence service."""
import logging
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from cafe.core.enums import PaymentMethod, PaymentStatus
from cafe.core.errors import PersistenceError
from cafe.db.models import Payment, utcnow

logger = logging.getLogger(__name__)


class PaymentPersistenceService:
    """Service for persisting payment data."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_payment(
        self,
        order_id: int,
        amount: Decimal,
        payment_method: PaymentMethod,
        payment_status: PaymentStatus,
        transaction_id: Optional[str] = None,
        payment_gateway_response: Optional[str] = None,
    ) -> Payment:
        """Create a new payment record."""
        payment = Payment(
            order_id=order_id,
            amount=amount,
            payment_method=PaymentMethod(payment_method).value,
            payment_status=PaymentStatus(payment_status).value,
            transaction_id=transaction_id,
            payment_gateway_response=payment_gateway_response,
        )
        self.db.add(payment)
        await self._commit(f"record payment for order {order_id}")
        await self.db.refresh(payment)
        return payment

    async def _commit(self, action: str) -> None:
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(
                f"[PAYMENTS] Database error while trying to {action}: {type(e).__name__}: {e}",
                exc_info=True,
            )
            raise PersistenceError(f"Failed to {action}") from e

    async def get_payment_by_id(self, payment_id: int) -> Optional[Payment]:
        result = await self.db.execute(
            select(Payment).where(Payment.id == payment_id)
        )
        return result.scalar_one_or_none()

    async def list_payments_for_order(self, order_id: int) -> List[Payment]:
        result = await self.db.execute(
            select(Payment).where(Payment.order_id == order_id).order_by(Payment.id)
        )
        return list(result.scalars().all())

    async def update_payment_status(
        self,
        payment_id: int,
        payment_status: PaymentStatus,
        transaction_id: Optional[str] = None,
        payment_gateway_response: Optional[str] = None,
    ) -> Optional[Payment]:
        """Update payment status and, when given, gateway details."""
        payment = await self.get_payment_by_id(payment_id)
        if payment:
            payment.payment_status = PaymentStatus(payment_status).value
            if transaction_id is not None:
                payment.transaction_id = transaction_id
            if payment_gateway_response is not None:
                payment.payment_gateway_response = payment_gateway_response
            payment.updated_at = utcnow()
            await self._commit(f"update payment {payment_id}")
            await self.db.refresh(payment)
        return payment
