"""Order persistence service."""
import logging
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import desc, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from cafe.core.enums import OrderStatus
from cafe.core.errors import (
    InvalidStatusTransitionError,
    OrderNotFoundError,
    OrderNumberConflictError,
    PersistenceError,
)
from cafe.db.models import Order, OrderItem, utcnow
from cafe.services.ordering.models import PricedLine
from cafe.services.ordering.status import INITIAL_STATUS, can_transition

logger = logging.getLogger(__name__)


class OrderPersistenceService:
    """Service for persisting order data."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_order(
        self,
        order_number: str,
        lines: List[PricedLine],
        total_amount: Decimal,
        tax_amount: Decimal,
        customer_id: Optional[int] = None,
        customer_name: Optional[str] = None,
        customer_phone: Optional[str] = None,
        special_instructions: Optional[str] = None,
    ) -> Order:
        """
        Insert an order and all of its items in a single transaction.

        Raises:
            OrderNumberConflictError: order_number is already taken
            PersistenceError: any other storage failure
        """
        order = Order(
            order_number=order_number,
            status=INITIAL_STATUS.value,
            total_amount=total_amount,
            tax_amount=tax_amount,
            customer_id=customer_id,
            customer_name=customer_name,
            customer_phone=customer_phone,
            special_instructions=special_instructions,
            estimated_ready_time=None,
        )
        order.items = [
            OrderItem(
                menu_item_id=line.menu_item_id,
                quantity=line.quantity,
                size=line.size.value if line.size else None,
                milk_type=line.milk_type.value if line.milk_type else None,
                extra_shots=line.extra_shots,
                unit_price=line.unit_price,
                total_price=line.total_price,
                special_instructions=line.special_instructions,
            )
            for line in lines
        ]
        self.db.add(order)

        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            if await self._order_number_exists(order_number):
                logger.warning(f"[ORDERS] Order number collision: {order_number}")
                raise OrderNumberConflictError(order_number) from e
            logger.error(f"[ORDERS] Integrity error creating order {order_number}: {e}")
            raise PersistenceError("Failed to create order") from e
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(
                f"[ORDERS] Database error creating order {order_number}: {type(e).__name__}: {e}",
                exc_info=True,
            )
            raise PersistenceError("Failed to create order") from e

        return await self.get_order_by_id(order.id)

    async def _commit(self, action: str) -> None:
        """Commit pending changes; storage failures become PersistenceError."""
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(
                f"[ORDERS] Database error while trying to {action}: {type(e).__name__}: {e}",
                exc_info=True,
            )
            raise PersistenceError(f"Failed to {action}") from e

    async def _order_number_exists(self, order_number: str) -> bool:
        result = await self.db.execute(
            select(Order.id).where(Order.order_number == order_number)
        )
        return result.scalar_one_or_none() is not None

    async def get_order_by_id(self, order_id: int) -> Optional[Order]:
        """Get order by ID with items."""
        result = await self.db.execute(
            select(Order)
            .where(Order.id == order_id)
            .options(selectinload(Order.items))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_order_by_number(self, order_number: str) -> Optional[Order]:
        result = await self.db.execute(
            select(Order)
            .where(Order.order_number == order_number)
            .options(selectinload(Order.items))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def list_orders(
        self,
        status: Optional[OrderStatus] = None,
        customer_id: Optional[int] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[Order]:
        """List orders newest first."""
        query = select(Order).options(selectinload(Order.items))
        if status is not None:
            query = query.where(Order.status == OrderStatus(status).value)
        if customer_id is not None:
            query = query.where(Order.customer_id == customer_id)
        query = query.order_by(desc(Order.created_at), desc(Order.id)).limit(limit).offset(offset)

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def update_order_status(
        self,
        order_id: int,
        status: OrderStatus,
        estimated_ready_time: Optional[datetime] = None,
    ) -> Order:
        """
        Move an order to a new status.

        Raises:
            OrderNotFoundError: no order with this id
            InvalidStatusTransitionError: the move breaks the lifecycle
            PersistenceError: the change could not be stored
        """
        order = await self.get_order_by_id(order_id)
        if not order:
            raise OrderNotFoundError(order_id)

        status = OrderStatus(status)
        if not can_transition(order.status, status):
            raise InvalidStatusTransitionError(order.status, status.value)

        order.status = status.value
        if estimated_ready_time is not None:
            order.estimated_ready_time = estimated_ready_time
        order.updated_at = utcnow()

        await self._commit(f"update order {order_id} status")
        logger.info(f"[ORDERS] Order {order.order_number} is now {order.status}")
        return await self.get_order_by_id(order_id)

    async def confirm_order(self, order_id: int) -> Optional[Order]:
        """Confirm an order if it is still pending."""
        order = await self.get_order_by_id(order_id)
        if order and order.status == OrderStatus.PENDING.value:
            order.status = OrderStatus.CONFIRMED.value
            order.updated_at = utcnow()
            await self._commit(f"confirm order {order_id}")
            order = await self.get_order_by_id(order_id)
        return order
