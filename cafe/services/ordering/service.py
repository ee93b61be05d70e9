"""Order pricing and creation service."""
import logging
from decimal import Decimal
from typing import Callable, List, Optional

from cafe.core.config import settings
from cafe.db.models import MenuItem, Order
from cafe.services.menu.repository import MenuRepository
from cafe.services.ordering.models import CartLineSelection, CreateOrderInput, PricedLine
from cafe.services.ordering.order_number import generate_order_number
from cafe.services.ordering.pricing import (
    calculate_line_total,
    calculate_order_totals,
    calculate_unit_price,
)
from cafe.services.ordering.validator import OrderValidator
from cafe.services.persistence.orders import OrderPersistenceService

logger = logging.getLogger(__name__)


class OrderService:
    """Turns a customer's cart into a priced, persisted order."""

    def __init__(
        self,
        menu_repository: MenuRepository,
        order_persistence: OrderPersistenceService,
        order_number_factory: Callable[[], str] = generate_order_number,
        tax_rate: Optional[Decimal] = None,
        extra_shot_price: Optional[Decimal] = None,
    ):
        self.menu_repository = menu_repository
        self.order_persistence = order_persistence
        self.validator = OrderValidator(menu_repository)
        self.order_number_factory = order_number_factory
        self.tax_rate = settings.tax_rate if tax_rate is None else tax_rate
        self.extra_shot_price = (
            settings.extra_shot_price if extra_shot_price is None else extra_shot_price
        )

    async def price_line(self, line: CartLineSelection, menu_item: MenuItem) -> PricedLine:
        """Price a validated cart line."""
        size_modifier = None
        if line.size and menu_item.has_size_options:
            size_modifier = await self.menu_repository.get_size_modifier(
                menu_item.id, line.size
            )

        unit_price = calculate_unit_price(
            menu_item.base_price,
            size_modifier=size_modifier,
            extra_shots=line.extra_shots,
            extra_shot_price=self.extra_shot_price,
        )

        return PricedLine(
            menu_item_id=line.menu_item_id,
            quantity=line.quantity,
            size=line.size,
            milk_type=line.milk_type,
            extra_shots=line.extra_shots,
            unit_price=unit_price,
            total_price=calculate_line_total(unit_price, line.quantity),
            special_instructions=line.special_instructions,
        )

    async def create_order(self, order_input: CreateOrderInput) -> Order:
        """
        Validate, price and persist an order.

        Every line is validated and priced before anything is written, so a
        failing line leaves no order behind.

        Raises:
            UserNotFoundError: customer_id does not belong to a user
            MenuItemNotFoundError: a line references a missing menu item
            MenuItemUnavailableError: a line references an unavailable item
            ExtraShotLimitExceededError: a line asks for too many extra shots
            PersistenceError: the order could not be stored
        """
        await self.validator.validate_customer(order_input.customer_id)

        priced_lines: List[PricedLine] = []
        for line in order_input.items:
            menu_item = await self.validator.validate_line(line)
            priced_lines.append(await self.price_line(line, menu_item))

        totals = calculate_order_totals(
            (line.total_price for line in priced_lines), tax_rate=self.tax_rate
        )
        order_number = self.order_number_factory()

        logger.info(
            f"[ORDERS] Creating order {order_number} - {len(priced_lines)} lines, "
            f"subtotal: {totals.subtotal}, tax: {totals.tax_amount}, "
            f"total: {totals.total_amount}, payment: {order_input.payment_method.value}"
        )

        return await self.order_persistence.create_order(
            order_number=order_number,
            lines=priced_lines,
            total_amount=totals.total_amount,
            tax_amount=totals.tax_amount,
            customer_id=order_input.customer_id,
            customer_name=order_input.customer_name,
            customer_phone=order_input.customer_phone,
            special_instructions=order_input.special_instructions,
        )
