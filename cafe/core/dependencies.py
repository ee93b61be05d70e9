"""FastAPI dependencies."""
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from cafe.db.database import get_db
from cafe.services.menu.repository import MenuRepository
from cafe.services.ordering.service import OrderService
from cafe.services.payments.gateway import PaymentGateway, StubPaymentGateway
from cafe.services.payments.service import PaymentService
from cafe.services.persistence.orders import OrderPersistenceService


def get_menu_repository(db: AsyncSession = Depends(get_db)) -> MenuRepository:
    """Get menu repository instance."""
    return MenuRepository(db)


def get_order_persistence(db: AsyncSession = Depends(get_db)) -> OrderPersistenceService:
    return OrderPersistenceService(db)


def get_order_service(
    menu_repository: MenuRepository = Depends(get_menu_repository),
    order_persistence: OrderPersistenceService = Depends(get_order_persistence),
) -> OrderService:
    """Get order creation service."""
    return OrderService(menu_repository, order_persistence)


def get_payment_gateway() -> PaymentGateway:
    """Get the configured payment gateway."""
    return StubPaymentGateway()


def get_payment_service(
    db: AsyncSession = Depends(get_db),
    gateway: PaymentGateway = Depends(get_payment_gateway),
) -> PaymentService:
    return PaymentService(db, gateway)
