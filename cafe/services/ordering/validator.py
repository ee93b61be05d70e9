"""Order validation service."""
from typing import Optional

from cafe.core.errors import (
    ExtraShotLimitExceededError,
    MenuItemNotFoundError,
    MenuItemUnavailableError,
    UserNotFoundError,
)
from cafe.db.models import MenuItem
from cafe.services.menu.repository import MenuRepository
from cafe.services.ordering.models import CartLineSelection
from cafe.services.persistence.users import UserPersistenceService


class OrderValidator:
    """Service for validating an order request against the catalog and customers."""

    def __init__(
        self,
        menu_repository: MenuRepository,
        user_persistence: Optional[UserPersistenceService] = None,
    ):
        self.menu_repository = menu_repository
        self.user_persistence = user_persistence or UserPersistenceService(menu_repository.db)

    async def validate_customer(self, customer_id: Optional[int]) -> None:
        """Guest orders pass; a given customer id must belong to a user."""
        if customer_id is None:
            return
        if await self.user_persistence.get_user_by_id(customer_id) is None:
            raise UserNotFoundError(customer_id)

    async def validate_line(self, line: CartLineSelection) -> MenuItem:
        """
        Validate one cart line.

        Checks run in order and the first failure is raised: the item must
        exist, must be available, and must allow the requested extra shots.

        Returns:
            The menu item the line refers to
        """
        menu_item = await self.menu_repository.get_menu_item(line.menu_item_id)
        if menu_item is None:
            raise MenuItemNotFoundError(line.menu_item_id)

        if not menu_item.is_available:
            raise MenuItemUnavailableError(menu_item.name)

        if line.extra_shots > 0 and line.extra_shots > menu_item.max_extra_shots:
            raise ExtraShotLimitExceededError(menu_item.name, menu_item.max_extra_shots)

        return menu_item
