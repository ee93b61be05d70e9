"""Menu repository."""
import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from cafe.core.enums import MenuItemSize
from cafe.core.errors import (
    CategoryNotFoundError,
    DuplicateRecordError,
    MenuItemNotFoundError,
)
from cafe.db.models import MenuCategory, MenuItem, SizePricing, utcnow

logger = logging.getLogger(__name__)


class MenuRepository:
    """Repository for menu catalog operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # Lookups used by order pricing

    async def get_menu_item(self, menu_item_id: int) -> Optional[MenuItem]:
        """Get a menu item by id."""
        result = await self.db.execute(
            select(MenuItem).where(MenuItem.id == menu_item_id)
        )
        return result.scalar_one_or_none()

    async def get_size_modifier(
        self, menu_item_id: int, size: MenuItemSize
    ) -> Optional[Decimal]:
        """Get the price modifier configured for an item's size, if any."""
        result = await self.db.execute(
            select(SizePricing.price_modifier).where(
                SizePricing.menu_item_id == menu_item_id,
                SizePricing.size == MenuItemSize(size).value,
            )
        )
        return result.scalar_one_or_none()

    # Categories

    async def create_category(
        self,
        name: str,
        description: Optional[str] = None,
        sort_order: int = 0,
        is_active: bool = True,
    ) -> MenuCategory:
        """Create a menu category. (name, sort_order) must be unique."""
        existing = await self.db.execute(
            select(MenuCategory).where(
                MenuCategory.name == name,
                MenuCategory.sort_order == sort_order,
            )
        )
        if existing.scalar_one_or_none():
            raise DuplicateRecordError(
                f'Menu category with name "{name}" and sort order {sort_order} already exists'
            )

        category = MenuCategory(
            name=name,
            description=description,
            sort_order=sort_order,
            is_active=is_active,
        )
        self.db.add(category)
        await self.db.commit()
        await self.db.refresh(category)
        logger.info(f"[MENU] Created category {category.id} ({category.name})")
        return category

    async def get_category(self, category_id: int) -> Optional[MenuCategory]:
        result = await self.db.execute(
            select(MenuCategory).where(MenuCategory.id == category_id)
        )
        return result.scalar_one_or_none()

    async def list_categories(self, active_only: bool = True) -> List[MenuCategory]:
        """List categories ordered by sort order."""
        query = select(MenuCategory).order_by(MenuCategory.sort_order, MenuCategory.id)
        if active_only:
            query = query.where(MenuCategory.is_active.is_(True))
        result = await self.db.execute(query)
        return list(result.scalars().all())

    # Menu items

    async def create_menu_item(self, **fields: Any) -> MenuItem:
        """Create a menu item in an existing category."""
        category_id = fields["category_id"]
        if not await self.get_category(category_id):
            raise CategoryNotFoundError(category_id)

        item = MenuItem(**fields)
        self.db.add(item)
        await self.db.commit()
        await self.db.refresh(item)
        logger.info(f"[MENU] Created menu item {item.id} ({item.name})")
        return item

    async def list_menu_items(
        self,
        category_id: Optional[int] = None,
        is_available: Optional[bool] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> List[MenuItem]:
        """List menu items with optional filters, ordered by sort order."""
        query = select(MenuItem)
        if category_id is not None:
            query = query.where(MenuItem.category_id == category_id)
        if is_available is not None:
            query = query.where(MenuItem.is_available.is_(is_available))
        query = query.order_by(MenuItem.sort_order, MenuItem.id).limit(limit).offset(offset)

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def update_menu_item(
        self, menu_item_id: int, updates: Dict[str, Any]
    ) -> MenuItem:
        """Apply a partial update to a menu item."""
        item = await self.get_menu_item(menu_item_id)
        if not item:
            raise MenuItemNotFoundError(menu_item_id)

        for field, value in updates.items():
            setattr(item, field, value)
        item.updated_at = utcnow()

        await self.db.commit()
        await self.db.refresh(item)
        logger.info(
            f"[MENU] Updated menu item {item.id} - fields: {', '.join(sorted(updates)) or 'none'}"
        )
        return item

    # Size pricing

    async def create_size_pricing(
        self, menu_item_id: int, size: MenuItemSize, price_modifier: Decimal
    ) -> SizePricing:
        """Add a size modifier to a menu item. One row per (item, size)."""
        if not await self.get_menu_item(menu_item_id):
            raise MenuItemNotFoundError(menu_item_id)

        size = MenuItemSize(size)
        if await self.get_size_modifier(menu_item_id, size) is not None:
            raise DuplicateRecordError(
                f"Size pricing for {size.value} already exists for menu item {menu_item_id}"
            )

        size_pricing = SizePricing(
            menu_item_id=menu_item_id,
            size=size.value,
            price_modifier=price_modifier,
        )
        self.db.add(size_pricing)
        await self.db.commit()
        await self.db.refresh(size_pricing)
        return size_pricing

    async def list_size_pricing(self, menu_item_id: int) -> List[SizePricing]:
        result = await self.db.execute(
            select(SizePricing)
            .where(SizePricing.menu_item_id == menu_item_id)
            .order_by(SizePricing.id)
        )
        return list(result.scalars().all())
