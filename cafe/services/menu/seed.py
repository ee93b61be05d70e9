"""Starter menu loaded from YAML."""
import logging
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from cafe.core.enums import MenuItemSize
from cafe.db.models import MenuCategory, MenuItem, SizePricing

logger = logging.getLogger(__name__)

DEFAULT_MENU_FILE = Path(__file__).parent / "data" / "menu.yaml"

ITEM_FIELDS = (
    "name",
    "description",
    "has_size_options",
    "has_milk_options",
    "max_extra_shots",
    "sort_order",
    "image_url",
)


def load_menu_file(menu_file: Optional[str] = None) -> Dict[str, Any]:
    """Read the menu YAML file."""
    path = Path(menu_file) if menu_file else DEFAULT_MENU_FILE
    with open(path, "r") as f:
        return yaml.safe_load(f) or {}


async def seed_menu(db: AsyncSession, menu_file: Optional[str] = None) -> bool:
    """
    Load the starter menu into an empty catalog.

    Does nothing when any category already exists.

    Returns:
        True if the menu was seeded
    """
    existing = await db.execute(select(func.count()).select_from(MenuCategory))
    if existing.scalar_one() > 0:
        logger.info("[MENU SEED] Catalog already has categories, skipping seed")
        return False

    data = load_menu_file(menu_file)
    item_count = 0
    for category_data in data.get("categories", []):
        category = MenuCategory(
            name=category_data["name"],
            description=category_data.get("description"),
            sort_order=category_data.get("sort_order", 0),
            is_active=category_data.get("is_active", True),
        )
        for item_data in category_data.get("items", []):
            item = MenuItem(
                base_price=Decimal(str(item_data["base_price"])),
                is_available=item_data.get("is_available", True),
                **{k: item_data[k] for k in ITEM_FIELDS if k in item_data},
            )
            item.size_pricing = [
                SizePricing(
                    size=MenuItemSize(size).value,
                    price_modifier=Decimal(str(modifier)),
                )
                for size, modifier in (item_data.get("sizes") or {}).items()
            ]
            category.menu_items.append(item)
            item_count += 1
        db.add(category)

    await db.commit()
    logger.info(
        f"[MENU SEED] Seeded {len(data.get('categories', []))} categories, {item_count} items"
    )
    return True
