"""Unit tests for loading the starter menu."""
import pytest
from decimal import Decimal

import yaml

from cafe.services.menu.repository import MenuRepository
from cafe.services.menu.seed import load_menu_file, seed_menu


class TestMenuSeed:
    """Test seeding an empty catalog from YAML."""

    def test_default_menu_file_parses(self):
        data = load_menu_file()

        names = [c["name"] for c in data["categories"]]
        assert names == ["Coffee", "Tea & Beverages", "Pastries & Snacks"]

    @pytest.mark.asyncio
    async def test_seed_empty_catalog(self, test_db):
        assert await seed_menu(test_db) is True

        repository = MenuRepository(test_db)
        categories = await repository.list_categories()
        assert len(categories) == 3

        items = await repository.list_menu_items(category_id=categories[0].id)
        latte = next(i for i in items if i.name == "Latte")
        assert latte.base_price == Decimal("4.50")
        assert latte.max_extra_shots == 3
        assert await repository.get_size_modifier(latte.id, "small") == Decimal("-0.50")
        assert await repository.get_size_modifier(latte.id, "large") == Decimal("0.75")

    @pytest.mark.asyncio
    async def test_seed_skips_existing_catalog(self, test_db, sample_menu):
        assert await seed_menu(test_db) is False

        categories = await MenuRepository(test_db).list_categories()
        assert [c.name for c in categories] == ["Coffee"]

    @pytest.mark.asyncio
    async def test_seed_custom_file(self, test_db, tmp_path):
        menu_file = tmp_path / "menu.yaml"
        menu_file.write_text(
            yaml.safe_dump(
                {
                    "categories": [
                        {
                            "name": "Cold Drinks",
                            "sort_order": 1,
                            "items": [
                                {
                                    "name": "Cold Brew",
                                    "base_price": 4.00,
                                    "has_size_options": True,
                                    "sizes": {"large": 1.25},
                                }
                            ],
                        }
                    ]
                }
            )
        )

        assert await seed_menu(test_db, menu_file=str(menu_file)) is True

        items = await MenuRepository(test_db).list_menu_items()
        assert [i.name for i in items] == ["Cold Brew"]
        assert items[0].is_available is True
        assert items[0].max_extra_shots == 0
