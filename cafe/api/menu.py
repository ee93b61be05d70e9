"""Menu API endpoints."""
import logging
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request
from pydantic import BaseModel, ConfigDict, Field

from cafe.api.errors import to_http_exception
from cafe.api.schemas import Money
from cafe.core.dependencies import get_menu_repository
from cafe.core.enums import MenuItemSize
from cafe.core.errors import CafeError
from cafe.services.menu.repository import MenuRepository

router = APIRouter()
logger = logging.getLogger(__name__)

# Fields a partial update may clear by sending null
NULLABLE_ITEM_FIELDS = {"description", "image_url"}


class CreateCategoryRequest(BaseModel):
    """Menu category creation request."""

    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    sort_order: int = Field(..., ge=0)
    is_active: bool = True


class CategoryResponse(BaseModel):
    """Menu category response model."""

    id: int
    name: str
    description: Optional[str] = None
    sort_order: int
    is_active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CreateMenuItemRequest(BaseModel):
    """Menu item creation request."""

    category_id: int
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    base_price: Decimal = Field(..., gt=0, decimal_places=2)
    is_available: bool = True
    has_size_options: bool = False
    has_milk_options: bool = False
    max_extra_shots: int = Field(0, ge=0)
    sort_order: int = Field(..., ge=0)
    image_url: Optional[str] = None


class UpdateMenuItemRequest(BaseModel):
    """Partial menu item update. Only fields that are sent are changed."""

    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    base_price: Optional[Decimal] = Field(None, gt=0, decimal_places=2)
    is_available: Optional[bool] = None
    has_size_options: Optional[bool] = None
    has_milk_options: Optional[bool] = None
    max_extra_shots: Optional[int] = Field(None, ge=0)
    sort_order: Optional[int] = Field(None, ge=0)
    image_url: Optional[str] = None


class MenuItemResponse(BaseModel):
    """Menu item response model."""

    id: int
    category_id: int
    name: str
    description: Optional[str] = None
    base_price: Money
    is_available: bool
    has_size_options: bool
    has_milk_options: bool
    max_extra_shots: int
    sort_order: int
    image_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CreateSizePricingRequest(BaseModel):
    size: MenuItemSize
    price_modifier: Decimal = Field(..., decimal_places=2)


class SizePricingResponse(BaseModel):
    """Size pricing response model."""

    id: int
    menu_item_id: int
    size: str
    price_modifier: Money
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


@router.post("/api/menu/categories", response_model=CategoryResponse, status_code=201)
async def create_category(
    category: CreateCategoryRequest,
    menu_repository: MenuRepository = Depends(get_menu_repository),
):
    """Create a menu category."""
    try:
        return await menu_repository.create_category(**category.model_dump())
    except CafeError as e:
        raise to_http_exception(e, "MENU")


@router.get("/api/menu/categories", response_model=List[CategoryResponse])
async def list_categories(
    request: Request,
    include_inactive: bool = False,
    menu_repository: MenuRepository = Depends(get_menu_repository),
):
    """List menu categories in display order."""
    logger.info(
        f"[MENU] Categories requested - Client: {request.client.host if request.client else 'unknown'}"
    )
    return await menu_repository.list_categories(active_only=not include_inactive)


@router.post("/api/menu/items", response_model=MenuItemResponse, status_code=201)
async def create_menu_item(
    item: CreateMenuItemRequest,
    menu_repository: MenuRepository = Depends(get_menu_repository),
):
    """Create a menu item."""
    try:
        return await menu_repository.create_menu_item(**item.model_dump())
    except CafeError as e:
        raise to_http_exception(e, "MENU")


@router.get("/api/menu/items", response_model=List[MenuItemResponse])
async def list_menu_items(
    category_id: Optional[int] = None,
    is_available: Optional[bool] = None,
    limit: int = Query(100, gt=0),
    offset: int = Query(0, ge=0),
    menu_repository: MenuRepository = Depends(get_menu_repository),
):
    """List menu items. Customers pass ``is_available=true``."""
    items = await menu_repository.list_menu_items(
        category_id=category_id, is_available=is_available, limit=limit, offset=offset
    )
    logger.debug(f"[MENU] Returning {len(items)} menu items")
    return items


@router.patch("/api/menu/items/{menu_item_id}", response_model=MenuItemResponse)
async def update_menu_item(
    menu_item_id: int,
    update: UpdateMenuItemRequest,
    menu_repository: MenuRepository = Depends(get_menu_repository),
):
    """Update selected fields of a menu item."""
    try:
        updates = {
            field: value
            for field, value in update.model_dump(exclude_unset=True).items()
            if value is not None or field in NULLABLE_ITEM_FIELDS
        }
        return await menu_repository.update_menu_item(menu_item_id, updates)
    except CafeError as e:
        raise to_http_exception(e, "MENU")


@router.post(
    "/api/menu/items/{menu_item_id}/sizes",
    response_model=SizePricingResponse,
    status_code=201,
)
async def create_size_pricing(
    menu_item_id: int,
    size_pricing: CreateSizePricingRequest,
    menu_repository: MenuRepository = Depends(get_menu_repository),
):
    """Add a size price modifier to a menu item."""
    try:
        return await menu_repository.create_size_pricing(
            menu_item_id, size_pricing.size, size_pricing.price_modifier
        )
    except CafeError as e:
        raise to_http_exception(e, "MENU")


@router.get("/api/menu/items/{menu_item_id}/sizes", response_model=List[SizePricingResponse])
async def list_size_pricing(
    menu_item_id: int,
    menu_repository: MenuRepository = Depends(get_menu_repository),
):
    """List the size modifiers of a menu item."""
    return await menu_repository.list_size_pricing(menu_item_id)
