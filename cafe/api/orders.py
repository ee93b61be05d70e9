"""Order API endpoints."""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from cafe.api.errors import to_http_exception
from cafe.api.schemas import OrderResponse
from cafe.core.dependencies import get_order_persistence, get_order_service
from cafe.core.enums import OrderStatus
from cafe.core.errors import CafeError
from cafe.services.ordering.models import CreateOrderInput, UpdateOrderStatusInput
from cafe.services.ordering.service import OrderService
from cafe.services.persistence.orders import OrderPersistenceService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/api/orders", response_model=OrderResponse, status_code=201)
async def create_order(
    request: Request,
    order_input: CreateOrderInput,
    order_service: OrderService = Depends(get_order_service),
):
    """Place an order from a customer's cart."""
    logger.info(
        f"[CREATE ORDER] Request received - {len(order_input.items)} lines, "
        f"Client: {request.client.host if request.client else 'unknown'}"
    )

    try:
        order = await order_service.create_order(order_input)
    except CafeError as e:
        logger.info(f"[CREATE ORDER] Rejected - {type(e).__name__}: {e}")
        raise to_http_exception(e, "CREATE ORDER")

    logger.info(
        f"[CREATE ORDER] Created order {order.order_number} - total: {order.total_amount}"
    )
    return order


@router.get("/api/orders", response_model=List[OrderResponse])
async def list_orders(
    status: Optional[OrderStatus] = None,
    customer_id: Optional[int] = None,
    limit: int = Query(50, gt=0),
    offset: int = Query(0, ge=0),
    order_persistence: OrderPersistenceService = Depends(get_order_persistence),
):
    """List orders, newest first."""
    logger.debug(
        f"[ORDERS] Listing orders - status: {status}, customer_id: {customer_id}, "
        f"limit: {limit}, offset: {offset}"
    )
    return await order_persistence.list_orders(
        status=status, customer_id=customer_id, limit=limit, offset=offset
    )


@router.get("/api/orders/pending", response_model=List[OrderResponse])
async def list_pending_orders(
    order_persistence: OrderPersistenceService = Depends(get_order_persistence),
):
    return await order_persistence.list_orders(status=OrderStatus.PENDING)


@router.get("/api/orders/preparing", response_model=List[OrderResponse])
async def list_preparing_orders(
    order_persistence: OrderPersistenceService = Depends(get_order_persistence),
):
    return await order_persistence.list_orders(status=OrderStatus.PREPARING)


@router.get("/api/orders/ready", response_model=List[OrderResponse])
async def list_ready_orders(
    order_persistence: OrderPersistenceService = Depends(get_order_persistence),
):
    return await order_persistence.list_orders(status=OrderStatus.READY)


@router.get("/api/orders/number/{order_number}", response_model=OrderResponse)
async def get_order_by_number(
    order_number: str,
    order_persistence: OrderPersistenceService = Depends(get_order_persistence),
):
    """Track an order by the number printed on the customer's receipt."""
    order = await order_persistence.get_order_by_number(order_number)
    if not order:
        raise HTTPException(status_code=404, detail=f"Order {order_number} not found")
    return order


@router.get("/api/orders/{order_id}", response_model=OrderResponse)
async def get_order(
    order_id: int,
    order_persistence: OrderPersistenceService = Depends(get_order_persistence),
):
    """Get a single order with its items."""
    order = await order_persistence.get_order_by_id(order_id)
    if not order:
        raise HTTPException(status_code=404, detail=f"Order with id {order_id} not found")
    return order


@router.patch("/api/orders/{order_id}/status", response_model=OrderResponse)
async def update_order_status(
    order_id: int,
    update: UpdateOrderStatusInput,
    order_persistence: OrderPersistenceService = Depends(get_order_persistence),
):
    """Move an order through its lifecycle."""
    logger.info(f"[ORDER STATUS] Order {order_id} -> {update.status.value}")

    try:
        return await order_persistence.update_order_status(
            order_id, update.status, estimated_ready_time=update.estimated_ready_time
        )
    except CafeError as e:
        logger.info(f"[ORDER STATUS] Rejected - {type(e).__name__}: {e}")
        raise to_http_exception(e, "ORDER STATUS")
