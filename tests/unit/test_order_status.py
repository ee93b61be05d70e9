"""Unit tests for the order status lifecycle."""
import pytest
from datetime import datetime

from sqlalchemy.exc import OperationalError

from cafe.core.enums import OrderStatus, PaymentMethod
from cafe.core.errors import (
    InvalidStatusTransitionError,
    OrderNotFoundError,
    PersistenceError,
)
from cafe.services.ordering.models import CartLineSelection, CreateOrderInput
from cafe.services.ordering.status import can_transition, is_terminal
from cafe.services.persistence.orders import OrderPersistenceService


@pytest.fixture
async def pending_order(order_service, sample_menu):
    return await order_service.create_order(
        CreateOrderInput(
            payment_method=PaymentMethod.CASH,
            items=[CartLineSelection(menu_item_id=sample_menu["coffee"].id, quantity=1)],
        )
    )


class TestStateMachine:
    """Test allowed status transitions."""

    @pytest.mark.parametrize(
        "current,requested",
        [
            (OrderStatus.PENDING, OrderStatus.CONFIRMED),
            (OrderStatus.CONFIRMED, OrderStatus.PREPARING),
            (OrderStatus.PREPARING, OrderStatus.READY),
            (OrderStatus.READY, OrderStatus.COMPLETED),
        ],
    )
    def test_forward_steps(self, current, requested):
        assert can_transition(current, requested) is True

    @pytest.mark.parametrize(
        "current",
        [OrderStatus.PENDING, OrderStatus.CONFIRMED, OrderStatus.PREPARING, OrderStatus.READY],
    )
    def test_cancel_from_non_terminal(self, current):
        assert can_transition(current, OrderStatus.CANCELLED) is True

    @pytest.mark.parametrize("current", [OrderStatus.COMPLETED, OrderStatus.CANCELLED])
    def test_terminal_states_are_final(self, current):
        assert is_terminal(current)
        for requested in OrderStatus:
            assert can_transition(current, requested) is False

    def test_skipping_steps_not_allowed(self):
        assert can_transition(OrderStatus.PENDING, OrderStatus.READY) is False
        assert can_transition(OrderStatus.CONFIRMED, OrderStatus.COMPLETED) is False

    def test_moving_backwards_not_allowed(self):
        assert can_transition(OrderStatus.READY, OrderStatus.PREPARING) is False

    def test_accepts_plain_strings(self):
        assert can_transition("pending", "confirmed") is True


class TestUpdateOrderStatus:
    """Test persisted status updates."""

    @pytest.mark.asyncio
    async def test_full_lifecycle(self, test_db, pending_order):
        service = OrderPersistenceService(test_db)

        for status in ["confirmed", "preparing", "ready", "completed"]:
            order = await service.update_order_status(pending_order.id, status)
            assert order.status == status

    @pytest.mark.asyncio
    async def test_sets_estimated_ready_time(self, test_db, pending_order):
        service = OrderPersistenceService(test_db)
        ready_at = datetime(2026, 10, 19, 9, 30)

        order = await service.update_order_status(
            pending_order.id, OrderStatus.CONFIRMED, estimated_ready_time=ready_at
        )

        assert order.estimated_ready_time == ready_at

    @pytest.mark.asyncio
    async def test_same_status_updates_ready_time(self, test_db, pending_order):
        service = OrderPersistenceService(test_db)
        ready_at = datetime(2026, 10, 19, 9, 45)

        order = await service.update_order_status(
            pending_order.id, OrderStatus.PENDING, estimated_ready_time=ready_at
        )

        assert order.status == "pending"
        assert order.estimated_ready_time == ready_at

    @pytest.mark.asyncio
    async def test_invalid_transition(self, test_db, pending_order):
        service = OrderPersistenceService(test_db)

        with pytest.raises(InvalidStatusTransitionError) as exc_info:
            await service.update_order_status(pending_order.id, OrderStatus.READY)

        assert exc_info.value.current == "pending"
        assert exc_info.value.requested == "ready"

    @pytest.mark.asyncio
    async def test_cancelled_order_cannot_be_reopened(self, test_db, pending_order):
        service = OrderPersistenceService(test_db)
        await service.update_order_status(pending_order.id, OrderStatus.CANCELLED)

        with pytest.raises(InvalidStatusTransitionError):
            await service.update_order_status(pending_order.id, OrderStatus.CONFIRMED)

    @pytest.mark.asyncio
    async def test_unknown_order(self, test_db):
        service = OrderPersistenceService(test_db)

        with pytest.raises(OrderNotFoundError):
            await service.update_order_status(12345, OrderStatus.CONFIRMED)

    @pytest.mark.asyncio
    async def test_storage_failure_becomes_persistence_error(
        self, test_db, pending_order, monkeypatch
    ):
        service = OrderPersistenceService(test_db)
        order_id = pending_order.id

        async def failing_commit():
            raise OperationalError("UPDATE orders", {}, Exception("database is locked"))

        monkeypatch.setattr(test_db, "commit", failing_commit)

        with pytest.raises(PersistenceError) as exc_info:
            await service.update_order_status(order_id, OrderStatus.CONFIRMED)

        assert str(exc_info.value) == f"Failed to update order {order_id} status"
        monkeypatch.undo()
        order = await service.get_order_by_id(order_id)
        assert order.status == "pending"
