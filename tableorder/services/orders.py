"""
Order Workflow

Creates orders from (menu id, quantity) lines and reassembles orders
with their items and owning user for the read paths.

Creation rules:
    1. The user must exist.
    2. Every line is resolved in submission order; a missing menu id
       fails with NotFound, an unavailable menu with Unavailable.
    3. Line price = menu price * quantity, snapshotted on the item.
    4. The order and all of its items are written in one transaction.
       Nothing is written unless every line validated, and a storage
       failure rolls the whole order back.

Read paths always serve the snapshot prices stored on the items.
"""

import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from tableorder.core.exceptions import InvalidInput, NotFound, Unavailable
from tableorder.models import Menu, Order, OrderItem, OrderStatus, PaymentStatus, User, is_storable_id
from tableorder.schemas import OrderCreate
from tableorder.services.base import BaseService

logger = logging.getLogger(__name__)

ORDER_NOT_FOUND = "Order not found"


def _order_query():
    return select(Order).options(
        selectinload(Order.user),
        selectinload(Order.items).selectinload(OrderItem.menu),
    )


class OrderWorkflow(BaseService):
    """Order creation, lookup and admin status changes."""

    async def create_order(self, data: OrderCreate) -> Order:
        """
        Validate and persist an order with its items.

        Returns:
            The stored Order with items (and user) loaded

        Raises:
            NotFound: Unknown user or menu id
            Unavailable: A requested menu is not available
            InternalError: The write failed; nothing was persisted
        """
        user = await self.session.get(User, data.user_id)
        if user is None:
            raise NotFound("User not found")

        items = []
        total_price = 0.0
        for line in data.menu_items:
            menu = await self.session.get(Menu, line.menu_id)
            if menu is None:
                raise NotFound(f"Menu item with ID {line.menu_id} not found")
            if not menu.available:
                raise Unavailable(f"Menu item {menu.name} is not available")

            line_price = menu.price * line.quantity
            total_price += line_price
            items.append(
                OrderItem(
                    menu=menu,
                    menu_id=menu.id,
                    quantity=line.quantity,
                    price=line_price,
                )
            )

        order = Order(
            user_id=user.id,
            status=OrderStatus.PENDING,
            payment_status=PaymentStatus.UNPAID,
            total_price=total_price,
            items=items,
        )
        self.session.add(order)
        await self._commit("Failed to create order")

        logger.info(
            f"Order #{order.id} created for user #{user.id}: "
            f"{len(items)} item(s), total {total_price}"
        )
        return await self.get_order(order.id)

    async def get_order(self, order_id: int) -> Order:
        if not is_storable_id(order_id):
            raise NotFound(ORDER_NOT_FOUND)
        result = await self.session.execute(
            _order_query()
            .where(Order.id == order_id)
            .execution_options(populate_existing=True)
        )
        order = result.scalar_one_or_none()
        if order is None:
            raise NotFound(ORDER_NOT_FOUND)
        return order

    async def list_orders(self) -> List[Order]:
        result = await self.session.execute(_order_query().order_by(Order.id))
        return list(result.scalars().all())

    async def list_user_orders(self, user_id: int) -> List[Order]:
        """Orders placed by one user; an empty list when there are none."""
        if not is_storable_id(user_id):
            return []
        result = await self.session.execute(
            _order_query().where(Order.user_id == user_id).order_by(Order.id)
        )
        return list(result.scalars().all())

    async def update_status(self, order_id: int, status: str) -> Order:
        """
        Raises:
            NotFound: Unknown order id
            InvalidInput: status is not one of OrderStatus
        """
        order = await self.get_order(order_id)
        try:
            new_status = OrderStatus(status)
        except ValueError:
            valid = ", ".join(s.value for s in OrderStatus)
            raise InvalidInput(f"Invalid status. Must be one of: {valid}")

        order.status = new_status
        await self._commit("Failed to update order status")

        logger.info(f"Order #{order_id} status -> {new_status.value}")
        return await self.get_order(order_id)

    async def update_payment_status(self, order_id: int, payment_status: str) -> Order:
        """
        Raises:
            NotFound: Unknown order id
            InvalidInput: payment_status is not one of PaymentStatus
        """
        order = await self.get_order(order_id)
        try:
            new_status = PaymentStatus(payment_status)
        except ValueError:
            valid = ", ".join(s.value for s in PaymentStatus)
            raise InvalidInput(f"Invalid payment status. Must be one of: {valid}")

        order.payment_status = new_status
        await self._commit("Failed to update payment status")

        logger.info(f"Order #{order_id} payment status -> {new_status.value}")
        return await self.get_order(order_id)
