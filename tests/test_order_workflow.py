import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from tableorder.core.exceptions import InternalError
from tableorder.models import Menu, Order, OrderItem, User
from tableorder.schemas import OrderCreate, OrderLineCreate
from tableorder.services import OrderWorkflow


@pytest.fixture
async def customer_and_menu(app):
    async with app.state.db.session() as session:
        user = User(name="Jane", email="jane@x.com", table_number=2)
        tea = Menu(name="Tea", image_url="", type="Beverage", price=8000, available=True)
        cake = Menu(name="Cake", image_url="", type="Dessert", price=12000, available=True)
        session.add_all([user, tea, cake])
        await session.commit()
        return user.id, tea.id, cake.id


async def test_failed_write_rolls_back_the_whole_order(app, customer_and_menu, monkeypatch):
    user_id, tea_id, cake_id = customer_and_menu

    async with app.state.db.session() as session:
        workflow = OrderWorkflow(session)

        async def failing_commit(self):
            # Rows reach the database inside the transaction, then the commit fails
            await self.flush()
            raise OperationalError("COMMIT", {}, Exception("connection lost"))

        monkeypatch.setattr(AsyncSession, "commit", failing_commit)

        with pytest.raises(InternalError) as excinfo:
            await workflow.create_order(
                OrderCreate(
                    user_id=user_id,
                    menu_items=[
                        OrderLineCreate(menu_id=tea_id, quantity=2),
                        OrderLineCreate(menu_id=cake_id, quantity=1),
                    ],
                )
            )

    assert excinfo.value.status_code == 500
    assert excinfo.value.message == "Failed to create order"

    async with app.state.db.session() as session:
        assert await session.scalar(select(func.count(Order.id))) == 0
        assert await session.scalar(select(func.count(OrderItem.id))) == 0


async def test_create_order_returns_loaded_order(app, customer_and_menu):
    user_id, tea_id, cake_id = customer_and_menu

    async with app.state.db.session() as session:
        order = await OrderWorkflow(session).create_order(
            OrderCreate(
                user_id=user_id,
                menu_items=[
                    OrderLineCreate(menu_id=cake_id, quantity=1),
                    OrderLineCreate(menu_id=tea_id, quantity=3),
                ],
            )
        )

        assert order.id is not None
        assert order.user.email == "jane@x.com"
        assert [item.menu_name for item in order.items] == ["Cake", "Tea"]
        assert [item.price for item in order.items] == [12000, 24000]
        assert order.total_price == 36000


async def test_list_user_orders_for_unknown_user_is_empty(app):
    async with app.state.db.session() as session:
        assert await OrderWorkflow(session).list_user_orders(4242) == []
