from sqlalchemy import func, select

from tableorder.main import create_app
from tableorder.models import Menu, Order, OrderItem, User


async def test_health(client):
    response = await client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "operational"
    assert body["database"] == "healthy"


async def test_root(client):
    response = await client.get("/")

    assert response.status_code == 200
    assert response.json()["health"] == "/health"


async def test_unknown_route_uses_error_shape(client):
    response = await client.get("/nope")

    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}


async def test_demo_data_seeded_on_startup(settings):
    app = create_app(settings.model_copy(update={"seed_demo_data": True}))

    async with app.router.lifespan_context(app):
        async with app.state.db.session() as session:
            menus = await session.scalar(select(func.count(Menu.id)))
            users = await session.scalar(select(func.count(User.id)))
            totals = (await session.execute(select(Order.total_price).order_by(Order.id))).scalars().all()
            items = await session.scalar(select(func.count(OrderItem.id)))

    assert menus == 8
    assert users == 4
    assert totals == [43000, 60000, 38000]
    assert items == 6
