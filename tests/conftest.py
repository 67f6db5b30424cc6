import pytest
from httpx import ASGITransport, AsyncClient

from tableorder.core.config import Settings
from tableorder.main import create_app

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "correct-horse"
JWT_SECRET = "test-signing-key"


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'tableorder.db'}",
        jwt_secret=JWT_SECRET,
        default_admin_username=ADMIN_USERNAME,
        default_admin_password=ADMIN_PASSWORD,
        seed_demo_data=False,
    )


@pytest.fixture
async def app(settings):
    app = create_app(settings)
    async with app.router.lifespan_context(app):
        yield app


@pytest.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
async def admin_headers(client):
    response = await client.post(
        "/admin/login",
        json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD},
    )
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
def make_menu(client, admin_headers):
    async def _make_menu(name="Es Teh Manis", price=8000, available=True, type="Beverage"):
        response = await client.post(
            "/admin/menu",
            json={
                "name": name,
                "image": f"https://example.com/{name.lower().replace(' ', '-')}.jpg",
                "type": type,
                "price": price,
                "available": available,
            },
            headers=admin_headers,
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _make_menu


@pytest.fixture
def make_user(client):
    async def _make_user(name="Jane", email="jane@x.com", table_number=2):
        response = await client.post(
            "/users",
            json={"name": name, "email": email, "table_number": table_number},
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _make_user
