import pytest


async def test_create_and_get_menu_by_id(client, admin_headers, make_menu):
    created = await make_menu(name="Tea", price=8000)

    assert created["name"] == "Tea"
    assert created["price"] == 8000
    assert created["available"] is True
    assert created["image_url"] == "https://example.com/tea.jpg"

    response = await client.get(f"/admin/menu/id/{created['id']}", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["id"] == created["id"]


async def test_unknown_menu_id_is_not_found(client, admin_headers):
    response = await client.get("/admin/menu/id/999", headers=admin_headers)

    assert response.status_code == 404
    assert response.json() == {"error": "Menu not found"}


async def test_negative_price_is_rejected(client, admin_headers):
    response = await client.post(
        "/admin/menu",
        json={"name": "Free Lunch", "type": "Main Course", "price": -1, "available": True},
        headers=admin_headers,
    )

    assert response.status_code == 400
    assert "price" in response.json()["error"]


@pytest.mark.parametrize("price", ["Infinity", "-Infinity", "NaN", "1e400"])
async def test_non_finite_price_is_rejected(client, admin_headers, price):
    # Sent raw since httpx refuses to serialize non-finite floats
    response = await client.post(
        "/admin/menu",
        content=f'{{"name": "Endless Soup", "price": {price}}}',
        headers={**admin_headers, "Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert "price" in response.json()["error"]

    listing = await client.get("/admin/menu", headers=admin_headers)
    assert listing.json() == []


async def test_menu_id_beyond_storable_range_is_not_found(client, admin_headers):
    huge = "99999999999999999999"

    fetched = await client.get(f"/admin/menu/id/{huge}", headers=admin_headers)
    updated = await client.put(
        f"/admin/menu/id/{huge}",
        json={"name": "Tea", "price": 8000},
        headers=admin_headers,
    )
    deleted = await client.delete(f"/admin/menu/id/{huge}", headers=admin_headers)

    assert fetched.status_code == 404
    assert fetched.json() == {"error": "Menu not found"}
    assert updated.status_code == 404
    assert deleted.status_code == 404


async def test_list_menu_admin_and_customer(client, admin_headers, make_menu):
    await make_menu(name="Mie Goreng", price=30000)
    await make_menu(name="Es Jeruk", price=10000, available=False)

    admin_view = await client.get("/admin/menu", headers=admin_headers)
    customer_view = await client.get("/users/menu")

    assert [m["name"] for m in admin_view.json()] == ["Mie Goreng", "Es Jeruk"]
    assert customer_view.status_code == 200
    assert customer_view.json() == admin_view.json()


async def test_get_by_name_returns_first_substring_match_only(client, admin_headers, make_menu):
    first = await make_menu(name="nasi goreng special", price=35000)
    await make_menu(name="mie goreng", price=30000)

    response = await client.get("/admin/menu/name/goreng", headers=admin_headers)

    assert response.status_code == 200
    body = response.json()
    assert isinstance(body, dict)
    assert body["id"] == first["id"]


async def test_get_by_name_is_case_sensitive(client, admin_headers, make_menu):
    await make_menu(name="Mie Goreng")

    response = await client.get("/admin/menu/name/goreng", headers=admin_headers)

    assert response.status_code == 404


async def test_get_by_name_treats_wildcards_literally(client, admin_headers, make_menu):
    await make_menu(name="Mie Goreng")

    response = await client.get("/admin/menu/name/%25", headers=admin_headers)

    assert response.status_code == 404


async def test_update_by_id_replaces_all_fields(client, admin_headers, make_menu):
    created = await make_menu(name="Tea", price=8000)

    response = await client.put(
        f"/admin/menu/id/{created['id']}",
        json={
            "name": "Iced Tea",
            "image_url": "https://example.com/iced-tea.jpg",
            "type": "Cold Drink",
            "price": 9000,
            "available": False,
        },
        headers=admin_headers,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["id"] == created["id"]
    assert body["name"] == "Iced Tea"
    assert body["image_url"] == "https://example.com/iced-tea.jpg"
    assert body["type"] == "Cold Drink"
    assert body["price"] == 9000
    assert body["available"] is False


async def test_update_by_name_uses_exact_name(client, admin_headers, make_menu):
    await make_menu(name="Sate Ayam", price=25000)
    payload = {"name": "Sate Ayam", "type": "Main Course", "price": 27000, "available": True}

    partial = await client.put("/admin/menu/name/Sate", json=payload, headers=admin_headers)
    exact = await client.put("/admin/menu/name/Sate Ayam", json=payload, headers=admin_headers)

    assert partial.status_code == 404
    assert exact.status_code == 200
    assert exact.json()["price"] == 27000


async def test_update_unknown_menu_is_not_found(client, admin_headers):
    payload = {"name": "X", "type": "Y", "price": 1, "available": True}

    by_id = await client.put("/admin/menu/id/42", json=payload, headers=admin_headers)
    by_name = await client.put("/admin/menu/name/X", json=payload, headers=admin_headers)

    assert by_id.status_code == 404
    assert by_name.status_code == 404


async def test_delete_by_id(client, admin_headers, make_menu):
    created = await make_menu(name="Gado-gado", price=20000)

    response = await client.delete(f"/admin/menu/id/{created['id']}", headers=admin_headers)
    again = await client.delete(f"/admin/menu/id/{created['id']}", headers=admin_headers)

    assert response.status_code == 200
    assert response.json() == {"message": "Menu deleted successfully"}
    assert again.status_code == 404


async def test_delete_by_name(client, admin_headers, make_menu):
    await make_menu(name="Soto Ayam", price=28000)

    response = await client.delete("/admin/menu/name/Soto Ayam", headers=admin_headers)
    listing = await client.get("/admin/menu", headers=admin_headers)

    assert response.status_code == 200
    assert listing.json() == []


async def test_delete_unknown_name_is_not_found(client, admin_headers):
    response = await client.delete("/admin/menu/name/Nothing", headers=admin_headers)

    assert response.status_code == 404
    assert response.json() == {"error": "Menu not found"}
