"""
Order Load Simulation Script

Fires concurrent customer orders at a running server to exercise the
order workflow. Run from project root: python scripts/simulate.py

Flow:
    1. Admin login, menu check (creates a few entries if the menu is empty)
    2. Register one customer per simulated table
    3. Send orders concurrently and report totals and timings
"""

import argparse
import asyncio
import random
import sys
import time
import uuid
from datetime import datetime
from typing import Any

import httpx

# Configuration
API_BASE_URL = "http://localhost:8000"
TOTAL_ORDERS = 50

FIRST_NAMES = ["John", "Jane", "Ahmad", "Sarah", "Budi", "Siti", "Mike", "Emma", "Rizki", "Lisa"]

SAMPLE_MENU = [
    {"name": "Nasi Goreng Special", "type": "Main Course", "price": 35000, "available": True},
    {"name": "Mie Goreng", "type": "Main Course", "price": 30000, "available": True},
    {"name": "Es Teh Manis", "type": "Beverage", "price": 8000, "available": True},
    {"name": "Es Jeruk", "type": "Beverage", "price": 10000, "available": True},
]


async def admin_login(client: httpx.AsyncClient, username: str, password: str) -> str:
    response = await client.post(
        f"{API_BASE_URL}/admin/login",
        json={"username": username, "password": password},
    )
    response.raise_for_status()
    return response.json()["token"]


async def ensure_menu(client: httpx.AsyncClient, token: str) -> list[dict[str, Any]]:
    """Return orderable menu entries, creating sample ones if needed."""
    headers = {"Authorization": f"Bearer {token}"}
    response = await client.get(f"{API_BASE_URL}/admin/menu", headers=headers)
    response.raise_for_status()
    menu = [m for m in response.json() if m["available"]]

    if not menu:
        for entry in SAMPLE_MENU:
            created = await client.post(f"{API_BASE_URL}/admin/menu", json=entry, headers=headers)
            created.raise_for_status()
            menu.append(created.json())
    return menu


async def register_customer(client: httpx.AsyncClient, table_number: int) -> int:
    name = random.choice(FIRST_NAMES)
    response = await client.post(
        f"{API_BASE_URL}/users",
        json={
            "name": name,
            "email": f"{name.lower()}.{uuid.uuid4().hex[:8]}@example.com",
            "table_number": table_number,
        },
    )
    response.raise_for_status()
    return response.json()["id"]


def generate_order_payload(user_id: int, menu: list[dict[str, Any]]) -> dict[str, Any]:
    lines = random.sample(menu, k=random.randint(1, min(3, len(menu))))
    return {
        "user_id": user_id,
        "menu_items": [
            {"menu_id": m["id"], "quantity": random.randint(1, 3)} for m in lines
        ],
    }


async def send_order(
    client: httpx.AsyncClient,
    order_num: int,
    payload: dict[str, Any],
) -> dict[str, Any]:
    """Send one order and time it."""
    start_time = time.time()

    try:
        response = await client.post(
            f"{API_BASE_URL}/users/orders",
            json=payload,
            timeout=30.0
        )
        elapsed = round(time.time() - start_time, 3)

        if response.status_code == 201:
            data = response.json()
            return {
                "order_num": order_num,
                "success": True,
                "order_id": data["order"]["id"],
                "total": data["order"]["total_price"],
                "time": elapsed,
            }
        return {
            "order_num": order_num,
            "success": False,
            "error": response.text[:100],
            "time": elapsed,
        }
    except httpx.HTTPError as e:
        elapsed = round(time.time() - start_time, 3)
        return {
            "order_num": order_num,
            "success": False,
            "error": str(e)[:100],
            "time": elapsed,
        }


async def run_simulation(
    num_orders: int,
    num_tables: int,
    username: str,
    password: str,
) -> dict[str, Any]:
    print("=" * 70)
    print("ORDER SIMULATION")
    print("=" * 70)
    print(f"Total Orders: {num_orders}")
    print(f"Tables: {num_tables}")
    print(f"Target: {API_BASE_URL}")
    print(f"Started: {datetime.now().strftime('%H:%M:%S')}")
    print("=" * 70)

    async with httpx.AsyncClient() as client:
        token = await admin_login(client, username, password)
        menu = await ensure_menu(client, token)
        user_ids = [await register_customer(client, t + 1) for t in range(num_tables)]

        start_time = time.time()
        tasks = [
            send_order(client, i + 1, generate_order_payload(random.choice(user_ids), menu))
            for i in range(num_orders)
        ]
        results = await asyncio.gather(*tasks)
        total_time = round(time.time() - start_time, 2)

    successful = [r for r in results if r["success"]]
    failed = [r for r in results if not r["success"]]

    print(f"\nSuccessful Orders: {len(successful)}/{num_orders}")
    print(f"Failed Orders: {len(failed)}/{num_orders}")
    print(f"Total Time: {total_time}s")

    if successful:
        avg_time = round(sum(r["time"] for r in successful) / len(successful), 3)
        print("\nPerformance Metrics:")
        print(f"   Average Response: {avg_time}s")
        print(f"   Fastest: {min(r['time'] for r in successful)}s")
        print(f"   Slowest: {max(r['time'] for r in successful)}s")
        print(f"   Total Revenue: {sum(r['total'] for r in successful):.2f}")

    if failed:
        print("\nFailed Order Details (showing first 5):")
        for f in failed[:5]:
            print(f"   Order #{f['order_num']}: {f.get('error', 'Unknown error')}")

    print("=" * 70)

    return {
        "total": num_orders,
        "successful": len(successful),
        "failed": len(failed),
        "total_time": total_time,
    }


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Order Load Simulation")
    parser.add_argument("--orders", type=int, default=TOTAL_ORDERS, help="Number of orders")
    parser.add_argument("--tables", type=int, default=5, help="Number of customers to register")
    parser.add_argument("--username", default="admin", help="Admin username")
    parser.add_argument("--password", default="admin123", help="Admin password")
    parser.add_argument("--url", default=API_BASE_URL, help="Server base URL")
    args = parser.parse_args()

    API_BASE_URL = args.url.rstrip("/")

    try:
        summary = asyncio.run(
            run_simulation(args.orders, args.tables, args.username, args.password)
        )
    except httpx.HTTPError as e:
        print(f"\nSetup failed: {e}")
        sys.exit(1)

    sys.exit(0 if summary["failed"] == 0 else 1)
