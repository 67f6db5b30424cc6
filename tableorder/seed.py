"""
Demo Data

Populates an empty database with a small menu, a few seated customers
and some orders, for local development and demos. Enabled with
SEED_DEMO_DATA=true; skipped when the menu already has entries.
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from tableorder.models import Menu, Order, OrderItem, OrderStatus, PaymentStatus, User

logger = logging.getLogger(__name__)

DEMO_MENU = [
    {"name": "Nasi Goreng Special", "type": "Main Course", "price": 35000,
     "image_url": "https://example.com/nasi-goreng.jpg"},
    {"name": "Mie Goreng", "type": "Main Course", "price": 30000,
     "image_url": "https://example.com/mie-goreng.jpg"},
    {"name": "Es Teh Manis", "type": "Beverage", "price": 8000,
     "image_url": "https://example.com/es-teh.jpg"},
    {"name": "Juice Alpukat", "type": "Beverage", "price": 15000,
     "image_url": "https://example.com/juice-alpukat.jpg"},
    {"name": "Sate Ayam", "type": "Main Course", "price": 25000,
     "image_url": "https://example.com/sate-ayam.jpg"},
    {"name": "Gado-gado", "type": "Main Course", "price": 20000,
     "image_url": "https://example.com/gado-gado.jpg"},
    {"name": "Soto Ayam", "type": "Main Course", "price": 28000,
     "image_url": "https://example.com/soto-ayam.jpg"},
    {"name": "Es Jeruk", "type": "Beverage", "price": 10000,
     "image_url": "https://example.com/es-jeruk.jpg"},
]

DEMO_USERS = [
    {"name": "John Doe", "email": "john@example.com", "table_number": 1},
    {"name": "Jane Smith", "email": "jane@example.com", "table_number": 2},
    {"name": "Ahmad Rizki", "email": "ahmad@example.com", "table_number": 3},
    {"name": "Sarah Wilson", "email": "sarah@example.com", "table_number": 4},
]

# (user index, status, payment status, [(menu index, quantity), ...])
DEMO_ORDERS = [
    (0, OrderStatus.COMPLETED, PaymentStatus.PAID, [(0, 1), (2, 1)]),
    (1, OrderStatus.PENDING, PaymentStatus.UNPAID, [(4, 2), (7, 1)]),
    (2, OrderStatus.PROCESSING, PaymentStatus.PAID, [(1, 1), (2, 1)]),
]


async def seed_demo_data(session: AsyncSession) -> bool:
    """
    Insert the demo rows in a single transaction.

    Returns:
        True if data was inserted, False if the menu was not empty
    """
    existing = await session.scalar(select(func.count(Menu.id)))
    if existing:
        logger.info("Menu already populated, skipping demo data")
        return False

    menus = [Menu(available=True, **row) for row in DEMO_MENU]
    users = [User(**row) for row in DEMO_USERS]
    session.add_all(menus + users)
    await session.flush()

    for user_index, status, payment_status, lines in DEMO_ORDERS:
        items = [
            OrderItem(
                menu=menus[menu_index],
                menu_id=menus[menu_index].id,
                quantity=quantity,
                price=menus[menu_index].price * quantity,
            )
            for menu_index, quantity in lines
        ]
        session.add(
            Order(
                user_id=users[user_index].id,
                status=status,
                payment_status=payment_status,
                total_price=sum(item.price for item in items),
                items=items,
            )
        )

    await session.commit()
    logger.info(
        f"Demo data seeded: {len(menus)} menu items, "
        f"{len(users)} users, {len(DEMO_ORDERS)} orders"
    )
    return True
