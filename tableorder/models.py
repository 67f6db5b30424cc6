"""
SQLAlchemy Database Models

Five tables: customers (users), the menu, orders, order line items and
admins. Order owns its OrderItem rows; the user and menu references are
plain foreign keys.
"""

import enum
from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, Enum, Float, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from tableorder.database import Base

# Largest value an Integer primary key can hold on PostgreSQL (int4)
MAX_ID = 2**31 - 1


def is_storable_id(value: int) -> bool:
    return 1 <= value <= MAX_ID


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class OrderStatus(str, enum.Enum):
    """Order status workflow."""
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class PaymentStatus(str, enum.Enum):
    """Manually set payment label."""
    UNPAID = "unpaid"
    PAID = "paid"
    REFUNDED = "refunded"


class User(Base):
    """A customer seated at a table."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    table_number = Column(Integer, nullable=False)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    def __repr__(self):
        return f"<User #{self.id} - {self.email} - table {self.table_number}>"


class Menu(Base):
    """A menu entry that customers can order while it is available."""
    __tablename__ = "menus"
    # Deleted menu ids are never handed out again, so order items that
    # referenced them cannot be re-pointed at a new entry
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(100), nullable=False, index=True)
    image_url = Column(String(500), nullable=False, default="")
    type = Column(String(50), nullable=False, default="")
    price = Column(Float, nullable=False)
    available = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    def __repr__(self):
        return f"<Menu #{self.id} - {self.name} - {self.price}>"


class Order(Base):
    """
    A customer order.

    total_price is the sum of the line prices at creation time and is
    never recomputed from the current menu.
    """
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    status = Column(
        Enum(OrderStatus),
        default=OrderStatus.PENDING,
        nullable=False,
        index=True
    )
    payment_status = Column(
        Enum(PaymentStatus),
        default=PaymentStatus.UNPAID,
        nullable=False
    )
    total_price = Column(Float, nullable=False, default=0.0)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    user = relationship("User", lazy="selectin")
    items = relationship(
        "OrderItem",
        back_populates="order",
        lazy="selectin",
        order_by="OrderItem.id",
        cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<Order #{self.id} - user {self.user_id} - {self.status.value}>"


class OrderItem(Base):
    """
    One line of an order.

    price is the snapshot menu.price * quantity taken when the order
    was placed.
    """
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    order_id = Column(
        Integer,
        ForeignKey("orders.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    menu_id = Column(Integer, ForeignKey("menus.id", ondelete="SET NULL"), nullable=True)
    quantity = Column(Integer, nullable=False)
    price = Column(Float, nullable=False)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    order = relationship("Order", back_populates="items")
    menu = relationship("Menu", lazy="selectin")

    @property
    def menu_name(self):
        return self.menu.name if self.menu is not None else None

    def __repr__(self):
        return f"<OrderItem #{self.id} - order {self.order_id} - menu {self.menu_id} x{self.quantity}>"


class Admin(Base):
    """Back-office account. Only the bcrypt hash of the password is kept."""
    __tablename__ = "admins"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    username = Column(String(100), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    def __repr__(self):
        return f"<Admin #{self.id} - {self.username}>"
