"""
Pydantic Schemas for Request/Response Validation

Request bodies are validated here; responses are a small fixed set of
named views shared by every handler.
"""

import re
from datetime import datetime
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator

from tableorder.models import MAX_ID, OrderStatus, PaymentStatus

MAX_PRICE = 1_000_000_000
MAX_QUANTITY = 1000


# =============================================================================
# REQUEST SCHEMAS
# =============================================================================

class AdminLogin(BaseModel):
    """Admin credentials."""
    username: str = Field(..., min_length=1, max_length=100, examples=["admin"])
    password: str = Field(..., min_length=1, max_length=72)


class MenuCreate(BaseModel):
    """
    Request schema for creating or fully replacing a menu entry.

    The image reference is accepted as either "image" or "image_url".
    """
    name: str = Field(..., min_length=1, max_length=100, examples=["Es Teh Manis"])
    image_url: str = Field(
        default="",
        max_length=500,
        validation_alias=AliasChoices("image_url", "image"),
        examples=["https://example.com/es-teh.jpg"],
    )
    type: str = Field(default="", max_length=50, examples=["Beverage"])
    price: float = Field(..., ge=0, le=MAX_PRICE, allow_inf_nan=False, examples=[8000])
    available: bool = Field(default=True)


class UserCreate(BaseModel):
    """Customer registration."""
    name: str = Field(..., min_length=1, max_length=100, examples=["Jane Smith"])
    email: str = Field(..., max_length=255, examples=["jane@example.com"])
    table_number: int = Field(..., ge=0, le=MAX_ID, examples=[2])

    @field_validator('email')
    @classmethod
    def validate_email(cls, v: str) -> str:
        v = v.strip()
        if not re.match(r'^[\w\.\+-]+@[\w\.-]+\.\w+$', v):
            raise ValueError('Invalid email format')
        return v


class OrderLineCreate(BaseModel):
    """Single requested line in an order."""
    menu_id: int = Field(..., ge=1, le=MAX_ID, examples=[3])
    quantity: int = Field(..., ge=1, le=MAX_QUANTITY, examples=[2])


class OrderCreate(BaseModel):
    """Request schema for placing an order."""
    user_id: int = Field(..., ge=1, le=MAX_ID, examples=[1])
    menu_items: List[OrderLineCreate] = Field(..., min_length=1)


class OrderStatusUpdate(BaseModel):
    # Checked against OrderStatus by the service once the order is resolved
    status: str = Field(..., examples=["processing"])


class PaymentStatusUpdate(BaseModel):
    payment_status: str = Field(..., examples=["paid"])


# =============================================================================
# RESPONSE SCHEMAS
# =============================================================================

class LoginResponse(BaseModel):
    message: str
    token: str


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str


class MenuResponse(BaseModel):
    """Response schema for a menu entry."""
    id: int
    name: str
    image_url: str
    type: str
    price: float
    available: bool
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class UserResponse(BaseModel):
    id: int
    name: str
    email: str
    table_number: int
    created_at: datetime

    class Config:
        from_attributes = True


class OrderResponse(BaseModel):
    """Order header without its lines."""
    id: int
    user_id: int
    status: OrderStatus
    payment_status: PaymentStatus
    total_price: float
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class OrderItemResponse(BaseModel):
    """Order line with its snapshot price."""
    id: int
    order_id: int
    menu_id: Optional[int]
    menu_name: Optional[str] = None
    quantity: int
    price: float

    class Config:
        from_attributes = True


class OrderView(BaseModel):
    """Order with its items, as seen by the customer."""
    order: OrderResponse
    items: List[OrderItemResponse]

    @classmethod
    def from_order(cls, order) -> "OrderView":
        return cls(
            order=OrderResponse.model_validate(order),
            items=[OrderItemResponse.model_validate(item) for item in order.items],
        )


class OrderDetailView(BaseModel):
    """Order with its owning user and items, as seen by an admin."""
    order: OrderResponse
    user: Optional[UserResponse] = None
    items: List[OrderItemResponse]

    @classmethod
    def from_order(cls, order) -> "OrderDetailView":
        """Build the view from an Order loaded with its user and items."""
        return cls(
            order=OrderResponse.model_validate(order),
            user=UserResponse.model_validate(order.user) if order.user is not None else None,
            items=[OrderItemResponse.model_validate(item) for item in order.items],
        )


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    database: str
    timestamp: datetime
