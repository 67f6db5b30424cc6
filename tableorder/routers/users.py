"""
Customer Routes

Registration, menu browsing and ordering. No authentication.
"""

from typing import List

from fastapi import APIRouter, Depends

from tableorder.dependencies import get_menu_catalog, get_order_workflow, get_user_directory
from tableorder.schemas import (
    ErrorResponse,
    MenuResponse,
    OrderCreate,
    OrderView,
    UserCreate,
    UserResponse,
)
from tableorder.services import MenuCatalog, OrderWorkflow, UserDirectory

router = APIRouter(prefix="/users", tags=["Customers"])


@router.post(
    "",
    response_model=UserResponse,
    status_code=201,
    responses={409: {"model": ErrorResponse}},
    summary="Register Customer",
)
async def create_user(data: UserCreate, users: UserDirectory = Depends(get_user_directory)):
    return await users.create(data)


@router.get("/menu", response_model=List[MenuResponse], summary="Browse Menu")
async def browse_menu(catalog: MenuCatalog = Depends(get_menu_catalog)):
    return await catalog.list_all()


@router.post(
    "/orders",
    response_model=OrderView,
    status_code=201,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    summary="Place Order",
)
async def create_order(data: OrderCreate, workflow: OrderWorkflow = Depends(get_order_workflow)):
    """
    Place an order for a registered customer.

    Line prices are taken from the menu at request time and stored on
    the order items.
    """
    order = await workflow.create_order(data)
    return OrderView.from_order(order)


@router.get("/orders/{user_id}", response_model=List[OrderView], summary="List Own Orders")
async def list_user_orders(user_id: int, workflow: OrderWorkflow = Depends(get_order_workflow)):
    orders = await workflow.list_user_orders(user_id)
    return [OrderView.from_order(order) for order in orders]
