"""
Admin Routes

POST /admin/login is public; every other route here sits behind the
bearer-token gate.
"""

from typing import List

from fastapi import APIRouter, Depends

from tableorder.dependencies import (
    get_auth_service,
    get_menu_catalog,
    get_order_workflow,
    require_admin,
)
from tableorder.schemas import (
    AdminLogin,
    ErrorResponse,
    LoginResponse,
    MenuCreate,
    MenuResponse,
    MessageResponse,
    OrderDetailView,
    OrderStatusUpdate,
    PaymentStatusUpdate,
)
from tableorder.services import AdminAuthService, MenuCatalog, OrderWorkflow


router = APIRouter(prefix="/admin", tags=["Admin"])

protected = APIRouter(
    dependencies=[Depends(require_admin)],
    responses={401: {"model": ErrorResponse}},
)


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={401: {"model": ErrorResponse}},
    summary="Admin Login",
)
async def login(
    credentials: AdminLogin,
    auth: AdminAuthService = Depends(get_auth_service),
) -> LoginResponse:
    """Exchange admin credentials for a bearer token."""
    token = await auth.login(credentials.username, credentials.password)
    return LoginResponse(message="Login successful", token=token)


# =============================================================================
# MENU MANAGEMENT
# =============================================================================

@protected.get("/menu", response_model=List[MenuResponse], tags=["Menu"])
async def list_menu(catalog: MenuCatalog = Depends(get_menu_catalog)):
    return await catalog.list_all()


@protected.get(
    "/menu/id/{menu_id}",
    response_model=MenuResponse,
    responses={404: {"model": ErrorResponse}},
    tags=["Menu"],
)
async def get_menu_by_id(menu_id: int, catalog: MenuCatalog = Depends(get_menu_catalog)):
    return await catalog.get_by_id(menu_id)


@protected.get(
    "/menu/name/{name}",
    response_model=MenuResponse,
    responses={404: {"model": ErrorResponse}},
    tags=["Menu"],
    summary="Get First Menu Whose Name Contains",
)
async def get_menu_by_name(name: str, catalog: MenuCatalog = Depends(get_menu_catalog)):
    """Returns only the first (lowest id) match, not every match."""
    return await catalog.get_by_name(name)


@protected.post("/menu", response_model=MenuResponse, status_code=201, tags=["Menu"])
async def create_menu(data: MenuCreate, catalog: MenuCatalog = Depends(get_menu_catalog)):
    return await catalog.create(data)


@protected.put(
    "/menu/id/{menu_id}",
    response_model=MenuResponse,
    responses={404: {"model": ErrorResponse}},
    tags=["Menu"],
)
async def update_menu_by_id(
    menu_id: int,
    data: MenuCreate,
    catalog: MenuCatalog = Depends(get_menu_catalog),
):
    return await catalog.update_by_id(menu_id, data)


@protected.put(
    "/menu/name/{name}",
    response_model=MenuResponse,
    responses={404: {"model": ErrorResponse}},
    tags=["Menu"],
)
async def update_menu_by_name(
    name: str,
    data: MenuCreate,
    catalog: MenuCatalog = Depends(get_menu_catalog),
):
    return await catalog.update_by_name(name, data)


@protected.delete(
    "/menu/id/{menu_id}",
    response_model=MessageResponse,
    responses={404: {"model": ErrorResponse}},
    tags=["Menu"],
)
async def delete_menu_by_id(menu_id: int, catalog: MenuCatalog = Depends(get_menu_catalog)):
    await catalog.delete_by_id(menu_id)
    return MessageResponse(message="Menu deleted successfully")


@protected.delete(
    "/menu/name/{name}",
    response_model=MessageResponse,
    responses={404: {"model": ErrorResponse}},
    tags=["Menu"],
)
async def delete_menu_by_name(name: str, catalog: MenuCatalog = Depends(get_menu_catalog)):
    await catalog.delete_by_name(name)
    return MessageResponse(message="Menu deleted successfully")


# =============================================================================
# ORDER MANAGEMENT
# =============================================================================

@protected.get("/orders", response_model=List[OrderDetailView], tags=["Orders"])
async def list_orders(workflow: OrderWorkflow = Depends(get_order_workflow)):
    orders = await workflow.list_orders()
    return [OrderDetailView.from_order(order) for order in orders]


@protected.get(
    "/orders/{order_id}",
    response_model=OrderDetailView,
    responses={404: {"model": ErrorResponse}},
    tags=["Orders"],
)
async def get_order(order_id: int, workflow: OrderWorkflow = Depends(get_order_workflow)):
    return OrderDetailView.from_order(await workflow.get_order(order_id))


@protected.put(
    "/orders/{order_id}/status",
    response_model=OrderDetailView,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    tags=["Orders"],
)
async def update_order_status(
    order_id: int,
    data: OrderStatusUpdate,
    workflow: OrderWorkflow = Depends(get_order_workflow),
):
    order = await workflow.update_status(order_id, data.status)
    return OrderDetailView.from_order(order)


@protected.put(
    "/orders/{order_id}/payment",
    response_model=OrderDetailView,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    tags=["Orders"],
)
async def update_payment_status(
    order_id: int,
    data: PaymentStatusUpdate,
    workflow: OrderWorkflow = Depends(get_order_workflow),
):
    order = await workflow.update_payment_status(order_id, data.payment_status)
    return OrderDetailView.from_order(order)


router.include_router(protected)
