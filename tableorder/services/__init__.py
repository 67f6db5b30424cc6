"""
                        Services Module

Business logic, one class per concern. Each service is built around a
request-scoped AsyncSession handed in by the routers.

Services:
    - auth: admin login and default admin seeding
    - menu: menu catalog CRUD
    - users: customer registration
    - orders: order creation and order views
"""

from tableorder.services.auth import AdminAuthService
from tableorder.services.menu import MenuCatalog
from tableorder.services.orders import OrderWorkflow
from tableorder.services.users import UserDirectory

__all__ = ["AdminAuthService", "MenuCatalog", "OrderWorkflow", "UserDirectory"]
