"""
FastAPI Dependencies

Request-scoped database sessions, service construction and the admin
authentication gate. The Database and CredentialService instances are
built by create_app() and read from app.state, so tests and deployments
can each wire their own.
"""

from typing import AsyncIterator, Optional

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from tableorder.core.exceptions import Unauthorized
from tableorder.core.security import CredentialService
from tableorder.services import AdminAuthService, MenuCatalog, OrderWorkflow, UserDirectory


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """
    Dependency injection for FastAPI routes.
    Yields a database session and ensures cleanup.
    """
    async with request.app.state.db.session() as session:
        yield session


def get_credentials(request: Request) -> CredentialService:
    return request.app.state.credentials


def get_auth_service(
    db: AsyncSession = Depends(get_db),
    credentials: CredentialService = Depends(get_credentials),
) -> AdminAuthService:
    return AdminAuthService(db, credentials)


def get_menu_catalog(db: AsyncSession = Depends(get_db)) -> MenuCatalog:
    return MenuCatalog(db)


def get_user_directory(db: AsyncSession = Depends(get_db)) -> UserDirectory:
    return UserDirectory(db)


def get_order_workflow(db: AsyncSession = Depends(get_db)) -> OrderWorkflow:
    return OrderWorkflow(db)


# =============================================================================
# AUTHENTICATION GATE
# =============================================================================

async def require_admin(
    request: Request,
    authorization: Optional[str] = Header(None),
    credentials: CredentialService = Depends(get_credentials),
) -> str:
    """
    Accept only requests carrying "Authorization: Bearer <token>" with a
    valid admin token.

    The verified username is stored on request.state.admin_username
    and returned to the handler.

    Raises:
        Unauthorized: Header missing or not "<scheme> <token>"
        InvalidToken / TokenExpired: Token rejected by the credential service
    """
    if not authorization:
        raise Unauthorized("Authorization header is required")

    parts = authorization.split(" ")
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise Unauthorized("Invalid token format")

    username = credentials.verify_token(parts[1])
    request.state.admin_username = username
    return username
