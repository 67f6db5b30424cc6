"""
Admin Authentication Service

Checks admin credentials and issues session tokens. Failed logins get
the same generic message whether or not the username exists.
"""

import logging
from functools import lru_cache
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from tableorder.core.exceptions import Unauthorized
from tableorder.core.security import CredentialService, hash_password, verify_password
from tableorder.models import Admin
from tableorder.services.base import BaseService

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid username or password"


@lru_cache
def _dummy_hash() -> str:
    # Checked against when the username is unknown so both failures cost one bcrypt round
    return hash_password("not-a-real-admin-password")


class AdminAuthService(BaseService):
    """
    Attributes:
        credentials: CredentialService used to sign tokens
    """

    def __init__(self, session: AsyncSession, credentials: CredentialService):
        super().__init__(session)
        self.credentials = credentials

    async def _find_admin(self, username: str) -> Optional[Admin]:
        result = await self.session.execute(select(Admin).where(Admin.username == username))
        return result.scalar_one_or_none()

    async def login(self, username: str, password: str) -> str:
        """
        Authenticate an admin and return a signed token.

        Raises:
            Unauthorized: Unknown username or wrong password
        """
        admin = await self._find_admin(username)
        password_hash = admin.password_hash if admin is not None else _dummy_hash()
        if not verify_password(password, password_hash) or admin is None:
            logger.warning("Failed admin login attempt")
            raise Unauthorized(INVALID_CREDENTIALS)

        logger.info(f"Admin '{admin.username}' logged in")
        return self.credentials.issue_token(admin.username)

    async def create_admin(self, username: str, password: str) -> Admin:
        admin = Admin(username=username, password_hash=hash_password(password))
        self.session.add(admin)
        await self._commit(
            "Failed to create admin",
            conflict_message="Username already exists",
        )
        return admin

    async def ensure_default_admin(self, username: str, password: str) -> bool:
        """
        Seed one admin when the table is empty.

        Returns:
            True if an admin was created
        """
        count = await self.session.scalar(select(func.count(Admin.id)))
        if count:
            return False

        await self.create_admin(username, password)
        logger.info(f"Default admin '{username}' created")
        return True
