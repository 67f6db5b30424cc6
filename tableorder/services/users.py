"""
User Directory

Customer registration. Email addresses are unique; the database
constraint is the source of truth.
"""

import logging

from tableorder.models import User
from tableorder.schemas import UserCreate
from tableorder.services.base import BaseService

logger = logging.getLogger(__name__)


class UserDirectory(BaseService):

    async def create(self, data: UserCreate) -> User:
        """
        Register a customer.

        Raises:
            Conflict: The email address is already registered
        """
        user = User(
            name=data.name,
            email=data.email,
            table_number=data.table_number,
        )
        self.session.add(user)
        await self._commit(
            "Failed to create user",
            conflict_message="Email already registered",
        )
        await self.session.refresh(user)

        logger.info(f"User #{user.id} registered at table {user.table_number}")
        return user
