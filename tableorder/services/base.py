"""
Service Base Class

Every service is constructed around one request-scoped AsyncSession and
shares the same commit-or-rollback handling, so a failed write never
leaves half a change behind in the session.
"""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from tableorder.core.exceptions import Conflict, InternalError

logger = logging.getLogger(__name__)


class BaseService:
    """
    Common plumbing for storage-backed services.

    Attributes:
        session: The AsyncSession all reads and writes go through
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _commit(
        self,
        failure_message: str = "Internal Server Error",
        conflict_message: Optional[str] = None,
    ) -> None:
        """
        Commit the pending unit of work.

        Raises:
            Conflict: A uniqueness constraint was violated and
                conflict_message was given
            InternalError: Any other storage failure
        """
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            if conflict_message is not None:
                raise Conflict(conflict_message) from e
            logger.exception("Integrity error during commit")
            raise InternalError(failure_message) from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.exception("Storage error during commit")
            raise InternalError(failure_message) from e
