"""Entity Service Base: session, clock, association maintainer and commit mapping."""

import logging
from datetime import datetime, timezone
from typing import Callable

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from cardealer.core.errors import ConflictError
from cardealer.services.association_maintainer import AssociationMaintainer

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class EntityService:
    """Shared plumbing for CarService, DealerService, OrderService, UserService."""

    def __init__(
        self, db: AsyncSession, clock: Callable[[], datetime] = utcnow,
    ):
        self.db = db
        self.associations = AssociationMaintainer(db)
        self._clock = clock

    def now(self) -> datetime:
        return self._clock()

    async def commit(self) -> None:
        """Commit the unit of work; unique/PK races surface as Conflict."""
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning(f"Commit rejected by constraint: {e.orig}")
            raise ConflictError("Integrity constraint violated") from e
