"""Dealer ORM: a dealership that owns cars.

Invariants:
    - name, address, phone_number are each unique
    - Deleting a dealer deletes its cars (cars.dealer_id ON DELETE CASCADE at DB
      level, explicit teardown in DealerService)
"""

from datetime import datetime, timezone

from sqlalchemy import String, Integer, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from cardealer.db.base import Base


class Dealer(Base):
    """Dealership entity."""
    __tablename__ = "dealers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    address: Mapped[str] = mapped_column(String(200), nullable=False, unique=True)
    phone_number: Mapped[str] = mapped_column(
        String(20), nullable=False, unique=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
