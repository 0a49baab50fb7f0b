"""Car ORM: a vehicle in a dealer's inventory.

Invariants:
    - vin is globally unique and immutable after creation
    - dealer_id is required; order_id is null unless the car is in an order
    - Favoriting users live in user_favorite_cars, not on this row
"""

from datetime import datetime, timezone

from sqlalchemy import String, Integer, Float, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from cardealer.db.base import Base


class Car(Base):
    """Car entity."""
    __tablename__ = "cars"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    vin: Mapped[str] = mapped_column(String(17), nullable=False, unique=True)
    model: Mapped[str] = mapped_column(String(50), nullable=False)
    brand: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    price: Mapped[float] = mapped_column(Float, nullable=False)
    color: Mapped[str] = mapped_column(String(30), nullable=False)
    mileage: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    dealer_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("dealers.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    order_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("orders.id", ondelete="SET NULL"),
        nullable=True, index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
