"""FavoriteCar ORM: one row per (user, car) favorite link.

Invariants:
    - Composite primary key (user_id, car_id): a pair is favorited at most once
    - The row is both sides of the many-to-many (user.favorite_cars and
      car.users_who_favorited are projections of this table)
"""

from datetime import datetime, timezone

from sqlalchemy import Integer, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from cardealer.db.base import Base


class FavoriteCar(Base):
    """User-to-car favorite link."""
    __tablename__ = "user_favorite_cars"

    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True,
    )
    car_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("cars.id", ondelete="CASCADE"), primary_key=True,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
