"""Order ORM: a purchase of 1-10 cars by one user.

Invariants:
    - user_id is required
    - total_price always equals the sum of prices of cars whose order_id is this id
    - Member cars are found through cars.order_id; there is no order->cars column
"""

from datetime import datetime, timezone

from sqlalchemy import Integer, Float, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from cardealer.db.base import Base


class Order(Base):
    """Order entity."""
    __tablename__ = "orders"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    order_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    total_price: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
