"""Order Schemas.

Invariants:
    - carIds: 1-10 positive ids
    - totalPrice and orderDate in requests are advisory: the service derives the
      total from car prices and stamps the date; a future orderDate is rejected
"""

from datetime import datetime

from pydantic import Field, PositiveInt

from cardealer.core.domain_types import MAX_CARS_PER_ORDER
from cardealer.schemas.common import ApiModel


class OrderCreate(ApiModel):
    user_id: int = Field(gt=0)
    car_ids: list[PositiveInt] = Field(min_length=1, max_length=MAX_CARS_PER_ORDER)
    order_date: datetime | None = None
    total_price: float | None = None


class OrderUpdate(ApiModel):
    """Partial order update: absent userId/carIds keep the stored values."""
    user_id: int | None = Field(None, gt=0)
    car_ids: list[PositiveInt] | None = Field(
        None, min_length=1, max_length=MAX_CARS_PER_ORDER,
    )
    order_date: datetime | None = None
    total_price: float | None = None


class OrderResponse(ApiModel):
    id: int
    order_date: datetime
    total_price: float
    user_id: int
    car_ids: list[int] = []
