"""Order Service: order CRUD with car claims, derived totals and reconciliation.

Invariants:
    - total_price == sum of member car prices after every create/update
      (client-supplied totals are ignored)
    - A car is claimed by at most one order; on update, cars already in this
      order are exempt from the claim check
    - order_date is stamped to "now" on create AND on every update
    - Deleting an order unlinks its cars; the cars survive
"""

import logging
from typing import Sequence

from sqlalchemy import select

from cardealer.core.domain_types import CarId, Entity, OrderId, UserId
from cardealer.core.errors import ConflictError, ResourceNotFoundError
from cardealer.core.reconcile_associations import find_claimed_car, total_price
from cardealer.core.validate_fields import validate_id, validate_order
from cardealer.models.car import Car
from cardealer.models.order import Order
from cardealer.models.user import User
from cardealer.schemas.order import OrderCreate, OrderResponse, OrderUpdate
from cardealer.services import transfer
from cardealer.services.base import EntityService

logger = logging.getLogger(__name__)


class OrderService(EntityService):
    """Order operations bound to one unit of work."""

    async def list_orders(self) -> list[OrderResponse]:
        result = await self.db.execute(select(Order).order_by(Order.id))
        return await transfer.order_records(self.db, result.scalars().all())

    async def get_order(self, order_id: OrderId) -> OrderResponse:
        order = await self.get_order_or_404(order_id)
        return await transfer.order_record(self.db, order)

    async def get_order_or_404(self, order_id: OrderId) -> Order:
        validate_id(Entity.ORDER, order_id)
        order = await self.db.get(Order, order_id)
        if order is None:
            raise ResourceNotFoundError(Entity.ORDER.value, order_id)
        return order

    async def create_order(self, payload: OrderCreate) -> OrderResponse:
        now = self.now()
        validate_order(payload.user_id, payload.car_ids, now, payload.order_date)
        await self._ensure_user(payload.user_id)
        cars = await self._resolve_cars(payload.car_ids)
        self._reject_claimed(cars)

        order = Order(
            user_id=payload.user_id,
            order_date=now,
            total_price=total_price(car.price for car in cars),
        )
        self.db.add(order)
        await self.db.flush()
        await self.associations.attach_cars(order.id, cars)
        await self.commit()
        logger.info(
            f"Order created with cars {[c.id for c in cars]}, total {order.total_price}",
            extra={"entity": Entity.ORDER.value, "entity_id": order.id},
        )
        return await transfer.order_record(self.db, order)

    async def update_order(
        self, order_id: OrderId, payload: OrderUpdate,
    ) -> OrderResponse:
        order = await self.get_order_or_404(order_id)
        now = self.now()

        user_id = payload.user_id if payload.user_id is not None else order.user_id
        if payload.car_ids is not None:
            car_ids = list(payload.car_ids)
        else:
            car_ids = [c.id for c in await self.associations.member_cars(order.id)]
        validate_order(user_id, car_ids, now, payload.order_date)
        if user_id != order.user_id:
            await self._ensure_user(user_id)
        cars = await self._resolve_cars(car_ids)
        self._reject_claimed(cars, own_order_id=order.id)

        order.user_id = user_id
        order.total_price = total_price(car.price for car in cars)
        # Re-stamped on every update, not only on creation
        order.order_date = now
        await self.associations.reconcile_order_cars(order.id, cars)
        await self.commit()
        logger.info(
            f"Order updated, total {order.total_price}",
            extra={"entity": Entity.ORDER.value, "entity_id": order.id},
        )
        return await transfer.order_record(self.db, order)

    async def delete_order(self, order_id: OrderId) -> None:
        order = await self.get_order_or_404(order_id)
        await self.associations.teardown_order(order.id)
        await self.commit()
        logger.info(
            "Order deleted",
            extra={"entity": Entity.ORDER.value, "entity_id": order_id},
        )

    async def _ensure_user(self, user_id: UserId) -> None:
        if await self.db.get(User, user_id) is None:
            raise ResourceNotFoundError(Entity.USER.value, user_id)

    async def _resolve_cars(self, car_ids: Sequence[CarId]) -> list[Car]:
        """Load cars in request order; the first missing id is reported."""
        result = await self.db.execute(select(Car).where(Car.id.in_(car_ids)))
        by_id = {car.id: car for car in result.scalars().all()}
        for car_id in car_ids:
            if car_id not in by_id:
                raise ResourceNotFoundError(Entity.CAR.value, car_id)
        return [by_id[car_id] for car_id in car_ids]

    @staticmethod
    def _reject_claimed(cars: Sequence[Car], own_order_id: OrderId | None = None) -> None:
        claimed = find_claimed_car(
            [(car.id, car.order_id) for car in cars], own_order_id,
        )
        if claimed is not None:
            raise ConflictError(f"Car with ID {claimed} is already ordered")
