"""Association Maintainer: applies relationship changes to both sides inside one unit of work.

Invariants:
    - Every write to cars.order_id or user_favorite_cars goes through this class
    - Plans come from core/reconcile_associations.py; this class only reads
      snapshots and applies plans (no business decisions of its own)
    - Teardown applies in FK-safe phases, flushing between them:
      favorites -> unlink cars -> delete orders -> delete cars
    - Never commits: the owning service commits or the session rolls back
"""

import logging
from collections import defaultdict
from typing import Iterable, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from cardealer.core.domain_types import CarId, Entity, OrderId, UserId
from cardealer.core.errors import ConflictError, ResourceNotFoundError
from cardealer.core.reconcile_associations import (
    AssociationDelta,
    TeardownPlan,
    diff_members,
    plan_car_teardown,
    plan_order_teardown,
)
from cardealer.models.car import Car
from cardealer.models.favorite_car import FavoriteCar
from cardealer.models.order import Order

logger = logging.getLogger(__name__)


class AssociationMaintainer:
    """Keeps car/order, car/favorite and user/order links mutually consistent."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # ─── Favorites ──────────────────────────────────────────────

    async def add_favorite(self, user_id: UserId, car_id: CarId) -> None:
        if await self.db.get(FavoriteCar, (user_id, car_id)) is not None:
            raise ConflictError("Car is already in favorites")
        self.db.add(FavoriteCar(user_id=user_id, car_id=car_id))
        await self.db.flush()

    async def remove_favorite(self, user_id: UserId, car_id: CarId) -> None:
        link = await self.db.get(FavoriteCar, (user_id, car_id))
        if link is None:
            raise ResourceNotFoundError(
                Entity.CAR.value, car_id, message="Car is not in user's favorites",
            )
        await self.db.delete(link)
        await self.db.flush()

    # ─── Orders ─────────────────────────────────────────────────

    async def attach_cars(self, order_id: OrderId, cars: Sequence[Car]) -> None:
        """Point freshly ordered cars at their order (caller checked claims)."""
        for car in cars:
            car.order_id = order_id
        await self.db.flush()

    async def reconcile_order_cars(
        self, order_id: OrderId, cars: Sequence[Car],
    ) -> AssociationDelta:
        """Make the order's member set equal to cars; returns what changed."""
        current = await self.member_cars(order_id)
        delta = diff_members((c.id for c in current), (c.id for c in cars))
        for car in current:
            if car.id in delta.removed:
                car.order_id = None
        for car in cars:
            if car.id in delta.added:
                car.order_id = order_id
        await self.db.flush()
        logger.info(
            f"Order {order_id} reconciled: +{sorted(delta.added)} -{sorted(delta.removed)}",
            extra={"entity": Entity.ORDER.value, "entity_id": order_id},
        )
        return delta

    async def member_cars(self, order_id: OrderId) -> list[Car]:
        result = await self.db.execute(
            select(Car).where(Car.order_id == order_id).order_by(Car.id),
        )
        return list(result.scalars().all())

    # ─── Cascading teardown ─────────────────────────────────────

    async def teardown_cars(self, car_ids: Iterable[CarId]) -> TeardownPlan:
        """Delete cars with their favorites and containing orders."""
        car_ids = set(car_ids)
        if not car_ids:
            return TeardownPlan()
        result = await self.db.execute(select(Car).where(Car.id.in_(car_ids)))
        order_of = {car.id: car.order_id for car in result.scalars().all()}
        members_of = await self._members_of(
            {o for o in order_of.values() if o is not None},
        )
        plan = plan_car_teardown(car_ids, order_of, members_of)
        await self._apply(plan)
        return plan

    async def teardown_order(self, order_id: OrderId) -> TeardownPlan:
        """Delete one order and unlink all of its cars."""
        plan = plan_order_teardown([order_id], await self._members_of({order_id}))
        await self._apply(plan)
        return plan

    async def teardown_user(self, user_id: UserId) -> TeardownPlan:
        """Drop a user's favorites and delete every order the user placed."""
        await self._delete_favorites(FavoriteCar.user_id == user_id)
        result = await self.db.execute(
            select(Order.id).where(Order.user_id == user_id),
        )
        order_ids = set(result.scalars().all())
        plan = plan_order_teardown(order_ids, await self._members_of(order_ids))
        await self._apply(plan)
        return plan

    async def _members_of(self, order_ids: set[int]) -> dict[int, list[int]]:
        members: dict[int, list[int]] = defaultdict(list)
        if not order_ids:
            return members
        result = await self.db.execute(
            select(Car.id, Car.order_id).where(Car.order_id.in_(order_ids)),
        )
        for car_id, order_id in result.all():
            members[order_id].append(car_id)
        return members

    async def _delete_favorites(self, condition) -> int:
        result = await self.db.execute(select(FavoriteCar).where(condition))
        links = result.scalars().all()
        for link in links:
            await self.db.delete(link)
        return len(links)

    async def _apply(self, plan: TeardownPlan) -> None:
        if plan.cars_to_delete:
            await self._delete_favorites(FavoriteCar.car_id.in_(plan.cars_to_delete))

        if plan.orders_to_delete:
            # Doomed cars are unlinked too so the order rows can go first
            result = await self.db.execute(
                select(Car).where(Car.order_id.in_(plan.orders_to_delete)),
            )
            for car in result.scalars().all():
                car.order_id = None
        await self.db.flush()

        for order_id in plan.orders_to_delete:
            order = await self.db.get(Order, order_id)
            if order is not None:
                await self.db.delete(order)
        await self.db.flush()

        if plan.cars_to_delete:
            result = await self.db.execute(
                select(Car).where(Car.id.in_(plan.cars_to_delete)),
            )
            for car in result.scalars().all():
                await self.db.delete(car)
        await self.db.flush()

        if plan.cars_to_delete or plan.orders_to_delete:
            logger.info(
                f"Teardown: {len(plan.cars_to_delete)} car(s) deleted, "
                f"{len(plan.orders_to_delete)} order(s) deleted, "
                f"{len(plan.cars_to_unlink)} car(s) unlinked",
            )
