"""Transfer Layer: builds API records from ORM rows, resolving id links by lookup.

Invariants:
    - One query per link kind per batch (no per-row N+1 lookups)
    - Id lists in records are sorted ascending
    - Read-only: never adds, flushes or commits
"""

from collections import defaultdict
from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from cardealer.models.car import Car
from cardealer.models.dealer import Dealer
from cardealer.models.favorite_car import FavoriteCar
from cardealer.models.order import Order
from cardealer.models.user import User
from cardealer.schemas.car import CarResponse
from cardealer.schemas.dealer import DealerResponse
from cardealer.schemas.order import OrderResponse
from cardealer.schemas.user import UserResponse


async def _group(db: AsyncSession, key_col, value_col, keys) -> dict[int, list[int]]:
    grouped: dict[int, list[int]] = defaultdict(list)
    if not keys:
        return grouped
    result = await db.execute(
        select(key_col, value_col).where(key_col.in_(keys)).order_by(value_col),
    )
    for key, value in result.all():
        grouped[key].append(value)
    return grouped


async def car_records(db: AsyncSession, cars: Sequence[Car]) -> list[CarResponse]:
    fans = await _group(
        db, FavoriteCar.car_id, FavoriteCar.user_id, [c.id for c in cars],
    )
    return [
        CarResponse(
            id=car.id,
            vin=car.vin,
            model=car.model,
            brand=car.brand,
            year=car.year,
            price=car.price,
            color=car.color,
            mileage=car.mileage,
            dealer_id=car.dealer_id,
            user_ids_who_favorited=fans.get(car.id, []),
            order_id=car.order_id,
        )
        for car in cars
    ]


async def car_record(db: AsyncSession, car: Car) -> CarResponse:
    return (await car_records(db, [car]))[0]


async def dealer_records(
    db: AsyncSession, dealers: Sequence[Dealer],
) -> list[DealerResponse]:
    """Dealers with their cars embedded."""
    cars_by_dealer: dict[int, list[Car]] = defaultdict(list)
    dealer_ids = [d.id for d in dealers]
    if dealer_ids:
        result = await db.execute(
            select(Car).where(Car.dealer_id.in_(dealer_ids)).order_by(Car.id),
        )
        cars = list(result.scalars().all())
        for record, car in zip(await car_records(db, cars), cars):
            cars_by_dealer[car.dealer_id].append(record)
    return [
        DealerResponse(
            id=dealer.id,
            name=dealer.name,
            address=dealer.address,
            phone_number=dealer.phone_number,
            cars=cars_by_dealer.get(dealer.id, []),
        )
        for dealer in dealers
    ]


async def dealer_record(db: AsyncSession, dealer: Dealer) -> DealerResponse:
    return (await dealer_records(db, [dealer]))[0]


async def order_records(
    db: AsyncSession, orders: Sequence[Order],
) -> list[OrderResponse]:
    members = await _group(db, Car.order_id, Car.id, [o.id for o in orders])
    return [
        OrderResponse(
            id=order.id,
            order_date=order.order_date,
            total_price=order.total_price,
            user_id=order.user_id,
            car_ids=members.get(order.id, []),
        )
        for order in orders
    ]


async def order_record(db: AsyncSession, order: Order) -> OrderResponse:
    return (await order_records(db, [order]))[0]


async def user_records(db: AsyncSession, users: Sequence[User]) -> list[UserResponse]:
    user_ids = [u.id for u in users]
    favorites = await _group(db, FavoriteCar.user_id, FavoriteCar.car_id, user_ids)
    orders = await _group(db, Order.user_id, Order.id, user_ids)
    return [
        UserResponse(
            id=user.id,
            username=user.username,
            favorite_car_ids=favorites.get(user.id, []),
            order_ids=orders.get(user.id, []),
        )
        for user in users
    ]


async def user_record(db: AsyncSession, user: User) -> UserResponse:
    return (await user_records(db, [user]))[0]
