"""Service dependencies: one service per request over the request's session."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from cardealer.infrastructure.database import get_db
from cardealer.services.car_service import CarService
from cardealer.services.dealer_service import DealerService
from cardealer.services.order_service import OrderService
from cardealer.services.user_service import UserService


def get_car_service(db: AsyncSession = Depends(get_db)) -> CarService:
    return CarService(db)


def get_dealer_service(db: AsyncSession = Depends(get_db)) -> DealerService:
    return DealerService(db)


def get_order_service(db: AsyncSession = Depends(get_db)) -> OrderService:
    return OrderService(db)


def get_user_service(db: AsyncSession = Depends(get_db)) -> UserService:
    return UserService(db)
