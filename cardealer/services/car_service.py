"""Car Service: inventory CRUD, bulk import, filtering and car teardown.

Invariants:
    - VIN is unique across all cars and immutable after creation
    - A car always references an existing dealer
    - Deleting a car drops its favorites and destroys its containing order
      (the order's other cars are unlinked, not deleted)
    - Partial update: absent fields keep stored values; the merged record is re-validated
"""

import logging
from typing import Sequence

from sqlalchemy import select

from cardealer.core.domain_types import CarId, DealerId, Entity
from cardealer.core.errors import ConflictError, ResourceNotFoundError
from cardealer.core.validate_fields import (
    validate_car,
    validate_id,
    validate_vin_unchanged,
)
from cardealer.models.car import Car
from cardealer.models.dealer import Dealer
from cardealer.schemas.car import CarCreate, CarResponse, CarUpdate
from cardealer.services import transfer
from cardealer.services.base import EntityService

logger = logging.getLogger(__name__)

_CAR_FIELDS = ("vin", "model", "brand", "year", "price", "color", "mileage", "dealer_id")


class CarService(EntityService):
    """Car operations bound to one unit of work."""

    async def list_cars(self) -> list[CarResponse]:
        result = await self.db.execute(select(Car).order_by(Car.id))
        return await transfer.car_records(self.db, result.scalars().all())

    async def get_car(self, car_id: CarId) -> CarResponse:
        return await transfer.car_record(self.db, await self.get_car_or_404(car_id))

    async def get_car_or_404(self, car_id: CarId) -> Car:
        validate_id(Entity.CAR, car_id)
        car = await self.db.get(Car, car_id)
        if car is None:
            raise ResourceNotFoundError(Entity.CAR.value, car_id)
        return car

    async def create_car(self, payload: CarCreate) -> CarResponse:
        data = payload.model_dump()
        validate_car(data, self.now())
        await self._ensure_dealer(data["dealer_id"])
        if await self._vin_exists(data["vin"]):
            raise ConflictError(f"Car already exists with VIN: {data['vin']}")

        car = Car(**{k: data[k] for k in _CAR_FIELDS})
        self.db.add(car)
        await self.db.flush()
        await self.commit()
        logger.info(
            f"Car created: {car.vin}",
            extra={"entity": Entity.CAR.value, "entity_id": car.id},
        )
        return await transfer.car_record(self.db, car)

    async def create_cars_bulk(
        self, payloads: Sequence[CarCreate],
    ) -> list[CarResponse]:
        """All-or-nothing import: every record validated before anything is stored."""
        now = self.now()
        records = [p.model_dump() for p in payloads]
        for data in records:
            validate_car(data, now)

        vins = [data["vin"] for data in records]
        repeated = sorted({vin for vin in vins if vins.count(vin) > 1})
        if repeated:
            raise ConflictError(
                f"Duplicate VIN in request: {', '.join(repeated)}",
            )
        result = await self.db.execute(
            select(Car.vin).where(Car.vin.in_(vins)).order_by(Car.id),
        )
        existing = list(result.scalars().all())
        if existing:
            raise ConflictError(f"Car already exists with VIN: {', '.join(existing)}")

        for dealer_id in dict.fromkeys(data["dealer_id"] for data in records):
            await self._ensure_dealer(dealer_id)

        cars = [Car(**{k: data[k] for k in _CAR_FIELDS}) for data in records]
        self.db.add_all(cars)
        await self.db.flush()
        await self.commit()
        logger.info(f"Bulk import: {len(cars)} car(s) created", extra={"count": len(cars)})
        return await transfer.car_records(self.db, cars)

    async def update_car(self, car_id: CarId, payload: CarUpdate) -> CarResponse:
        car = await self.get_car_or_404(car_id)
        changes = payload.model_dump(exclude_unset=True)
        validate_vin_unchanged(car.vin, changes.get("vin"))

        merged = {field: getattr(car, field) for field in _CAR_FIELDS}
        merged.update(changes)
        validate_car(merged, self.now())
        if merged["dealer_id"] != car.dealer_id:
            await self._ensure_dealer(merged["dealer_id"])

        for field in _CAR_FIELDS:
            setattr(car, field, merged[field])
        await self.db.flush()
        await self.commit()
        logger.info(
            f"Car updated: {sorted(changes)}",
            extra={"entity": Entity.CAR.value, "entity_id": car.id},
        )
        return await transfer.car_record(self.db, car)

    async def delete_car(self, car_id: CarId) -> None:
        car = await self.get_car_or_404(car_id)
        await self.associations.teardown_cars([car.id])
        await self.commit()
        logger.info(
            "Car deleted",
            extra={"entity": Entity.CAR.value, "entity_id": car_id},
        )

    async def filter_cars(
        self,
        min_year: int | None = None,
        max_year: int | None = None,
        max_mileage: float | None = None,
    ) -> list[CarResponse]:
        """Inclusive year range and mileage ceiling; None means unbounded."""
        query = select(Car).order_by(Car.id)
        if min_year is not None:
            query = query.where(Car.year >= min_year)
        if max_year is not None:
            query = query.where(Car.year <= max_year)
        if max_mileage is not None:
            query = query.where(Car.mileage <= max_mileage)
        result = await self.db.execute(query)
        return await transfer.car_records(self.db, result.scalars().all())

    async def _vin_exists(self, vin: str) -> bool:
        result = await self.db.execute(select(Car.id).where(Car.vin == vin))
        return result.first() is not None

    async def _ensure_dealer(self, dealer_id: DealerId) -> None:
        if await self.db.get(Dealer, dealer_id) is None:
            raise ResourceNotFoundError(Entity.DEALER.value, dealer_id)
