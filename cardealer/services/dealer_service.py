"""Dealer Service: dealership CRUD, inventory listing and brand lookup.

Invariants:
    - name, phone_number, address are each unique; on update the dealer's own
      current values never count as a clash
    - Deleting a dealer tears down every one of its cars first (favorites,
      containing orders), then removes the dealer
    - Brand lookup is case-insensitive and served by a single query
"""

import logging

from sqlalchemy import func, select

from cardealer.core.domain_types import DealerId, Entity
from cardealer.core.errors import ConflictError, ResourceNotFoundError
from cardealer.core.validate_fields import (
    validate_brand_query,
    validate_dealer,
    validate_id,
)
from cardealer.models.car import Car
from cardealer.models.dealer import Dealer
from cardealer.schemas.car import CarResponse
from cardealer.schemas.dealer import DealerCreate, DealerResponse, DealerUpdate
from cardealer.services import transfer
from cardealer.services.base import EntityService

logger = logging.getLogger(__name__)

_DEALER_FIELDS = ("name", "address", "phone_number")

# Checked in this order; first clash wins
_UNIQUE_FIELDS = (
    ("name", "Dealer with this name already exists"),
    ("phone_number", "Dealer with this phone number already exists"),
    ("address", "Dealer with this address already exists"),
)


class DealerService(EntityService):
    """Dealer operations bound to one unit of work."""

    async def list_dealers(self) -> list[DealerResponse]:
        result = await self.db.execute(select(Dealer).order_by(Dealer.id))
        return await transfer.dealer_records(self.db, result.scalars().all())

    async def get_dealer(self, dealer_id: DealerId) -> DealerResponse:
        dealer = await self.get_dealer_or_404(dealer_id)
        return await transfer.dealer_record(self.db, dealer)

    async def get_dealer_or_404(self, dealer_id: DealerId) -> Dealer:
        validate_id(Entity.DEALER, dealer_id)
        dealer = await self.db.get(Dealer, dealer_id)
        if dealer is None:
            raise ResourceNotFoundError(Entity.DEALER.value, dealer_id)
        return dealer

    async def list_dealer_cars(self, dealer_id: DealerId) -> list[CarResponse]:
        dealer = await self.get_dealer_or_404(dealer_id)
        result = await self.db.execute(
            select(Car).where(Car.dealer_id == dealer.id).order_by(Car.id),
        )
        return await transfer.car_records(self.db, result.scalars().all())

    async def create_dealer(self, payload: DealerCreate) -> DealerResponse:
        data = payload.model_dump()
        validate_dealer(data)
        await self._ensure_unique(data)

        dealer = Dealer(**{k: data[k] for k in _DEALER_FIELDS})
        self.db.add(dealer)
        await self.db.flush()
        await self.commit()
        logger.info(
            f"Dealer created: {dealer.name}",
            extra={"entity": Entity.DEALER.value, "entity_id": dealer.id},
        )
        return await transfer.dealer_record(self.db, dealer)

    async def update_dealer(
        self, dealer_id: DealerId, payload: DealerUpdate,
    ) -> DealerResponse:
        dealer = await self.get_dealer_or_404(dealer_id)
        merged = {field: getattr(dealer, field) for field in _DEALER_FIELDS}
        merged.update(payload.model_dump(exclude_unset=True))
        validate_dealer(merged)
        await self._ensure_unique(merged, exclude_id=dealer.id)

        for field in _DEALER_FIELDS:
            setattr(dealer, field, merged[field])
        await self.db.flush()
        await self.commit()
        logger.info(
            "Dealer updated",
            extra={"entity": Entity.DEALER.value, "entity_id": dealer.id},
        )
        return await transfer.dealer_record(self.db, dealer)

    async def delete_dealer(self, dealer_id: DealerId) -> None:
        dealer = await self.get_dealer_or_404(dealer_id)
        result = await self.db.execute(
            select(Car.id).where(Car.dealer_id == dealer.id),
        )
        plan = await self.associations.teardown_cars(result.scalars().all())
        await self.db.delete(dealer)
        await self.db.flush()
        await self.commit()
        logger.info(
            f"Dealer deleted with {len(plan.cars_to_delete)} car(s)",
            extra={"entity": Entity.DEALER.value, "entity_id": dealer_id},
        )

    async def find_dealers_by_brand(self, brand: str) -> list[DealerResponse]:
        """Dealers owning at least one car of the brand, any letter case."""
        validate_brand_query(brand)
        result = await self.db.execute(
            select(Dealer)
            .where(
                Dealer.id.in_(
                    select(Car.dealer_id).where(
                        func.lower(Car.brand) == brand.lower(),
                    ),
                ),
            )
            .order_by(Dealer.id),
        )
        return await transfer.dealer_records(self.db, result.scalars().all())

    async def _ensure_unique(self, data: dict, exclude_id: int | None = None) -> None:
        for field, message in _UNIQUE_FIELDS:
            column = getattr(Dealer, field)
            query = select(Dealer.id).where(column == data[field])
            if exclude_id is not None:
                query = query.where(Dealer.id != exclude_id)
            if (await self.db.execute(query)).first() is not None:
                raise ConflictError(message)
